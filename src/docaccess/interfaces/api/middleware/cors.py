"""CORS middleware - echoes allowed origins and answers preflight requests."""

import falcon.asgi

_ALLOW_METHODS = "GET, POST, PATCH, DELETE, OPTIONS"
_ALLOW_HEADERS = "Authorization, Content-Type"


class CORSMiddleware:
    """Adds CORS headers for allowed origins; ``*`` allows any origin."""

    def __init__(self, origins: list[str]) -> None:
        self._allow_any = "*" in origins
        self._origins = frozenset(o for o in origins if o != "*")

    def _allowed(self, origin: str | None) -> bool:
        return bool(origin) and (self._allow_any or origin in self._origins)

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit OPTIONS preflight."""
        if req.method == "OPTIONS":
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        origin = req.get_header("Origin")
        resp.append_header("Vary", "Origin")
        if not self._allowed(origin):
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        if req.method == "OPTIONS":
            resp.set_header("Access-Control-Allow-Methods", _ALLOW_METHODS)
            resp.set_header("Access-Control-Allow-Headers", _ALLOW_HEADERS)
            resp.set_header("Access-Control-Max-Age", "86400")
