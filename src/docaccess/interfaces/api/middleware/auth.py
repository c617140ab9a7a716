"""Auth middleware - resolves the caller from a bearer token or allows anonymous."""

from dataclasses import dataclass

import falcon.asgi
import structlog

logger = structlog.get_logger()


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.user.

    An invalid token leaves ``user`` as None (401 on protected routes); a
    request without Authorization acts as ``anonymous``.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header and bind it to the log context."""
        structlog.contextvars.clear_contextvars()
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            token = auth[7:]
            if self._keycloak:
                user = self._keycloak.decode_token(token)
                if user:
                    req.context.user = RequestUser(
                        user_id=user.user_id,
                        email=user.email,
                        username=user.username,
                    )
                    structlog.contextvars.bind_contextvars(user_id=user.user_id)
                    return
            logger.info("invalid_bearer_token", path=req.path)
            req.context.user = None
        else:
            req.context.user = RequestUser(user_id="anonymous")
            structlog.contextvars.bind_contextvars(user_id="anonymous")
