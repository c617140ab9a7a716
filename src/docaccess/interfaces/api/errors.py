"""Error rendering - domain exceptions to HTTP responses."""

import falcon
import falcon.asgi
import structlog

from docaccess.domain.exceptions import (
    DocAccessError,
    HierarchyCorrupted,
    HierarchyViolation,
    NotFound,
    PermissionDenied,
    ValidationError,
)

logger = structlog.get_logger()


class Unauthorized(DocAccessError):
    """Request carries no valid identity."""

    code = "unauthorized"


# Most specific class first.
_STATUS = (
    (Unauthorized, falcon.HTTP_401),
    (PermissionDenied, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (HierarchyViolation, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_400),
    (HierarchyCorrupted, falcon.HTTP_500),
)


def status_for(ex: DocAccessError) -> str:
    for cls, status in _STATUS:
        if isinstance(ex, cls):
            return status
    return falcon.HTTP_500


async def handle_docaccess_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: DocAccessError, params
) -> None:
    """Render {"error": code, "message": text}."""
    resp.status = status_for(ex)
    resp.media = {"error": ex.code, "message": str(ex)}
    if resp.status == falcon.HTTP_500:
        logger.error("request_failed", path=req.path, error=ex.code, message=str(ex))


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    logger.exception("unhandled_exception", path=req.path, method=req.method)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "internal_error", "message": "Internal server error"}
