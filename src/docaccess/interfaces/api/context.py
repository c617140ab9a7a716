"""Request helpers shared by resources."""

from uuid import UUID

import falcon.asgi

from docaccess.domain.exceptions import ValidationError
from docaccess.interfaces.api.errors import Unauthorized
from docaccess.interfaces.api.middleware.auth import RequestUser


def current_user(req: falcon.asgi.Request) -> RequestUser:
    user = getattr(req.context, "user", None)
    if not user:
        raise Unauthorized("Unauthorized")
    return user


def parse_uuid(value: object, field: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value!r}") from None


def optional_uuid(value: object, field: str) -> UUID | None:
    return None if value is None else parse_uuid(value, field)


async def read_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
