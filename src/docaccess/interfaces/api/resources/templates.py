"""Permission template API resource."""

import falcon.asgi

from docaccess.domain.value_objects import TEMPLATES
from docaccess.interfaces.api.serializers import template_to_dict


class TemplatesResource:
    """GET /v1/templates - built-in permission maps for new sources."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"items": [template_to_dict(t) for t in TEMPLATES.values()]}
        resp.status = falcon.HTTP_200
