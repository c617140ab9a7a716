"""Permission source API resources."""

import falcon.asgi

from docaccess.application.dto.source_input import SourceCreateInput
from docaccess.application.use_cases.sources.add_source import AddSourceUseCase
from docaccess.application.use_cases.sources.edit_source import (
    DeleteSourceUseCase,
    SetSourceActiveUseCase,
    UpdateSourcePermissionUseCase,
)
from docaccess.domain.exceptions import NotFound, PermissionDenied, ValidationError
from docaccess.domain.value_objects import Action
from docaccess.interfaces.api.context import current_user, parse_uuid, read_body
from docaccess.interfaces.api.serializers import source_to_dict


class ResourceSourcesResource:
    """GET/POST /v1/resources/{id}/sources - list and add stored sources."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        add_source: AddSourceUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._add = add_source

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        """List sources attached directly to the resource."""
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        if not await self._permission_checker.check(user.user_id, res_id, Action.MANAGE):
            raise PermissionDenied("User does not have manage access to resource")

        async with self._uow_factory(read_only=True) as uow:
            if not await uow.resources.get_by_id(res_id):
                raise NotFound("Resource", res_id)
            sources = await uow.sources.list_by_resource(res_id)

        resp.media = {"items": [source_to_dict(s) for s in sources]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        """Add a direct, role or group source; permissions or a template name."""
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        body = await read_body(req)
        try:
            input_data = SourceCreateInput(
                kind=body["kind"],
                subject_ref=body["subject_ref"],
                priority=body.get("priority", 0),
                permissions=body.get("permissions") or {},
                template=body.get("template"),
                name=body.get("name", ""),
                active=body.get("active", True),
            )
        except KeyError as e:
            raise ValidationError(f"Missing required field: {e}") from None

        source = await self._add.execute(user.user_id, res_id, input_data)
        resp.media = source_to_dict(source)
        resp.status = falcon.HTTP_201


class SourceResource:
    """PATCH/DELETE /v1/sources/{id} - toggle, edit per-action values, delete."""

    def __init__(
        self,
        set_active: SetSourceActiveUseCase,
        update_permission: UpdateSourcePermissionUseCase,
        delete_source: DeleteSourceUseCase,
    ) -> None:
        self._set_active = set_active
        self._update_permission = update_permission
        self._delete = delete_source

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        source_id: str,
    ) -> None:
        """Body: {active?: bool, permissions?: {action: allow|deny|unspecified}}.

        Each change is its own audited mutation, applied in body order.
        """
        user = current_user(req)
        src_id = parse_uuid(source_id, "source ID")
        body = await read_body(req)
        active = body.get("active")
        permissions = body.get("permissions") or {}
        if active is not None and not isinstance(active, bool):
            raise ValidationError("active must be a boolean")
        if not isinstance(permissions, dict):
            raise ValidationError("permissions must be an object")
        if active is None and not permissions:
            raise ValidationError("Nothing to update")

        source = None
        if active is not None:
            source = await self._set_active.execute(user.user_id, src_id, active)
        for action, value in permissions.items():
            source = await self._update_permission.execute(user.user_id, src_id, action, value)

        resp.media = source_to_dict(source)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        source_id: str,
    ) -> None:
        user = current_user(req)
        await self._delete.execute(user.user_id, parse_uuid(source_id, "source ID"))
        resp.status = falcon.HTTP_204
