"""Effective permission and what-if simulation API resources."""

import falcon.asgi

from docaccess.application.dto.resource_snapshot import SourceOverride
from docaccess.application.dto.source_input import SourceCreateInput, parse_permissions
from docaccess.application.use_cases.resolution.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from docaccess.application.use_cases.resolution.simulate_permissions import (
    SimulatePermissionsUseCase,
)
from docaccess.domain.entities import SubjectKind
from docaccess.domain.exceptions import PermissionDenied, ValidationError
from docaccess.domain.value_objects import Action
from docaccess.interfaces.api.context import current_user, parse_uuid, read_body
from docaccess.interfaces.api.serializers import conflict_to_dict, effective_to_dict


class EffectivePermissionsResource:
    """GET /v1/resources/{id}/effective-permissions?subject=&subject_kind= - resolve all actions.

    ``subject_kind`` is user (default), role or group. Callers may always
    inspect their own permissions; inspecting any other subject requires
    manage on the resource.
    """

    def __init__(
        self,
        effective_permissions: GetEffectivePermissionsUseCase,
        permission_checker,
    ) -> None:
        self._effective = effective_permissions
        self._permission_checker = permission_checker

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        subject = req.get_param("subject") or user.user_id
        kind = SubjectKind.parse(req.get_param("subject_kind") or SubjectKind.USER)
        is_self = kind is SubjectKind.USER and subject == user.user_id
        if not is_self and not await self._permission_checker.check(
            user.user_id, res_id, Action.MANAGE
        ):
            raise PermissionDenied("User cannot inspect other subjects on this resource")

        effective = await self._effective.execute(subject, res_id, kind)
        resp.media = {
            "subject": subject,
            "subject_kind": kind.value,
            "resource_id": str(res_id),
            "permissions": [effective_to_dict(p) for p in effective],
        }
        resp.status = falcon.HTTP_200


class SimulateResource:
    """POST /v1/resources/{id}/simulate - resolve with hypothetical source edits."""

    def __init__(self, simulate: SimulatePermissionsUseCase, permission_checker) -> None:
        self._simulate = simulate
        self._permission_checker = permission_checker

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        """Body: {subject, subject_kind?, overrides: [{source_id, active?, permissions?}],
        add_sources?}.
        """
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        if not await self._permission_checker.check(user.user_id, res_id, Action.MANAGE):
            raise PermissionDenied("User does not have manage access to resource")

        body = await read_body(req)
        subject = body.get("subject") or user.user_id
        kind = SubjectKind.parse(body.get("subject_kind") or SubjectKind.USER)
        overrides = [_parse_override(o) for o in body.get("overrides", [])]
        extra = [_parse_source(s) for s in body.get("add_sources", [])]

        result = await self._simulate.execute(subject, res_id, overrides, extra, kind)
        resp.media = {
            "subject": result.subject_id,
            "subject_kind": result.subject_kind.value,
            "resource_id": str(result.resource_id),
            "permissions": [effective_to_dict(p) for p in result.effective],
            "conflicts": [conflict_to_dict(c) for c in result.conflicts],
        }
        resp.status = falcon.HTTP_200


def _parse_override(raw: object) -> SourceOverride:
    if not isinstance(raw, dict) or "source_id" not in raw:
        raise ValidationError("Each override needs a source_id")
    active = raw.get("active")
    if active is not None and not isinstance(active, bool):
        raise ValidationError("active must be a boolean")
    return SourceOverride(
        source_id=parse_uuid(raw["source_id"], "source ID"),
        active=active,
        permissions=parse_permissions(raw.get("permissions") or {}),
    )


def _parse_source(raw: object) -> SourceCreateInput:
    if not isinstance(raw, dict):
        raise ValidationError("Each added source must be an object")
    try:
        return SourceCreateInput(
            kind=raw["kind"],
            subject_ref=raw["subject_ref"],
            priority=raw.get("priority", 0),
            permissions=raw.get("permissions") or {},
            template=raw.get("template"),
            name=raw.get("name", ""),
            active=raw.get("active", True),
        )
    except KeyError as e:
        raise ValidationError(f"Missing required field: {e}") from None
