"""Conflict API resources."""

import falcon.asgi

from docaccess.application.use_cases.conflicts.list_conflicts import ListConflictsUseCase
from docaccess.application.use_cases.conflicts.resolve_conflict import ResolveConflictUseCase
from docaccess.domain.entities import SubjectKind
from docaccess.domain.exceptions import PermissionDenied, ValidationError
from docaccess.domain.value_objects import Action
from docaccess.interfaces.api.context import current_user, parse_uuid, read_body
from docaccess.interfaces.api.serializers import conflict_to_dict


class ConflictsResource:
    """GET /v1/resources/{id}/conflicts?subject=&subject_kind=&status= - detect conflicts."""

    def __init__(self, list_conflicts: ListConflictsUseCase, permission_checker) -> None:
        self._list = list_conflicts
        self._permission_checker = permission_checker

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        if not await self._permission_checker.check(user.user_id, res_id, Action.MANAGE):
            raise PermissionDenied("User does not have manage access to resource")

        conflicts = await self._list.execute(
            res_id,
            req.get_param("subject"),
            SubjectKind.parse(req.get_param("subject_kind") or SubjectKind.USER),
        )
        status = req.get_param("status")
        if status:
            conflicts = [c for c in conflicts if c.status.value == status]
        resp.media = {"items": [conflict_to_dict(c) for c in conflicts]}
        resp.status = falcon.HTTP_200


class ConflictResolveResource:
    """POST /v1/resources/{id}/conflicts/{conflict_id}/resolve {mode, reason?}."""

    def __init__(self, resolve_conflict: ResolveConflictUseCase) -> None:
        self._resolve = resolve_conflict

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
        conflict_id: str,
    ) -> None:
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        cid = parse_uuid(conflict_id, "conflict ID")
        body = await read_body(req)
        if "mode" not in body:
            raise ValidationError("Missing required field: 'mode'")

        conflict = await self._resolve.execute(
            user.user_id, res_id, cid, body["mode"], body.get("reason")
        )
        resp.media = conflict_to_dict(conflict)
        resp.status = falcon.HTTP_200
