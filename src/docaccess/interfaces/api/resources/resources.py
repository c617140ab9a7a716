"""Resource hierarchy API resources."""

import falcon.asgi

from docaccess.application.use_cases.hierarchy.move_resource import (
    MoveResourcesUseCase,
    MoveResourceUseCase,
)
from docaccess.application.use_cases.hierarchy.register_resource import (
    RegisterResourceUseCase,
)
from docaccess.application.use_cases.hierarchy.remove_resource import RemoveResourceUseCase
from docaccess.application.use_cases.inheritance.get_ancestor_chain import (
    GetAncestorChainUseCase,
)
from docaccess.domain.exceptions import PermissionDenied, ValidationError
from docaccess.domain.value_objects import Action
from docaccess.interfaces.api.context import current_user, optional_uuid, parse_uuid, read_body
from docaccess.interfaces.api.serializers import level_to_dict, node_to_dict


class ResourcesResource:
    """POST /v1/resources - register a folder or document."""

    def __init__(self, register_resource: RegisterResourceUseCase) -> None:
        self._register = register_resource

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await read_body(req)
        if "kind" not in body:
            raise ValidationError("Missing required field: 'kind'")
        node = await self._register.execute(
            user.user_id,
            kind=body["kind"],
            name=body.get("name", ""),
            parent_id=optional_uuid(body.get("parent_id"), "parent ID"),
            resource_id=optional_uuid(body.get("id"), "resource ID"),
        )
        resp.media = node_to_dict(node)
        resp.status = falcon.HTTP_201


class ResourceResource:
    """DELETE /v1/resources/{id} - remove a childless node and its sources."""

    def __init__(self, remove_resource: RemoveResourceUseCase) -> None:
        self._remove = remove_resource

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = current_user(req)
        await self._remove.execute(user.user_id, parse_uuid(resource_id, "resource ID"))
        resp.status = falcon.HTTP_204


class MoveResource:
    """POST /v1/resources/{id}/move - reparent one node (null parent makes it a root)."""

    def __init__(self, move_resource: MoveResourceUseCase) -> None:
        self._move = move_resource

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        body = await read_body(req)
        if "new_parent_id" not in body:
            raise ValidationError("Missing required field: 'new_parent_id'")
        new_parent_id = optional_uuid(body["new_parent_id"], "parent ID")

        moved = await self._move.execute(user.user_id, res_id, new_parent_id)
        resp.media = {
            "id": str(res_id),
            "parent_id": str(new_parent_id) if new_parent_id else None,
            "moved": moved is not None,
        }
        resp.status = falcon.HTTP_200


class BulkMoveResource:
    """POST /v1/resources/move - apply several moves atomically."""

    def __init__(self, move_resources: MoveResourcesUseCase) -> None:
        self._move = move_resources

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Body: {moves: [{id, new_parent_id}, ...]}; all succeed or none do."""
        user = current_user(req)
        body = await read_body(req)
        raw_moves = body.get("moves")
        if not isinstance(raw_moves, list) or not raw_moves:
            raise ValidationError("moves must be a non-empty list")
        moves = []
        for m in raw_moves:
            if not isinstance(m, dict) or "id" not in m or "new_parent_id" not in m:
                raise ValidationError("Each move needs id and new_parent_id")
            moves.append(
                (
                    parse_uuid(m["id"], "resource ID"),
                    optional_uuid(m["new_parent_id"], "parent ID"),
                )
            )

        moved = await self._move.execute(user.user_id, moves)
        resp.media = {"moved": [node_to_dict(n) for n in moved]}
        resp.status = falcon.HTTP_200


class AncestorsResource:
    """GET /v1/resources/{id}/ancestors - inheritance chain, nearest first."""

    def __init__(self, ancestor_chain: GetAncestorChainUseCase, permission_checker) -> None:
        self._ancestor_chain = ancestor_chain
        self._permission_checker = permission_checker

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: str,
    ) -> None:
        user = current_user(req)
        res_id = parse_uuid(resource_id, "resource ID")
        if not await self._permission_checker.check(user.user_id, res_id, Action.VIEW):
            raise PermissionDenied("User does not have view access to resource")

        levels = await self._ancestor_chain.execute(res_id)
        resp.media = {
            "resource_id": str(res_id),
            "ancestors": [level_to_dict(level) for level in levels],
        }
        resp.status = falcon.HTTP_200
