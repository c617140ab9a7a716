"""PostgreSQL permission source repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Json

from docaccess.domain.entities import PermissionSource
from docaccess.domain.value_objects import Action, SourceKind, TriState

_COLUMNS = (
    "id, resource_id, subject_ref, kind, priority, permissions, active, name, "
    "created_at, created_by"
)


def _to_source(r: tuple) -> PermissionSource:
    return PermissionSource(
        id=r[0],
        resource_id=r[1],
        subject_ref=r[2],
        kind=SourceKind(r[3]),
        priority=r[4],
        permissions={Action(a): TriState(v) for a, v in (r[5] or {}).items()},
        active=r[6],
        name=r[7],
        created_at=r[8],
        created_by=r[9],
    )


def _permissions_json(source: PermissionSource) -> Json:
    return Json({a.value: v.value for a, v in source.permissions.items() if v.specified})


class PostgresSourceRepository:
    """Permission source repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, source_id: UUID) -> PermissionSource | None:
        """Get source by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_source WHERE id = %s",
            (source_id,),
        )
        r = await cur.fetchone()
        return _to_source(r) if r else None

    async def list_by_resource(self, resource_id: UUID) -> list[PermissionSource]:
        """List sources attached to one resource."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_source WHERE resource_id = %s ORDER BY id",
            (resource_id,),
        )
        rows = await cur.fetchall()
        return [_to_source(r) for r in rows]

    async def list_by_resources(
        self, resource_ids: Sequence[UUID]
    ) -> dict[UUID, list[PermissionSource]]:
        """Sources grouped by resource; every requested id gets an entry."""
        result: dict[UUID, list[PermissionSource]] = {i: [] for i in resource_ids}
        if not result:
            return result
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_source WHERE resource_id = ANY(%s) "
            "ORDER BY resource_id, id",
            (list(result),),
        )
        for r in await cur.fetchall():
            source = _to_source(r)
            result[source.resource_id].append(source)
        return result

    async def create(self, source: PermissionSource) -> PermissionSource:
        """Create source."""
        await self._conn.execute(
            f"INSERT INTO permission_source ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                source.id,
                source.resource_id,
                source.subject_ref,
                source.kind.value,
                source.priority,
                _permissions_json(source),
                source.active,
                source.name,
                source.created_at,
                source.created_by,
            ),
        )
        return source

    async def update(self, source: PermissionSource) -> None:
        """Update mutable fields of a source."""
        await self._conn.execute(
            "UPDATE permission_source SET priority=%s, permissions=%s, active=%s, name=%s "
            "WHERE id=%s",
            (
                source.priority,
                _permissions_json(source),
                source.active,
                source.name,
                source.id,
            ),
        )

    async def delete(self, source_id: UUID) -> None:
        """Delete source."""
        await self._conn.execute(
            "DELETE FROM permission_source WHERE id = %s",
            (source_id,),
        )

    async def delete_by_resource(self, resource_id: UUID) -> None:
        """Delete every source attached to resource."""
        await self._conn.execute(
            "DELETE FROM permission_source WHERE resource_id = %s",
            (resource_id,),
        )
