"""PostgreSQL resource repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import AsyncConnection

from docaccess.domain.entities import ResourceNode
from docaccess.domain.value_objects import ResourceKind

# Children are derived from parent_id; there is no separate edge table.
_COLUMNS = (
    "r.id, r.kind, r.parent_id, r.name, r.created_at, "
    "ARRAY(SELECT c.id FROM resource c WHERE c.parent_id = r.id)"
)


def _to_node(r: tuple) -> ResourceNode:
    return ResourceNode(
        id=r[0],
        kind=ResourceKind(r[1]),
        parent_id=r[2],
        name=r[3],
        created_at=r[4],
        children=set(r[5] or []),
    )


class PostgresResourceRepository:
    """Resource repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, resource_id: UUID) -> ResourceNode | None:
        """Get resource by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource r WHERE r.id = %s",
            (resource_id,),
        )
        r = await cur.fetchone()
        return _to_node(r) if r else None

    async def get_ancestors(self, resource_id: UUID, limit: int) -> list[ResourceNode]:
        """Ancestors nearest first. The walk stops after limit levels even on a cycle."""
        cur = await self._conn.execute(
            f"""
            WITH RECURSIVE chain(id, depth) AS (
                SELECT parent_id, 1 FROM resource
                WHERE id = %s AND parent_id IS NOT NULL
                UNION ALL
                SELECT p.parent_id, chain.depth + 1
                FROM chain JOIN resource p ON p.id = chain.id
                WHERE p.parent_id IS NOT NULL AND chain.depth < %s
            )
            SELECT {_COLUMNS} FROM chain JOIN resource r ON r.id = chain.id
            ORDER BY chain.depth
            """,
            (resource_id, limit),
        )
        rows = await cur.fetchall()
        return [_to_node(r) for r in rows]

    async def list_descendant_ids(self, resource_id: UUID) -> list[UUID]:
        """All nodes below resource_id."""
        cur = await self._conn.execute(
            """
            WITH RECURSIVE below(id) AS (
                SELECT id FROM resource WHERE parent_id = %s
                UNION
                SELECT r.id FROM resource r JOIN below ON r.parent_id = below.id
            )
            SELECT id FROM below ORDER BY id
            """,
            (resource_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows if r[0] != resource_id]

    async def lock(self, resource_ids: Sequence[UUID]) -> None:
        """SELECT ... FOR UPDATE in id order so concurrent writers cannot deadlock."""
        ids = sorted({i for i in resource_ids if i is not None})
        if not ids:
            return
        await self._conn.execute(
            "SELECT id FROM resource WHERE id = ANY(%s) ORDER BY id FOR UPDATE",
            (ids,),
        )

    async def create(self, node: ResourceNode) -> ResourceNode:
        """Create resource."""
        await self._conn.execute(
            "INSERT INTO resource (id, kind, parent_id, name, created_at) "
            "VALUES (%s, %s, %s, %s, %s)",
            (node.id, node.kind.value, node.parent_id, node.name, node.created_at),
        )
        return node

    async def update_parent(self, node: ResourceNode) -> None:
        """Persist a move."""
        await self._conn.execute(
            "UPDATE resource SET parent_id = %s WHERE id = %s",
            (node.parent_id, node.id),
        )

    async def delete(self, resource_id: UUID) -> None:
        """Delete resource."""
        await self._conn.execute(
            "DELETE FROM resource WHERE id = %s",
            (resource_id,),
        )
