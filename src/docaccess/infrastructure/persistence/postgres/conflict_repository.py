"""PostgreSQL conflict decision repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Json

from docaccess.domain.entities import ConflictResolution
from docaccess.domain.value_objects import ConflictStatus, ConflictType, ResolutionMode

_COLUMNS = (
    "conflict_id, conflict_type, resource_id, status, mode, resolved_by, resolved_at, "
    "reason, source_ids"
)


def _to_decision(r: tuple) -> ConflictResolution:
    return ConflictResolution(
        conflict_id=r[0],
        conflict_type=ConflictType(r[1]),
        resource_id=r[2],
        status=ConflictStatus(r[3]),
        mode=ResolutionMode(r[4]),
        resolved_by=r[5],
        resolved_at=r[6],
        reason=r[7],
        source_ids=[UUID(s) for s in r[8] or []],
    )


class PostgresConflictRepository:
    """Conflict decision repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, conflict_id: UUID) -> ConflictResolution | None:
        """Get decision by conflict id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM conflict_resolution WHERE conflict_id = %s",
            (conflict_id,),
        )
        r = await cur.fetchone()
        return _to_decision(r) if r else None

    async def list_by_resource(self, resource_id: UUID) -> dict[UUID, ConflictResolution]:
        """Decisions recorded on resource, keyed by conflict id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM conflict_resolution WHERE resource_id = %s",
            (resource_id,),
        )
        rows = await cur.fetchall()
        return {r[0]: _to_decision(r) for r in rows}

    async def save(self, decision: ConflictResolution) -> None:
        """Insert or replace the decision for a conflict id."""
        await self._conn.execute(
            f"INSERT INTO conflict_resolution ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (conflict_id) DO UPDATE SET "
            "conflict_type = EXCLUDED.conflict_type, status = EXCLUDED.status, "
            "mode = EXCLUDED.mode, resolved_by = EXCLUDED.resolved_by, "
            "resolved_at = EXCLUDED.resolved_at, reason = EXCLUDED.reason, "
            "source_ids = EXCLUDED.source_ids",
            (
                decision.conflict_id,
                decision.conflict_type.value,
                decision.resource_id,
                decision.status.value,
                decision.mode.value,
                decision.resolved_by,
                decision.resolved_at,
                decision.reason,
                Json([str(s) for s in decision.source_ids]),
            ),
        )
