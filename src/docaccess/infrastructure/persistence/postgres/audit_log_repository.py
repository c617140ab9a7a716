"""PostgreSQL audit log - entries are written in the mutation's transaction."""

from psycopg import AsyncConnection
from psycopg.types.json import Json

from docaccess.domain.entities import AuditEntry


class PostgresAuditLog:
    """Append-only audit log."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, entry: AuditEntry) -> None:
        await self._conn.execute(
            "INSERT INTO audit_log "
            "(id, action, actor, resource_id, target_id, before, after, reason, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.action,
                entry.actor,
                entry.resource_id,
                entry.target_id,
                Json(entry.before) if entry.before is not None else None,
                Json(entry.after) if entry.after is not None else None,
                entry.reason,
                entry.created_at,
            ),
        )
