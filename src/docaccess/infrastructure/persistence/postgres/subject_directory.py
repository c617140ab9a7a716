"""PostgreSQL subject directory - memberships mirrored from the identity provider."""

from collections.abc import Iterable

from psycopg_pool import AsyncConnectionPool

from docaccess.domain.entities import Subject


def _build(subject_id: str, rows: Iterable[tuple[str, str]]) -> Subject:
    roles = frozenset(ref for kind, ref in rows if kind == "role")
    groups = frozenset(ref for kind, ref in rows if kind == "group")
    return Subject(id=subject_id, roles=roles, groups=groups)


class PostgresSubjectDirectory:
    """Reads subject_membership; a subject with no rows is a bare user."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def get(self, subject_id: str) -> Subject | None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "SELECT kind, ref FROM subject_membership WHERE subject_id = %s",
                (subject_id,),
            )
            rows = await cur.fetchall()
        return _build(subject_id, rows)

    async def list_bound(
        self,
        users: Iterable[str],
        roles: Iterable[str],
        groups: Iterable[str],
    ) -> list[Subject]:
        """Users named directly or holding one of roles/groups, with all memberships."""
        users, roles, groups = list(users), list(roles), list(groups)
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                """
                WITH bound AS (
                    SELECT unnest(%s::text[]) AS subject_id
                    UNION
                    SELECT subject_id FROM subject_membership
                    WHERE (kind = 'role' AND ref = ANY(%s))
                       OR (kind = 'group' AND ref = ANY(%s))
                )
                SELECT b.subject_id, m.kind, m.ref
                FROM bound b LEFT JOIN subject_membership m ON m.subject_id = b.subject_id
                ORDER BY b.subject_id
                """,
                (users, roles, groups),
            )
            rows = await cur.fetchall()
        memberships: dict[str, list[tuple[str, str]]] = {}
        for subject_id, kind, ref in rows:
            entries = memberships.setdefault(subject_id, [])
            if kind is not None:
                entries.append((kind, ref))
        return [_build(s, m) for s, m in memberships.items()]
