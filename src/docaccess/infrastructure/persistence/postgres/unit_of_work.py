"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from docaccess.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresAuditLog,
)
from docaccess.infrastructure.persistence.postgres.conflict_repository import (
    PostgresConflictRepository,
)
from docaccess.infrastructure.persistence.postgres.resource_repository import (
    PostgresResourceRepository,
)
from docaccess.infrastructure.persistence.postgres.source_repository import (
    PostgresSourceRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction.

    Read-only units run under REPEATABLE READ so a resolution sees one
    consistent snapshot of hierarchy and sources without taking row locks.
    """

    def __init__(self, pool: AsyncConnectionPool, read_only: bool = False) -> None:
        self._pool = pool
        self._read_only = read_only
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        if self._read_only:
            await self._conn.execute(
                "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ READ ONLY"
            )
        self._resources = PostgresResourceRepository(self._conn)
        self._sources = PostgresSourceRepository(self._conn)
        self._conflicts = PostgresConflictRepository(self._conn)
        self._audit = PostgresAuditLog(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def resources(self) -> PostgresResourceRepository:
        return self._resources

    @property
    def sources(self) -> PostgresSourceRepository:
        return self._sources

    @property
    def conflicts(self) -> PostgresConflictRepository:
        return self._conflicts

    @property
    def audit(self) -> PostgresAuditLog:
        return self._audit

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory(read_only: bool = False) -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool, read_only=read_only)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
