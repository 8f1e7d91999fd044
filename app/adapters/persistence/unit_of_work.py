"""Session-backed unit of work."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.ports.unit_of_work import UnitOfWork

# Arbitrary application-wide key for pg_advisory_xact_lock
DISTRIBUTION_LOCK_KEY = 0x526F7374


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def acquire_run_lock(self) -> None:
        # Transaction-scoped, so commit/rollback releases it. Other dialects
        # rely on the in-process lock alone.
        if self._s.get_bind().dialect.name == "postgresql":
            await self._s.execute(select(func.pg_advisory_xact_lock(DISTRIBUTION_LOCK_KEY)))

    async def commit(self) -> None:
        await self._s.commit()

    async def rollback(self) -> None:
        await self._s.rollback()
