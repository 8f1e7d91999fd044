"""Read and clear use cases over stored assignments."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.unit_of_work import UnitOfWork
from app.application.ports.worker_repo import WorkerRepository
from app.application.use_cases.ingest_upload import DISTRIBUTION_LOCK
from app.domain.entities.assignment import Assignment
from app.domain.entities.worker import Worker
from app.domain.value_objects.enums import SchemaKind

logger = logging.getLogger(__name__)


@dataclass
class WorkerAssignments:
    worker: Worker
    items: list[Assignment] = field(default_factory=list)


class ListAssignmentsUseCase:
    def __init__(self, worker_repo: WorkerRepository, assignment_repo: AssignmentRepository):
        self._workers = worker_repo
        self._assignments = assignment_repo

    async def call_queue(self) -> list[tuple[Assignment, Worker | None]]:
        """Call-queue rows in ordinal order, each with its worker (if linked)."""
        workers = {w.id: w for w in await self._workers.get_roster()}
        records = await self._assignments.find_all(SchemaKind.CALL_QUEUE)
        return [(r, workers.get(r.worker_id)) for r in records]

    async def by_worker(self, kind: SchemaKind = SchemaKind.GENERIC_LIST) -> list[WorkerAssignments]:
        """Assignments of *kind* grouped per worker, in roster order.

        Unlinked rows and workers without rows are left out.
        """
        groups = {w.id: WorkerAssignments(worker=w) for w in await self._workers.get_roster()}
        for item in await self._assignments.find_all(kind):
            group = groups.get(item.worker_id)
            if group is not None:
                group.items.append(item)
        return [g for g in groups.values() if g.items]


class ClearAssignmentsUseCase:
    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        uow: UnitOfWork,
        lock: asyncio.Lock | None = None,
    ):
        self._assignments = assignment_repo
        self._uow = uow
        self._lock = lock or DISTRIBUTION_LOCK

    async def execute(self, kind: SchemaKind) -> int:
        async with self._lock:
            try:
                await self._uow.acquire_run_lock()
                removed = await self._assignments.clear(kind)
                await self._uow.commit()
            except Exception:
                await self._uow.rollback()
                raise
        logger.info("Cleared %d %s assignments", removed, kind.value)
        return removed
