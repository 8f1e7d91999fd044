"""RedistributeCallQueueUseCase — re-run round robin over the stored call queue."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.unit_of_work import UnitOfWork
from app.application.ports.worker_repo import WorkerRepository
from app.application.use_cases.ingest_upload import DISTRIBUTION_LOCK
from app.domain.policies.distribution import DEFAULT_MAX_ACTIVE_WORKERS, plan_distribution
from app.domain.value_objects.enums import DistributionPolicy, SchemaKind

logger = logging.getLogger(__name__)


@dataclass
class DistributionSummary:
    total_rows: int
    total_workers: int
    counts_by_worker: dict[int | None, int] = field(default_factory=dict)


class RedistributeCallQueueUseCase:
    """Links every stored call-queue row to a worker, ordinal order, cyclically."""

    def __init__(
        self,
        worker_repo: WorkerRepository,
        assignment_repo: AssignmentRepository,
        uow: UnitOfWork,
        max_active_workers: int = DEFAULT_MAX_ACTIVE_WORKERS,
        lock: asyncio.Lock | None = None,
    ):
        self._workers = worker_repo
        self._assignments = assignment_repo
        self._uow = uow
        self._max_active_workers = max_active_workers
        self._lock = lock or DISTRIBUTION_LOCK

    async def execute(self) -> DistributionSummary:
        """Raises NoWorkersError / NoRowsError when there is nothing to do."""
        async with self._lock:
            try:
                await self._uow.acquire_run_lock()
                roster = await self._workers.get_roster()
                records = await self._assignments.find_all(SchemaKind.CALL_QUEUE)
                plan = plan_distribution(
                    records, roster, DistributionPolicy.ROUND_ROBIN, self._max_active_workers
                )
                await self._assignments.bulk_link_worker(
                    [(record.id, worker.id) for record, worker in plan.pairs]
                )
                await self._uow.commit()
            except Exception:
                await self._uow.rollback()
                raise

        logger.info(
            "Redistributed %d call records across %d workers",
            plan.total_rows, plan.total_workers,
        )
        return DistributionSummary(
            total_rows=plan.total_rows,
            total_workers=plan.total_workers,
            counts_by_worker=plan.counts_by_worker(),
        )
