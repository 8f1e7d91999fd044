"""IngestUploadUseCase — full pipeline: parse → normalize → validate → distribute → persist."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import BinaryIO

from app.adapters.tabular.loader import parse_rows
from app.adapters.tabular.normalizer import normalize_row
from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.unit_of_work import UnitOfWork
from app.application.ports.worker_repo import WorkerRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.contact_row import CanonicalRow
from app.domain.policies.distribution import (
    DEFAULT_MAX_ACTIVE_WORKERS,
    DistributionPlan,
    plan_distribution,
)
from app.domain.policies.row_validation import DroppedRow, validate_rows
from app.domain.value_objects.enums import POLICY_BY_KIND, SchemaKind, UploadFormat
from app.domain.value_objects.field_schema import SCHEMAS

logger = logging.getLogger(__name__)

# Serializes distribution runs within the process (ingest, redistribute, clear)
# up to and including their commit.
DISTRIBUTION_LOCK = asyncio.Lock()


@dataclass
class IngestResult:
    """Summary of one ingest-and-distribute run."""

    kind: SchemaKind
    total_rows: int
    total_workers: int
    dropped_rows: int
    dropped: list[DroppedRow] = field(default_factory=list)
    counts_by_worker: dict[int | None, int] = field(default_factory=dict)


class IngestUploadUseCase:
    """Turns one upload into persisted, distributed assignments."""

    def __init__(
        self,
        worker_repo: WorkerRepository,
        assignment_repo: AssignmentRepository,
        uow: UnitOfWork,
        max_active_workers: int = DEFAULT_MAX_ACTIVE_WORKERS,
        encoding: str = "utf-8-sig",
        lock: asyncio.Lock | None = None,
    ):
        self._workers = worker_repo
        self._assignments = assignment_repo
        self._uow = uow
        self._max_active_workers = max_active_workers
        self._encoding = encoding
        self._lock = lock or DISTRIBUTION_LOCK

    async def execute(
        self, stream: BinaryIO, fmt: UploadFormat, kind: SchemaKind
    ) -> IngestResult:
        """Ingest *stream* and distribute its valid rows over the active roster.

        Pipeline:
        1. Parse rows (csv / xlsx)
        2. Normalize headers onto the kind's schema
        3. Validate, dropping incomplete rows
        4. Plan the distribution (balanced partition or round robin)
        5. Persist: call queue replaces + links, generic lists append

        The writes and the commit happen while the run lock is held; any failure
        rolls the whole run back.

        Raises:
            ParseError, EmptyResultError, NoWorkersError, NoRowsError,
            DuplicateKeyError
        """
        schema = SCHEMAS[kind]
        normalized = (normalize_row(raw, schema) for raw in parse_rows(stream, fmt, self._encoding))
        validation = validate_rows(normalized, kind)
        logger.info(
            "Upload (%s, %s): %d valid rows, %d dropped",
            kind.value, fmt.value, len(validation.rows), validation.dropped,
        )

        async with self._lock:
            try:
                await self._uow.acquire_run_lock()
                plan = await self._persist(kind, validation.rows)
                await self._uow.commit()
            except Exception:
                await self._uow.rollback()
                raise

        counts = plan.counts_by_worker()
        logger.info(
            "Distributed %d rows across %d workers (%s): %s",
            plan.total_rows, plan.total_workers, POLICY_BY_KIND[kind].value, counts,
        )
        return IngestResult(
            kind=kind,
            total_rows=plan.total_rows,
            total_workers=plan.total_workers,
            dropped_rows=validation.dropped,
            dropped=validation.dropped_rows,
            counts_by_worker=counts,
        )

    async def _persist(
        self, kind: SchemaKind, rows: list[CanonicalRow]
    ) -> DistributionPlan[Assignment]:
        roster = await self._workers.get_roster()
        assignments = [Assignment.from_row(row, kind) for row in rows]
        plan = plan_distribution(
            assignments, roster, POLICY_BY_KIND[kind], self._max_active_workers
        )

        if kind == SchemaKind.CALL_QUEUE:
            await self._assignments.replace_all(kind, assignments)
            await self._assignments.bulk_link_worker(
                [(assignment.id, worker.id) for assignment, worker in plan.pairs]
            )
            for assignment, worker in plan.pairs:
                assignment.worker_id = worker.id
        else:
            for assignment, worker in plan.pairs:
                assignment.worker_id = worker.id
            await self._assignments.append([assignment for assignment, _ in plan.pairs])
        return plan
