"""SQLAlchemy repository implementations.

Repositories only flush; the caller owns the transaction, so one
distribution run (delete + insert + link) becomes visible on a single
commit or not at all.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import AssignmentModel, WorkerModel
from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.worker_repo import WorkerRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.worker import Worker
from app.domain.exceptions import DuplicateKeyError
from app.domain.value_objects.enums import AssignmentStatus, SchemaKind
from app.domain.value_objects.field_schema import ORDINAL

# asyncpg caps a statement at 32767 bind parameters
_LINK_CHUNK = 5000

# ─── Mappers ─────────────────────────────────────────────────────────


def _worker_to_domain(m: WorkerModel) -> Worker:
    return Worker(id=m.id, name=m.name, email=m.email, mobile=m.mobile)


def _ordinal_to_domain(value: Decimal | None) -> int | float | None:
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _ordinal_to_model(value: int | float | None) -> Decimal | None:
    if value is None:
        return None
    # repr is the shortest literal that round-trips the float
    return Decimal(value) if isinstance(value, int) else Decimal(repr(value))


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        kind=SchemaKind(m.kind),
        display_name=m.display_name,
        contact_number=m.contact_number,
        ordinal=_ordinal_to_domain(m.ordinal),
        email_address=m.email_address,
        freeform_note=m.freeform_note,
        worker_id=m.worker_id,
        status=AssignmentStatus(m.status),
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


def _assignment_to_model(a: Assignment) -> AssignmentModel:
    return AssignmentModel(
        kind=a.kind.value,
        ordinal=_ordinal_to_model(a.ordinal),
        display_name=a.display_name,
        contact_number=a.contact_number,
        email_address=a.email_address,
        freeform_note=a.freeform_note,
        worker_id=a.worker_id,
        status=a.status.value,
    )


def _check_unique_ordinals(assignments: Sequence[Assignment]) -> None:
    seen: set[tuple[str, int | float]] = set()
    for a in assignments:
        if a.kind != SchemaKind.CALL_QUEUE or a.ordinal is None:
            continue
        # int and float compare exactly, so 3 == 3.0 but 2**53 != 2**53 + 1
        key = (a.kind.value, a.ordinal)
        if key in seen:
            raise DuplicateKeyError(ORDINAL, a.ordinal)
        seen.add(key)


# ─── Repositories ────────────────────────────────────────────────────


class SqlWorkerRepository(WorkerRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, worker: Worker) -> Worker:
        m = WorkerModel(name=worker.name, email=worker.email, mobile=worker.mobile)
        self._s.add(m)
        await self._s.flush()
        return _worker_to_domain(m)

    async def get_by_id(self, worker_id: int) -> Worker | None:
        m = await self._s.get(WorkerModel, worker_id)
        return _worker_to_domain(m) if m else None

    async def get_roster(self) -> list[Worker]:
        result = await self._s.execute(select(WorkerModel).order_by(WorkerModel.id))
        return [_worker_to_domain(m) for m in result.scalars()]

    async def get_by_email_or_mobile(self, email: str, mobile: str) -> Worker | None:
        result = await self._s.execute(
            select(WorkerModel)
            .where(or_(WorkerModel.email == email.lower(), WorkerModel.mobile == mobile))
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _worker_to_domain(m) if m else None


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def _insert(self, assignments: Sequence[Assignment]) -> list[Assignment]:
        _check_unique_ordinals(assignments)
        models = [_assignment_to_model(a) for a in assignments]
        self._s.add_all(models)
        try:
            await self._s.flush()
        except IntegrityError as exc:
            raise DuplicateKeyError(ORDINAL) from exc
        for a, m in zip(assignments, models):
            a.id = m.id
        return list(assignments)

    async def replace_all(self, kind: SchemaKind, assignments: Sequence[Assignment]) -> list[Assignment]:
        await self._s.execute(delete(AssignmentModel).where(AssignmentModel.kind == kind.value))
        return await self._insert(assignments)

    async def append(self, assignments: Sequence[Assignment]) -> list[Assignment]:
        return await self._insert(assignments)

    async def find_all(self, kind: SchemaKind) -> list[Assignment]:
        order = (
            (AssignmentModel.ordinal, AssignmentModel.id)
            if kind == SchemaKind.CALL_QUEUE
            else (AssignmentModel.id,)
        )
        result = await self._s.execute(
            select(AssignmentModel)
            .where(AssignmentModel.kind == kind.value)
            .order_by(*order)
            .execution_options(populate_existing=True)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def find_by_id(self, assignment_id: int) -> Assignment | None:
        result = await self._s.execute(
            select(AssignmentModel)
            .where(AssignmentModel.id == assignment_id)
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        return _assignment_to_domain(m) if m else None

    async def save(self, assignment: Assignment) -> Assignment:
        await self._s.execute(
            update(AssignmentModel)
            .where(AssignmentModel.id == assignment.id)
            .values(status=assignment.status.value)
        )
        await self._s.flush()
        return assignment

    async def bulk_link_worker(self, links: Sequence[tuple[int, int]]) -> None:
        by_worker: dict[int, list[int]] = defaultdict(list)
        for assignment_id, worker_id in links:
            by_worker[worker_id].append(assignment_id)

        for worker_id, ids in by_worker.items():
            for start in range(0, len(ids), _LINK_CHUNK):
                chunk = ids[start:start + _LINK_CHUNK]
                await self._s.execute(
                    update(AssignmentModel)
                    .where(AssignmentModel.id.in_(chunk))
                    .values(worker_id=worker_id)
                )
        await self._s.flush()

    async def clear(self, kind: SchemaKind) -> int:
        result = await self._s.execute(
            delete(AssignmentModel).where(AssignmentModel.kind == kind.value)
        )
        await self._s.flush()
        return result.rowcount or 0
