"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
import dataclasses

import pytest

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.unit_of_work import UnitOfWork
from app.application.ports.worker_repo import WorkerRepository
from app.domain.entities.worker import Worker
from app.domain.exceptions import DuplicateKeyError
from app.domain.value_objects.enums import SchemaKind
from app.domain.value_objects.field_schema import ORDINAL

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeWorkerRepo(WorkerRepository):
    def __init__(self, workers: list[Worker] | None = None):
        self.workers: list[Worker] = list(workers or [])

    async def save(self, worker):
        saved = dataclasses.replace(worker, id=len(self.workers) + 1)
        self.workers.append(saved)
        return saved

    async def get_by_id(self, worker_id):
        return next((w for w in self.workers if w.id == worker_id), None)

    async def get_roster(self):
        return sorted(self.workers, key=lambda w: w.id)

    async def get_by_email_or_mobile(self, email, mobile):
        return next(
            (w for w in self.workers if w.email == email.lower() or w.mobile == mobile),
            None,
        )


class FakeAssignmentRepo(AssignmentRepository):
    """Stores copies so callers cannot mutate persisted state by accident."""

    def __init__(self):
        self.rows: dict[int, object] = {}
        self._next_id = 1
        self.link_calls = 0

    def _of_kind(self, kind):
        return [a for a in self.rows.values() if a.kind == kind]

    async def _insert(self, assignments, existing):
        ordinals = {a.ordinal for a in existing if a.ordinal is not None}
        for a in assignments:
            if a.kind == SchemaKind.CALL_QUEUE and a.ordinal is not None:
                if a.ordinal in ordinals:
                    raise DuplicateKeyError(ORDINAL, a.ordinal)
                ordinals.add(a.ordinal)
        for a in assignments:
            a.id = self._next_id
            self._next_id += 1
            self.rows[a.id] = dataclasses.replace(a)
        return list(assignments)

    async def replace_all(self, kind, assignments):
        survivors = {i: a for i, a in self.rows.items() if a.kind != kind}
        inserted = await self._insert(assignments, [])
        self.rows = {**survivors, **{a.id: dataclasses.replace(a) for a in inserted}}
        return inserted

    async def append(self, assignments):
        kind = assignments[0].kind if assignments else None
        return await self._insert(assignments, self._of_kind(kind))

    async def find_all(self, kind):
        found = self._of_kind(kind)
        if kind == SchemaKind.CALL_QUEUE:
            found.sort(key=lambda a: (a.ordinal is None, a.ordinal or 0, a.id))
        else:
            found.sort(key=lambda a: a.id)
        return [dataclasses.replace(a) for a in found]

    async def find_by_id(self, assignment_id):
        a = self.rows.get(assignment_id)
        return dataclasses.replace(a) if a else None

    async def save(self, assignment):
        self.rows[assignment.id].status = assignment.status
        return assignment

    async def bulk_link_worker(self, links):
        self.link_calls += 1
        for assignment_id, worker_id in links:
            self.rows[assignment_id].worker_id = worker_id

    async def clear(self, kind):
        doomed = [i for i, a in self.rows.items() if a.kind == kind]
        for i in doomed:
            del self.rows[i]
        return len(doomed)


class FakeUnitOfWork(UnitOfWork):
    """Counts transaction calls and records whether *lock* was held at commit."""

    def __init__(self, lock: asyncio.Lock | None = None):
        self.lock = lock
        self.run_locks = 0
        self.commits = 0
        self.rollbacks = 0
        self.committed_under_lock: list[bool] = []

    async def acquire_run_lock(self):
        self.run_locks += 1

    async def commit(self):
        self.commits += 1
        if self.lock is not None:
            self.committed_under_lock.append(self.lock.locked())

    async def rollback(self):
        self.rollbacks += 1


def make_roster(n: int) -> list[Worker]:
    return [
        Worker(id=i, name=f"Agent {i}", email=f"agent{i}@example.com", mobile=f"90000000{i:02d}")
        for i in range(1, n + 1)
    ]


# ─── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def roster():
    return make_roster(3)


@pytest.fixture
def worker_repo(roster):
    return FakeWorkerRepo(roster)


@pytest.fixture
def assignment_repo():
    return FakeAssignmentRepo()


@pytest.fixture
def lock():
    return asyncio.Lock()


@pytest.fixture
def uow(lock):
    return FakeUnitOfWork(lock)
