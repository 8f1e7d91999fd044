"""Tests for listing and clearing assignments."""

import pytest
from conftest import FakeUnitOfWork

from app.application.use_cases.manage_assignments import (
    ClearAssignmentsUseCase,
    ListAssignmentsUseCase,
)
from app.domain.entities.assignment import Assignment
from app.domain.value_objects.enums import SchemaKind


def _item(name, worker_id) -> Assignment:
    return Assignment(
        id=None, kind=SchemaKind.GENERIC_LIST, display_name=name,
        contact_number="1", worker_id=worker_id,
    )


@pytest.mark.asyncio
async def test_by_worker_groups_in_roster_order(worker_repo, assignment_repo):
    await assignment_repo.append([_item("a", 3), _item("b", 1), _item("c", 3)])
    groups = await ListAssignmentsUseCase(worker_repo, assignment_repo).by_worker()

    assert [g.worker.id for g in groups] == [1, 3]
    assert [i.display_name for i in groups[1].items] == ["a", "c"]


@pytest.mark.asyncio
async def test_call_queue_pairs_each_record_with_worker(worker_repo, assignment_repo):
    await assignment_repo.replace_all(
        SchemaKind.CALL_QUEUE,
        [
            Assignment(
                id=None, kind=SchemaKind.CALL_QUEUE, display_name=n, contact_number="1",
                ordinal=o, email_address="x@x.io", worker_id=w,
            )
            for n, o, w in (("second", 2, None), ("first", 1, 2))
        ],
    )
    records = await ListAssignmentsUseCase(worker_repo, assignment_repo).call_queue()
    assert [(r.display_name, w.id if w else None) for r, w in records] == [
        ("first", 2), ("second", None),
    ]


@pytest.mark.asyncio
async def test_clear_removes_only_its_kind(assignment_repo, lock):
    await assignment_repo.append([_item("a", 1)])
    await assignment_repo.replace_all(
        SchemaKind.CALL_QUEUE,
        [Assignment(id=None, kind=SchemaKind.CALL_QUEUE, display_name="c",
                    contact_number="1", ordinal=1, email_address="c@x.io")],
    )
    removed = await ClearAssignmentsUseCase(assignment_repo, FakeUnitOfWork(lock), lock=lock).execute(
        SchemaKind.CALL_QUEUE
    )
    assert removed == 1
    assert len(await assignment_repo.find_all(SchemaKind.GENERIC_LIST)) == 1


@pytest.mark.asyncio
async def test_clear_commits_under_lock(assignment_repo, lock, uow):
    await assignment_repo.append([_item("a", 1)])
    await ClearAssignmentsUseCase(assignment_repo, uow, lock=lock).execute(SchemaKind.GENERIC_LIST)
    assert uow.committed_under_lock == [True]
    assert uow.rollbacks == 0
