"""Tests for MarkCompletedUseCase."""

import pytest

from app.application.use_cases.mark_completed import MarkCompletedUseCase
from app.domain.entities.assignment import Assignment
from app.domain.exceptions import NotFoundError
from app.domain.value_objects.enums import AssignmentStatus, SchemaKind


async def _stored(repo, kind=SchemaKind.GENERIC_LIST) -> Assignment:
    (a,) = await repo.append(
        [Assignment(id=None, kind=kind, display_name="A", contact_number="1", ordinal=1)]
    )
    return a


@pytest.mark.asyncio
async def test_pending_becomes_completed(assignment_repo):
    a = await _stored(assignment_repo)
    result = await MarkCompletedUseCase(assignment_repo).execute(a.id)
    assert result.status == AssignmentStatus.COMPLETED
    assert result.already_completed is False
    assert assignment_repo.rows[a.id].status == AssignmentStatus.COMPLETED


@pytest.mark.asyncio
async def test_second_call_is_idempotent(assignment_repo):
    a = await _stored(assignment_repo)
    uc = MarkCompletedUseCase(assignment_repo)
    await uc.execute(a.id)
    result = await uc.execute(a.id)
    assert result.status == AssignmentStatus.COMPLETED
    assert result.already_completed is True


@pytest.mark.asyncio
async def test_missing_id_raises(assignment_repo):
    with pytest.raises(NotFoundError, match="not found"):
        await MarkCompletedUseCase(assignment_repo).execute(99)


@pytest.mark.asyncio
async def test_wrong_kind_counts_as_missing(assignment_repo):
    a = await _stored(assignment_repo, SchemaKind.CALL_QUEUE)
    with pytest.raises(NotFoundError):
        await MarkCompletedUseCase(assignment_repo).execute(a.id, SchemaKind.GENERIC_LIST)
    assert assignment_repo.rows[a.id].status == AssignmentStatus.PENDING
