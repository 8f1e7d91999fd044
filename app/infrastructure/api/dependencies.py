"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlWorkerRepository,
)
from app.adapters.persistence.unit_of_work import SqlUnitOfWork
from app.application.use_cases.ingest_upload import IngestUploadUseCase
from app.application.use_cases.manage_assignments import (
    ClearAssignmentsUseCase,
    ListAssignmentsUseCase,
)
from app.application.use_cases.mark_completed import MarkCompletedUseCase
from app.application.use_cases.redistribute import RedistributeCallQueueUseCase
from app.config import settings


def get_worker_repo(session: AsyncSession = Depends(get_session)) -> SqlWorkerRepository:
    return SqlWorkerRepository(session)


def get_ingest_uc(session: AsyncSession = Depends(get_session)) -> IngestUploadUseCase:
    return IngestUploadUseCase(
        worker_repo=SqlWorkerRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        uow=SqlUnitOfWork(session),
        max_active_workers=settings.max_active_workers,
        encoding=settings.upload_encoding,
    )


def get_redistribute_uc(
    session: AsyncSession = Depends(get_session),
) -> RedistributeCallQueueUseCase:
    return RedistributeCallQueueUseCase(
        worker_repo=SqlWorkerRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        uow=SqlUnitOfWork(session),
        max_active_workers=settings.max_active_workers,
    )


def get_mark_completed_uc(session: AsyncSession = Depends(get_session)) -> MarkCompletedUseCase:
    return MarkCompletedUseCase(assignment_repo=SqlAssignmentRepository(session))


def get_list_assignments_uc(
    session: AsyncSession = Depends(get_session),
) -> ListAssignmentsUseCase:
    return ListAssignmentsUseCase(
        worker_repo=SqlWorkerRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_clear_assignments_uc(
    session: AsyncSession = Depends(get_session),
) -> ClearAssignmentsUseCase:
    return ClearAssignmentsUseCase(
        assignment_repo=SqlAssignmentRepository(session), uow=SqlUnitOfWork(session)
    )
