"""Call-queue endpoints — upload (replace + round robin), list, redistribute, clear, complete."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.application.use_cases.ingest_upload import IngestUploadUseCase
from app.application.use_cases.manage_assignments import (
    ClearAssignmentsUseCase,
    ListAssignmentsUseCase,
)
from app.application.use_cases.mark_completed import MarkCompletedUseCase
from app.application.use_cases.redistribute import RedistributeCallQueueUseCase
from app.config import settings
from app.domain.exceptions import RosterEngineError
from app.domain.value_objects.enums import SchemaKind
from app.infrastructure.api.dependencies import (
    get_clear_assignments_uc,
    get_ingest_uc,
    get_list_assignments_uc,
    get_mark_completed_uc,
    get_redistribute_uc,
)
from app.infrastructure.api.errors import to_http_exception
from app.infrastructure.api.serializers import serialize_assignment, serialize_ingest
from app.infrastructure.api.uploads import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/call-list", tags=["call-list"])


@router.get("")
async def list_call_records(uc: ListAssignmentsUseCase = Depends(get_list_assignments_uc)):
    """All call records in ordinal order with their assigned worker."""
    records = await uc.call_queue()
    return {
        "total": len(records),
        "call_list": [serialize_assignment(r, worker) for r, worker in records],
    }


@router.post("/upload")
async def upload_call_list(
    file: UploadFile | None = File(None),
    uc: IngestUploadUseCase = Depends(get_ingest_uc),
):
    """Replace the call queue with the uploaded file and distribute it round robin."""
    try:
        stream, fmt = await read_upload(file, settings.max_upload_bytes)
        result = await uc.execute(stream, fmt, SchemaKind.CALL_QUEUE)
    except RosterEngineError as e:
        logger.warning("Call list upload rejected: %s", e)
        raise to_http_exception(e)

    return {
        "status": "ok",
        "message": "Call list uploaded and distributed successfully",
        **serialize_ingest(result),
    }


@router.post("/distribute")
async def distribute_call_list(
    uc: RedistributeCallQueueUseCase = Depends(get_redistribute_uc),
):
    """Re-run round robin over the stored call queue."""
    try:
        summary = await uc.execute()
    except RosterEngineError as e:
        raise to_http_exception(e)

    return {
        "status": "ok",
        "message": "Call records distributed among agents successfully",
        "total_rows": summary.total_rows,
        "total_workers": summary.total_workers,
        "counts_by_worker": {str(k): v for k, v in summary.counts_by_worker.items()},
    }


@router.delete("")
async def clear_call_list(
    uc: ClearAssignmentsUseCase = Depends(get_clear_assignments_uc),
):
    """Remove every call record."""
    removed = await uc.execute(SchemaKind.CALL_QUEUE)
    return {"status": "ok", "message": "All call records have been removed", "removed": removed}


@router.patch("/{record_id}/complete")
async def complete_call_record(
    record_id: int,
    uc: MarkCompletedUseCase = Depends(get_mark_completed_uc),
    session: AsyncSession = Depends(get_session),
):
    """Mark a call record completed. Repeating the call is harmless."""
    try:
        result = await uc.execute(record_id, SchemaKind.CALL_QUEUE)
        await session.commit()
    except RosterEngineError as e:
        raise to_http_exception(e)

    message = (
        "Call already marked as completed" if result.already_completed
        else "Call marked as completed"
    )
    return {
        "message": message,
        "record": {"id": result.assignment_id, "status": result.status.value},
    }
