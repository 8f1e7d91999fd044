"""Generic list endpoints — upload (append + balanced partition), grouped view, complete."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.application.use_cases.ingest_upload import IngestUploadUseCase
from app.application.use_cases.manage_assignments import ListAssignmentsUseCase
from app.application.use_cases.mark_completed import MarkCompletedUseCase
from app.config import settings
from app.domain.exceptions import RosterEngineError
from app.domain.value_objects.enums import SchemaKind
from app.infrastructure.api.dependencies import (
    get_ingest_uc,
    get_list_assignments_uc,
    get_mark_completed_uc,
)
from app.infrastructure.api.errors import to_http_exception
from app.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_ingest,
    serialize_worker,
)
from app.infrastructure.api.uploads import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lists", tags=["lists"])


@router.post("/upload")
async def upload_list(
    file: UploadFile | None = File(None),
    uc: IngestUploadUseCase = Depends(get_ingest_uc),
):
    """Append the uploaded rows, split into contiguous blocks over the active workers."""
    try:
        stream, fmt = await read_upload(file, settings.max_upload_bytes)
        result = await uc.execute(stream, fmt, SchemaKind.GENERIC_LIST)
    except RosterEngineError as e:
        logger.warning("List upload rejected: %s", e)
        raise to_http_exception(e)

    return {
        "status": "ok",
        "message": "File uploaded and distributed successfully",
        **serialize_ingest(result),
    }


@router.get("/distributed")
async def distributed_lists(uc: ListAssignmentsUseCase = Depends(get_list_assignments_uc)):
    """List items grouped per worker, in roster order."""
    groups = await uc.by_worker(SchemaKind.GENERIC_LIST)
    return {
        "distributed_lists": [
            {
                "worker": serialize_worker(g.worker),
                "items": [serialize_assignment(item) for item in g.items],
            }
            for g in groups
        ]
    }


@router.patch("/{item_id}/complete")
async def complete_list_item(
    item_id: int,
    uc: MarkCompletedUseCase = Depends(get_mark_completed_uc),
    session: AsyncSession = Depends(get_session),
):
    """Mark a list item completed. Repeating the call is harmless."""
    try:
        result = await uc.execute(item_id, SchemaKind.GENERIC_LIST)
        await session.commit()
    except RosterEngineError as e:
        raise to_http_exception(e)

    message = (
        "Task already marked as completed" if result.already_completed
        else "Task marked as completed"
    )
    return {
        "message": message,
        "item": {"id": result.assignment_id, "status": result.status.value},
    }
