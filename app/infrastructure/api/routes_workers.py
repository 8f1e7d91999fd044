"""Worker roster endpoint (read-only; workers are created by the seed tool)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.adapters.persistence.repositories import SqlWorkerRepository
from app.config import settings
from app.infrastructure.api.dependencies import get_worker_repo
from app.infrastructure.api.serializers import serialize_worker

router = APIRouter(prefix="/workers", tags=["workers"])


@router.get("")
async def list_workers(workers: SqlWorkerRepository = Depends(get_worker_repo)):
    """Roster in distribution order; only the first max_active_workers receive rows."""
    roster = await workers.get_roster()
    return {
        "total": len(roster),
        "max_active_workers": settings.max_active_workers,
        "workers": [
            {**serialize_worker(w), "active": i < settings.max_active_workers}
            for i, w in enumerate(roster)
        ],
    }
