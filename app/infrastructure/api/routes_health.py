"""Health check endpoint: database reachability plus roster size."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.models import WorkerModel
from app.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Report whether the roster table is readable and how many workers take uploads.

    An empty roster is "degraded": every upload would fail with no workers.
    """
    workers: int | None = None
    try:
        result = await session.execute(select(func.count(WorkerModel.id)))
        workers = int(result.scalar() or 0)
        db_status = "connected"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check could not read the roster: %s", e)
        db_status = f"error: {e}"

    ready = db_status == "connected" and bool(workers)
    return {
        "status": "ok" if ready else "degraded",
        "database": db_status,
        "workers": workers,
        "active_workers": min(workers, settings.max_active_workers) if workers is not None else None,
        "max_active_workers": settings.max_active_workers,
    }
