"""Seed the worker roster from a CSV / XLSX file.

Usage:
    python -m app.tools.seed_db
    python -m app.tools.seed_db --data-dir data
    python -m app.tools.seed_db --file agents.xlsx
    python -m app.tools.seed_db --drop  # drop existing workers and assignments first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import Base, async_session_factory, engine
from app.adapters.persistence.models import AssignmentModel, WorkerModel
from app.adapters.persistence.repositories import SqlWorkerRepository
from app.adapters.tabular.loader import load_workers
from app.config import settings
from app.domain.entities.worker import Worker

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

WORKER_FILE_HINTS = ["workers", "agents", "roster"]


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in FK order."""
    for model in [AssignmentModel, WorkerModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed_workers(session: AsyncSession, worker_data: list[dict[str, str]]) -> int:
    """Insert workers in file order, skipping any whose email or mobile is taken.

    File order becomes roster order.
    """
    repo = SqlWorkerRepository(session)
    created = 0
    for wd in worker_data:
        existing = await repo.get_by_email_or_mobile(wd["email"], wd["mobile"])
        if existing:
            logger.debug("Worker '%s' already exists, skipping", wd["email"])
            continue
        await repo.save(Worker(id=None, name=wd["name"], email=wd["email"], mobile=wd["mobile"]))
        created += 1
    await session.commit()
    return created


async def seed(worker_file: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)
        created = await seed_workers(session, load_workers(worker_file))

    logger.info("Seed complete: %d workers", created)
    return {"workers": created}


def _find_worker_file(data_dir: Path) -> Path | None:
    """Find a roster file matching any of the name hints."""
    for pattern in ("*.csv", "*.xlsx"):
        for f in sorted(data_dir.glob(pattern)):
            fname_lower = f.stem.lower()
            for hint in WORKER_FILE_HINTS:
                if hint in fname_lower:
                    logger.info("Found roster file: %s (matched hint '%s')", f.name, hint)
                    return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        roster = await SqlWorkerRepository(session).get_roster()
        assignments = (
            await session.execute(select(func.count(AssignmentModel.id)))
        ).scalar() or 0

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Workers:     {len(roster)}")
        print(f"Active:      {min(len(roster), settings.max_active_workers)}")
        print(f"Assignments: {assignments}")
        for i, w in enumerate(roster):
            marker = "*" if i < settings.max_active_workers else " "
            print(f" {marker} {w.id:>4}  {w.name} <{w.email}> {w.mobile}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the worker roster from a CSV/XLSX file")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory searched for workers/agents/roster files (default: CSV_DATA_PATH)",
    )
    parser.add_argument("--file", type=str, default=None, help="Explicit roster file")
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing workers and assignments before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    if args.verify_only:
        asyncio.run(_verify_data())
        return

    worker_file = Path(args.file) if args.file else None
    if worker_file is None:
        data_dir = Path(args.data_dir)
        if not data_dir.exists():
            logger.error("Data directory not found: %s", data_dir)
            sys.exit(1)
        worker_file = _find_worker_file(data_dir)
    if worker_file is None or not worker_file.exists():
        logger.error("No roster file found. Expected something like workers.csv")
        sys.exit(1)

    async def run_all():
        await seed(worker_file, drop=args.drop)
        await _verify_data()

    asyncio.run(run_all())


if __name__ == "__main__":
    main()
