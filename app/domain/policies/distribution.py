"""DistributionPlanner — assigns every row to exactly one worker.

Two deterministic policies:

* balanced partition: contiguous blocks, the first ``N mod M`` workers get
  one extra row;
* cyclic round robin: rows stably sorted by ordinal, row ``i`` goes to
  worker ``i mod M``.

Only the first ``max_active_workers`` roster entries take part in a run.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from app.domain.entities.worker import Worker
from app.domain.exceptions import NoRowsError, NoWorkersError
from app.domain.policies.round_robin import pick_next
from app.domain.value_objects.enums import DistributionPolicy

DEFAULT_MAX_ACTIVE_WORKERS = 5

RowT = TypeVar("RowT")


@dataclass
class DistributionPlan(Generic[RowT]):
    pairs: list[tuple[RowT, Worker]] = field(default_factory=list)
    total_rows: int = 0
    total_workers: int = 0

    def counts_by_worker(self) -> dict[int | None, int]:
        """Rows per worker id, in roster order of first appearance."""
        counts: dict[int | None, int] = {}
        for _, worker in self.pairs:
            counts[worker.id] = counts.get(worker.id, 0) + 1
        return counts

    def rows_for(self, worker: Worker) -> list[RowT]:
        return [row for row, w in self.pairs if w.id == worker.id]


def active_roster(
    roster: Sequence[Worker], max_active_workers: int = DEFAULT_MAX_ACTIVE_WORKERS
) -> list[Worker]:
    """First *max_active_workers* roster entries, order preserved."""
    if max_active_workers < 1:
        raise ValueError("max_active_workers must be at least 1")
    return list(roster[:max_active_workers])


def balanced_partition(
    rows: Sequence[RowT], workers: Sequence[Worker]
) -> list[tuple[RowT, Worker]]:
    base, remainder = divmod(len(rows), len(workers))
    pairs: list[tuple[RowT, Worker]] = []
    start = 0
    for i, worker in enumerate(workers):
        size = base + (1 if i < remainder else 0)
        pairs.extend((row, worker) for row in rows[start:start + size])
        start += size
    return pairs


def _ordinal_sort_key(indexed: tuple[int, object]) -> tuple[int, int | float, int]:
    index, row = indexed
    ordinal = getattr(row, "ordinal", None)
    if ordinal is None:
        return (1, 0, index)
    return (0, ordinal, index)


def round_robin(
    rows: Sequence[RowT], workers: Sequence[Worker]
) -> list[tuple[RowT, Worker]]:
    # Stable: equal ordinals and rows without one keep their input order.
    ordered = [row for _, row in sorted(enumerate(rows), key=_ordinal_sort_key)]
    pairs: list[tuple[RowT, Worker]] = []
    counter = 0
    for row in ordered:
        worker, counter = pick_next(workers, counter)
        pairs.append((row, worker))
    return pairs


def plan_distribution(
    rows: Sequence[RowT],
    roster: Sequence[Worker],
    policy: DistributionPolicy,
    max_active_workers: int = DEFAULT_MAX_ACTIVE_WORKERS,
) -> DistributionPlan[RowT]:
    """Build the row → worker plan for one run.

    Raises:
        NoWorkersError: the roster is empty.
        NoRowsError: there are no rows.
    """
    workers = active_roster(roster, max_active_workers)
    if not workers:
        raise NoWorkersError()
    if not rows:
        raise NoRowsError()

    if policy == DistributionPolicy.BALANCED_PARTITION:
        pairs = balanced_partition(rows, workers)
    elif policy == DistributionPolicy.ROUND_ROBIN:
        pairs = round_robin(rows, workers)
    else:
        raise ValueError(f"Unknown distribution policy: {policy}")

    return DistributionPlan(pairs=pairs, total_rows=len(rows), total_workers=len(workers))
