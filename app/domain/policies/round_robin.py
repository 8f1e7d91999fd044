"""RoundRobinPolicy — deterministic cyclic worker selection."""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.entities.worker import Worker


def pick_next(roster: Sequence[Worker], counter: int) -> tuple[Worker, int]:
    """Deterministic round-robin pick from an ordered roster.

    Roster order is authoritative (no re-sorting): *counter mod len(roster)*
    selects the index.

    Args:
        roster: non-empty ordered list of workers.
        counter: current round-robin counter value.

    Returns:
        (chosen_worker, new_counter)

    Raises:
        ValueError: if the roster is empty.
    """
    if not roster:
        raise ValueError("Cannot pick from an empty roster")

    index = counter % len(roster)
    return roster[index], counter + 1
