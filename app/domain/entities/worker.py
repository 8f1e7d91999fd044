"""Worker entity — a roster entry (agent) who follows up on assigned rows."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Worker:
    id: int | None
    name: str
    email: str
    mobile: str
