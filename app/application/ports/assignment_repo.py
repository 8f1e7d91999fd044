"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.domain.entities.assignment import Assignment
from app.domain.value_objects.enums import SchemaKind


class AssignmentRepository(ABC):
    @abstractmethod
    async def replace_all(self, kind: SchemaKind, assignments: Sequence[Assignment]) -> list[Assignment]:
        """Discard every assignment of *kind*, then insert *assignments*.

        Runs inside the caller's transaction, so a failed insert leaves the
        delete uncommitted as well.
        Raises DuplicateKeyError on an ordinal conflict.
        """
        ...

    @abstractmethod
    async def append(self, assignments: Sequence[Assignment]) -> list[Assignment]:
        """Insert *assignments*, keeping existing ones. All or nothing."""
        ...

    @abstractmethod
    async def find_all(self, kind: SchemaKind) -> list[Assignment]:
        """Call queue ordered by ordinal, generic lists by id."""
        ...

    @abstractmethod
    async def find_by_id(self, assignment_id: int) -> Assignment | None:
        ...

    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        """Persist the status of an existing assignment."""
        ...

    @abstractmethod
    async def bulk_link_worker(self, links: Sequence[tuple[int, int]]) -> None:
        """Set worker_id for each (assignment_id, worker_id) pair."""
        ...

    @abstractmethod
    async def clear(self, kind: SchemaKind) -> int:
        """Delete every assignment of *kind*; return how many were removed."""
        ...
