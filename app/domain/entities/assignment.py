"""Assignment entity — one persisted row bound to at most one worker."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities.contact_row import CanonicalRow
from app.domain.value_objects.enums import AssignmentStatus, SchemaKind


@dataclass
class Assignment:
    id: int | None
    kind: SchemaKind
    display_name: str
    contact_number: str
    ordinal: int | float | None = None
    email_address: str | None = None
    freeform_note: str = ""
    worker_id: int | None = None
    status: AssignmentStatus = AssignmentStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(
        cls, row: CanonicalRow, kind: SchemaKind, worker_id: int | None = None
    ) -> "Assignment":
        return cls(
            id=None,
            kind=kind,
            display_name=row.display_name,
            contact_number=row.contact_number,
            ordinal=row.ordinal,
            email_address=row.email_address,
            freeform_note=row.freeform_note,
            worker_id=worker_id,
        )

    def is_completed(self) -> bool:
        return self.status == AssignmentStatus.COMPLETED

    def complete(self) -> bool:
        """Move to COMPLETED. Returns False when it already was (no-op)."""
        if self.is_completed():
            return False
        self.status = AssignmentStatus.COMPLETED
        return True
