"""MarkCompletedUseCase — idempotent pending → completed transition."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.ports.assignment_repo import AssignmentRepository
from app.domain.exceptions import NotFoundError
from app.domain.value_objects.enums import AssignmentStatus, SchemaKind

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    assignment_id: int
    status: AssignmentStatus
    already_completed: bool


class MarkCompletedUseCase:
    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def execute(
        self, assignment_id: int, kind: SchemaKind | None = None
    ) -> CompletionResult:
        """Mark an assignment completed.

        A second call on the same id is a no-op that still reports
        ``completed``. When *kind* is given, an assignment of another kind
        counts as missing.

        Raises:
            NotFoundError: no such assignment.
        """
        assignment = await self._assignments.find_by_id(assignment_id)
        if assignment is None or (kind is not None and assignment.kind != kind):
            raise NotFoundError("Assignment", assignment_id)

        changed = assignment.complete()
        if changed:
            await self._assignments.save(assignment)
            logger.info("Assignment %d marked completed", assignment_id)
        else:
            logger.debug("Assignment %d already completed", assignment_id)

        return CompletionResult(
            assignment_id=assignment_id,
            status=assignment.status,
            already_completed=not changed,
        )
