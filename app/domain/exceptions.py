"""Engine exception hierarchy.

Every error that aborts a distribution run or a status transition derives
from RosterEngineError and carries a message fit to show the operator.
Row-level validation failures never raise; they are counted instead.
"""

from __future__ import annotations


class RosterEngineError(Exception):
    """Base exception for all engine errors."""


class ParseError(RosterEngineError):
    """The upload cannot be decoded as its declared format."""


class EmptyResultError(RosterEngineError):
    """Validation left zero usable rows."""

    def __init__(self, reason: str = "no valid records found.") -> None:
        self.reason = reason
        super().__init__(reason)


class NoWorkersError(RosterEngineError):
    """The worker roster is empty."""

    def __init__(self, message: str = "No agents found. Please create agents first.") -> None:
        super().__init__(message)


class NoRowsError(RosterEngineError):
    """There is nothing to distribute."""

    def __init__(self, message: str = "No call records to distribute.") -> None:
        super().__init__(message)


class DuplicateKeyError(RosterEngineError):
    """A uniqueness constraint was violated while persisting assignments."""

    def __init__(self, field: str, value: object | None = None) -> None:
        self.field = field
        self.value = value
        detail = f"Duplicate value for '{field}'"
        if value is not None:
            detail += f": {value!r}"
        super().__init__(detail)


class NotFoundError(RosterEngineError):
    """A lookup by id resolved to nothing."""

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
