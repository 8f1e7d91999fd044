"""RowValidator — required-field checks per schema kind.

Rows failing a check are dropped, never raised; only the aggregate (and the
dropped rows' identifying values, for operator review) is reported.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from app.domain.entities.contact_row import CanonicalRow
from app.domain.exceptions import EmptyResultError
from app.domain.value_objects.enums import SchemaKind
from app.domain.value_objects.field_schema import (
    CONTACT_NUMBER,
    DISPLAY_NAME,
    EMAIL_ADDRESS,
    FREEFORM_NOTE,
    ORDINAL,
)

logger = logging.getLogger(__name__)

NormalizedRow = Mapping[str, object]


@dataclass
class DroppedRow:
    row_number: int
    missing: tuple[str, ...]
    display_name: str | None = None
    contact_number: str | None = None


@dataclass
class ValidationResult:
    rows: list[CanonicalRow] = field(default_factory=list)
    dropped_rows: list[DroppedRow] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return len(self.dropped_rows)


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _number(value: object) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _generic_row(row: NormalizedRow) -> tuple[CanonicalRow | None, tuple[str, ...]]:
    name = _text(row.get(DISPLAY_NAME))
    phone = _text(row.get(CONTACT_NUMBER))
    missing = tuple(
        f for f, v in ((DISPLAY_NAME, name), (CONTACT_NUMBER, phone)) if v is None
    )
    if missing:
        return None, missing
    return (
        CanonicalRow(
            display_name=name,
            contact_number=phone,
            freeform_note=_text(row.get(FREEFORM_NOTE)) or "",
        ),
        (),
    )


def _call_queue_row(row: NormalizedRow) -> tuple[CanonicalRow | None, tuple[str, ...]]:
    ordinal = _number(row.get(ORDINAL))
    name = _text(row.get(DISPLAY_NAME))
    phone = _text(row.get(CONTACT_NUMBER))
    email = _text(row.get(EMAIL_ADDRESS))
    missing = tuple(
        f
        for f, v in (
            (ORDINAL, ordinal),
            (DISPLAY_NAME, name),
            (CONTACT_NUMBER, phone),
            (EMAIL_ADDRESS, email),
        )
        if v is None
    )
    if missing:
        return None, missing
    return (
        CanonicalRow(
            ordinal=ordinal,
            display_name=name,
            contact_number=phone,
            email_address=email.lower(),
        ),
        (),
    )


_CHECKS = {
    SchemaKind.GENERIC_LIST: _generic_row,
    SchemaKind.CALL_QUEUE: _call_queue_row,
}


def validate_row(row: NormalizedRow, kind: SchemaKind) -> tuple[CanonicalRow | None, tuple[str, ...]]:
    """Return (canonical_row, ()) or (None, missing_fields)."""
    return _CHECKS[kind](row)


def validate_rows(rows: Iterable[NormalizedRow], kind: SchemaKind) -> ValidationResult:
    """Filter normalized rows down to CanonicalRows.

    Raises:
        EmptyResultError: when no row survives.
    """
    result = ValidationResult()
    for row_number, row in enumerate(rows, start=1):
        canonical, missing = validate_row(row, kind)
        if canonical is None:
            logger.debug("Row %d dropped, missing %s", row_number, ", ".join(missing))
            result.dropped_rows.append(
                DroppedRow(
                    row_number=row_number,
                    missing=missing,
                    display_name=_text(row.get(DISPLAY_NAME)),
                    contact_number=_text(row.get(CONTACT_NUMBER)),
                )
            )
            continue
        result.rows.append(canonical)

    if not result.rows:
        raise EmptyResultError()
    return result
