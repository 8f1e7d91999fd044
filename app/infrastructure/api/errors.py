"""Maps engine errors onto HTTP responses."""

from fastapi import HTTPException

from app.domain.exceptions import (
    DuplicateKeyError,
    EmptyResultError,
    NoRowsError,
    NotFoundError,
    NoWorkersError,
    ParseError,
    RosterEngineError,
)

_STATUS_BY_ERROR: dict[type[RosterEngineError], int] = {
    ParseError: 400,
    EmptyResultError: 400,
    NoWorkersError: 400,
    NoRowsError: 400,
    DuplicateKeyError: 409,
    NotFoundError: 404,
}


def to_http_exception(exc: RosterEngineError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
