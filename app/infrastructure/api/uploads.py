"""Upload intake — size and extension checks before the engine sees the bytes."""

from __future__ import annotations

import io
from pathlib import Path

from fastapi import HTTPException, UploadFile

from app.adapters.tabular.loader import (
    CSV_EXTENSIONS,
    LEGACY_EXCEL_EXTENSIONS,
    XLSX_EXTENSIONS,
    detect_format,
)
from app.domain.value_objects.enums import UploadFormat

ALLOWED_EXTENSIONS = CSV_EXTENSIONS | XLSX_EXTENSIONS | LEGACY_EXCEL_EXTENSIONS


async def read_upload(file: UploadFile | None, max_bytes: int) -> tuple[io.BytesIO, UploadFormat]:
    """Buffer the upload and sniff its format.

    Raises HTTPException 400 for a missing file or a disallowed extension,
    413 when the file exceeds *max_bytes*. ParseError from format sniffing
    is left to the caller.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    ext = Path(file.filename).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only CSV, XLSX, and XLS files are allowed")

    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=413, detail=f"File exceeds the {max_bytes // (1024 * 1024)} MB limit"
        )

    fmt = detect_format(file.filename, data[:8])
    return io.BytesIO(data), fmt
