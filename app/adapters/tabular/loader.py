"""Tabular loader — turns CSV / XLSX uploads into raw header-keyed rows."""

from __future__ import annotations

import csv
import io
import itertools
import logging
import re
import zipfile
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time
from pathlib import Path
from typing import BinaryIO

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.adapters.tabular.normalizer import clean_string, normalize_row
from app.domain.exceptions import ParseError
from app.domain.value_objects.enums import UploadFormat
from app.domain.value_objects.field_schema import CanonicalField, FieldSchema

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {".csv", ".txt", ".tsv"}
XLSX_EXTENSIONS = {".xlsx", ".xlsm"}
LEGACY_EXCEL_EXTENSIONS = {".xls"}

_ZIP_MAGIC = b"PK\x03\x04"
_OLE_MAGIC = b"\xd0\xcf\x11\xe0"

# Lone surrogates left by errors="surrogateescape" for undecodable bytes
_ESCAPED_BYTE_RE = re.compile("[\udc80-\udcff]")

RawRow = dict[str, str]


def detect_format(filename: str | None = None, head: bytes = b"") -> UploadFormat:
    """Pick the upload format from the file extension, falling back to magic bytes."""
    ext = Path(filename).suffix.lower() if filename else ""
    if ext in XLSX_EXTENSIONS:
        return UploadFormat.XLSX
    if ext in LEGACY_EXCEL_EXTENSIONS or head.startswith(_OLE_MAGIC):
        raise ParseError("Legacy .xls workbooks are not supported, save the sheet as .xlsx or .csv")
    if ext in CSV_EXTENSIONS:
        return UploadFormat.CSV
    if head.startswith(_ZIP_MAGIC):
        return UploadFormat.XLSX
    return UploadFormat.CSV


def _sniff_dialect(sample: str) -> type[csv.Dialect] | csv.Dialect:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    # Excel exports in many locales use ';'
    if not sample:
        return csv.get_dialect("excel")

    first_line = sample.splitlines()[0] if sample else ""
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    try:
        return csv.Sniffer().sniff(sample, delimiters=",;\t")
    except csv.Error:
        return csv.get_dialect("excel")


def _zip_rows(headers: list[str], records: Iterable[list[str]]) -> Iterator[RawRow]:
    """Pair each record with the header row.

    Empty header cells are ignored; for repeated headers the first column
    keeps the key. Short records simply lack the trailing keys.
    """
    for record in records:
        if not any(cell.strip() for cell in record):
            continue
        row: RawRow = {}
        for header, cell in zip(headers, record):
            if not header or header in row:
                continue
            row[header] = cell
        yield row


def _undecodable(text: str) -> bool:
    return _ESCAPED_BYTE_RE.search(text) is not None


def _scrub_cells(records: Iterable[list[str]]) -> Iterator[list[str]]:
    """Blank out cells holding bytes the encoding could not decode."""
    for record in records:
        yield ["" if _undecodable(cell) else cell for cell in record]


def _iter_csv(stream: BinaryIO, encoding: str) -> Iterator[RawRow]:
    # surrogateescape keeps a bad byte local to its cell
    text = io.TextIOWrapper(stream, encoding=encoding, errors="surrogateescape", newline="")
    try:
        first_line = text.readline()
        if not first_line.strip():
            return
        if _undecodable(first_line):
            raise ParseError(f"Upload is not valid {encoding} text: the header row cannot be decoded")
        reader = csv.reader(itertools.chain([first_line], text), dialect=_sniff_dialect(first_line))
        headers = [h.replace("\ufeff", "") for h in next(reader)]
        yield from _zip_rows(headers, _scrub_cells(reader))
    except csv.Error as exc:
        raise ParseError(f"Malformed CSV: {exc}") from exc
    finally:
        # Leave the caller's stream open.
        text.detach()


def _cell_text(value: object) -> str:
    """Render a spreadsheet cell as the string a CSV export would contain."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime) and value.time() == time():
        # Excel has no date-only type
        return value.date().isoformat()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _iter_xlsx(stream: BinaryIO) -> Iterator[RawRow]:
    source = stream if stream.seekable() else io.BytesIO(stream.read())
    # ElementTree.ParseError and lxml.etree.XMLSyntaxError both subclass SyntaxError
    try:
        workbook = load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, SyntaxError) as exc:
        raise ParseError(f"Upload is not a readable .xlsx workbook: {exc}") from exc

    try:
        sheets = workbook.worksheets
        if not sheets:
            return
        records = (
            [_cell_text(cell) for cell in values]
            for values in sheets[0].iter_rows(values_only=True)
        )
        headers: list[str] | None = None
        for record in records:
            if any(cell.strip() for cell in record):
                headers = record
                break
        if headers is None:
            return
        yield from _zip_rows(headers, records)
    except (zipfile.BadZipFile, KeyError, SyntaxError) as exc:
        raise ParseError(f"Corrupt .xlsx workbook: {exc}") from exc
    finally:
        workbook.close()


def parse_rows(
    stream: BinaryIO, fmt: UploadFormat, encoding: str = "utf-8-sig"
) -> Iterator[RawRow]:
    """Lazily yield header-keyed rows from *stream*.

    Header strings are kept verbatim (a leading BOM aside), row order is
    preserved and blank rows are skipped.

    Raises:
        ParseError: when the stream as a whole cannot be read as *fmt*.
    """
    if fmt == UploadFormat.CSV:
        return _iter_csv(stream, encoding)
    if fmt == UploadFormat.XLSX:
        return _iter_xlsx(stream)
    raise ParseError(f"Unsupported upload format: {fmt}")


# ─── Worker roster seed file ────────────────────────────────────────

WORKER_SCHEMA = FieldSchema(
    kind=None,
    fields=(
        CanonicalField("name", ("Name", "Full Name", "Agent")),
        CanonicalField("email", ("Email", "Email address", "E-mail")),
        CanonicalField("mobile", ("Mobile", "Mobile no", "Phone")),
    ),
)


def load_workers(file_path: Path) -> list[dict[str, str]]:
    """Load the roster CSV/XLSX used by the seed tool.

    Rows without a name, email and mobile are skipped; emails are lower-cased.
    """
    fmt = detect_format(file_path.name)
    workers = []
    with open(file_path, "rb") as f:
        for raw in parse_rows(f, fmt):
            row = normalize_row(raw, WORKER_SCHEMA)
            name = clean_string(row.get("name"))
            email = clean_string(row.get("email"))
            mobile = clean_string(row.get("mobile"))
            if not (name and email and mobile):
                logger.warning("Skipping incomplete worker row: %s", raw)
                continue
            workers.append({"name": name, "email": email.lower(), "mobile": mobile})
    logger.info("Parsed %d workers from %s", len(workers), file_path.name)
    return workers
