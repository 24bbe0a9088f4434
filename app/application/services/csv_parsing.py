"""CSV parsing for the accessory and master-model bulk imports.

Accessory CSV: header must contain ``model``; optional ``category``,
``accessoryId`` and ``contributorName``. A ``model`` cell may hold several
names separated by ``|``. Header names are matched case-insensitively.
"""

from __future__ import annotations

import csv
import io

from app.application.dtos.bulk_import import BulkImportRow, ParsedAccessoryCsv
from app.domain.entities.accessory import clean_model_names
from app.domain.exceptions import ValidationException

MODEL_SEPARATOR = "|"
MASTER_MODEL_HEADERS = ("model", "master model", "name", "value")


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8 (a leading BOM is dropped)."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationException("CSV file must be UTF-8 encoded", field="file") from e


def _reader(text: str) -> tuple[csv.DictReader, dict[str, str]]:
    """DictReader plus a map of lower-cased header -> actual header."""
    reader = csv.DictReader(io.StringIO(text))
    headers = {
        (name or "").strip().lower(): name
        for name in (reader.fieldnames or [])
    }
    return reader, headers


def _cell(row: dict[str, str | None], header: str | None) -> str | None:
    if header is None:
        return None
    value = (row.get(header) or "").strip()
    return value or None


def parse_accessory_csv(text: str) -> ParsedAccessoryCsv:
    """Parse the accessory import CSV.

    Rows without any model name are skipped and counted.

    Raises:
        ValidationException: If the header has no ``model`` column.
    """
    reader, headers = _reader(text)
    model_header = headers.get("model")
    if model_header is None:
        raise ValidationException("CSV must have a 'model' column", field="file")
    category_header = headers.get("category")
    id_header = headers.get("accessoryid")
    contributor_header = headers.get("contributorname")

    rows: list[BulkImportRow] = []
    skipped = 0
    for raw in reader:
        names = clean_model_names(
            (_cell(raw, model_header) or "").split(MODEL_SEPARATOR)
        )
        if not names:
            skipped += 1
            continue
        rows.append(
            BulkImportRow(
                models=names,
                category=_cell(raw, category_header),
                accessory_id=_cell(raw, id_header),
                contributor_name=_cell(raw, contributor_header),
            )
        )
    return ParsedAccessoryCsv(rows=rows, skipped=skipped)


def parse_master_model_csv(text: str) -> tuple[list[str], int]:
    """Return (names, row_count) from a master-model CSV.

    The name column is the first header matching one of
    MASTER_MODEL_HEADERS. Names are trimmed and blank cells dropped.
    """
    reader, headers = _reader(text)
    column = next((headers[h] for h in MASTER_MODEL_HEADERS if h in headers), None)
    if column is None:
        raise ValidationException(
            "CSV must have a 'model', 'master model', 'name' or 'value' column",
            field="file",
        )
    names: list[str] = []
    rows = 0
    for raw in reader:
        rows += 1
        value = _cell(raw, column)
        if value is not None:
            names.append(value)
    return names, rows
