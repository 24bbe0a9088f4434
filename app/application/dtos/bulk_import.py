"""DTOs for CSV bulk import."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BulkImportRow:
    """One parsed CSV row of the accessory import."""

    models: list[str]
    category: str | None = None
    accessory_id: str | None = None
    contributor_name: str | None = None


@dataclass(frozen=True)
class ParsedAccessoryCsv:
    """Rows with at least one model, plus the number of rows skipped."""

    rows: list[BulkImportRow] = field(default_factory=list)
    skipped: int = 0


@dataclass(frozen=True)
class BulkImportResult:
    """Outcome of an accessory CSV import."""

    created: int
    merged: int
    skipped: int
    batches: int


@dataclass(frozen=True)
class MasterModelImportResult:
    """Outcome of a master-model CSV import."""

    added: int
    skipped: int
