"""DTOs for admin-maintained reference data (categories, master models)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CategoryResult:
    """Category read-model."""

    id: str
    name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class MasterModelResult:
    """Master model read-model; id is the name with '%' and '/' percent-encoded."""

    id: str
    name: str
    created_at: datetime | None = None
