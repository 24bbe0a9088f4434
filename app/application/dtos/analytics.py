"""DTOs for search analytics."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class SearchLogEntry:
    """One search_logs document."""

    id: str
    term: str
    category: str | None
    timestamp: datetime | None


@dataclass(frozen=True)
class TermCount:
    term: str
    count: int


@dataclass(frozen=True)
class SearchStats:
    """Search counts over UTC day windows and the most searched terms."""

    today: int
    yesterday: int
    last_7_days: int
    last_30_days: int
    total: int
    top_terms: list[TermCount] = field(default_factory=list)
