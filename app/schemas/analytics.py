"""Search analytics API schemas."""

from pydantic import Field

from app.schemas.common import CamelModel


class TermCountResponse(CamelModel):
    term: str
    count: int


class SearchStatsResponse(CamelModel):
    """Counts over UTC day windows of the latest search log entries."""

    today: int
    yesterday: int
    last_7_days: int = Field(alias="last7")
    last_30_days: int = Field(alias="last30")
    total: int
    top_terms: list[TermCountResponse] = Field(default_factory=list)
