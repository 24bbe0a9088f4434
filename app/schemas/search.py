"""Search API schemas."""

from pydantic import Field

from app.schemas.accessory import AccessoryResponse
from app.schemas.common import CamelModel


class SearchResultItemResponse(CamelModel):
    """A group with at least one model matching the term."""

    accessory: AccessoryResponse
    matched_models: list[str]


class SuggestionResponse(CamelModel):
    suggested_matches: list[str] = Field(default_factory=list)
    alternative_search_terms: list[str] = Field(default_factory=list)
    recommend_follow_up: bool = False


class SearchResponse(CamelModel):
    """Matches, or LLM suggestions when there are none (null when not configured)."""

    term: str
    category: str | None = None
    results: list[SearchResultItemResponse]
    suggestions: SuggestionResponse | None = None
