"""DTOs for accessory search and LLM suggestions."""

from dataclasses import dataclass, field

from app.application.dtos.accessory import AccessoryResult


@dataclass(frozen=True)
class SearchResultItem:
    """A group with at least one model matching the term."""

    accessory: AccessoryResult
    matched_models: list[str]


@dataclass(frozen=True)
class SuggestionResult:
    """Suggestions from the LLM when the search has no matches."""

    suggested_matches: list[str] = field(default_factory=list)
    alternative_search_terms: list[str] = field(default_factory=list)
    recommend_follow_up: bool = False


@dataclass(frozen=True)
class SearchResult:
    """Search answer: matches, or suggestions (None when the LLM is not configured)."""

    term: str
    category: str | None
    results: list[SearchResultItem]
    suggestions: SuggestionResult | None = None
