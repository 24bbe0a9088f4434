"""Compatibility search use case with LLM suggestions on empty results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.search import SearchResult, SearchResultItem
from app.domain.exceptions import SearchTermTooShortException

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IAccessoryRepository,
        ISearchLogRepository,
    )
    from app.application.interfaces.services import ISuggestionService

logger = logging.getLogger(__name__)


class SearchService:
    """Substring search over model names within one category (or all groups)."""

    def __init__(
        self,
        accessory_repo: "IAccessoryRepository",
        search_log_repo: "ISearchLogRepository",
        suggestion_service: "ISuggestionService | None" = None,
        min_term_length: int = 2,
    ) -> None:
        self.accessory_repo = accessory_repo
        self.search_log_repo = search_log_repo
        self.suggestion_service = suggestion_service
        self.min_term_length = min_term_length

    async def search(self, term: str, category: str | None = None) -> SearchResult:
        """Return groups with a model containing term (case-insensitive).

        When nothing matches, the suggestion service (if configured) is asked
        for near matches. Its failures propagate as SuggestionServiceException.
        """
        term = (term or "").strip()
        category = (category or "").strip() or None
        if len(term) < self.min_term_length:
            raise SearchTermTooShortException(self.min_term_length)
        await self._log(term, category)

        needle = term.lower()
        results: list[SearchResultItem] = []
        for group in await self.accessory_repo.list_by_category(category):
            matched = [n for n in group.model_names if needle in n.lower()]
            if matched:
                results.append(SearchResultItem(accessory=group, matched_models=matched))

        suggestions = None
        if not results and self.suggestion_service is not None:
            query = f"{term} {category}" if category else term
            suggestions = await self.suggestion_service.suggest(query)
        return SearchResult(
            term=term, category=category, results=results, suggestions=suggestions
        )

    async def _log(self, term: str, category: str | None) -> None:
        """Append to search_logs; a failure here never fails the search."""
        try:
            await self.search_log_repo.add(term, category)
        except Exception:
            logger.exception("Failed to record search term %r", term)
