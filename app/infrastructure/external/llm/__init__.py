"""LLM suggestion service client."""

from app.infrastructure.external.llm.suggestion_client import (
    LLMSuggestionClient,
    SuggestionPayload,
)

__all__ = ["LLMSuggestionClient", "SuggestionPayload"]
