"""LLM fuzzy-match suggestions over an OpenAI-compatible chat completions API.

OpenRouter by default; any endpoint that accepts the chat completions body
with response_format json_object works.
"""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.application.dtos.search import SuggestionResult
from app.domain.exceptions import SuggestionServiceException
from app.infrastructure.external.llm.prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)


class SuggestionPayload(BaseModel):
    """Shape the model must return; anything else is a service failure."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    suggested_matches: list[str] = Field(alias="suggestedMatches")
    alternative_search_terms: list[str] = Field(alias="alternativeSearchTerms")
    recommend_follow_up: bool = Field(alias="recommendFollowUp")


class LLMSuggestionClient:
    """Implements ISuggestionService with one JSON-mode chat completion per query."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_url: str,
        api_key: str,
        model: str,
        timeout: float = 30.0,
        app_name: str = "fitmyphone",
        site_url: str | None = None,
    ) -> None:
        self._http = http_client
        self._api_url = api_url
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._app_name = app_name
        self._site_url = site_url

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }
        if self._site_url:
            headers["HTTP-Referer"] = self._site_url
        return headers

    async def suggest(self, query: str) -> SuggestionResult:
        """Ask the model for similar matches and alternative terms.

        Raises:
            SuggestionServiceException: On transport error, non-2xx status,
                missing content, invalid JSON or a payload of the wrong shape.
        """
        body = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(query)},
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0.3,
        }
        try:
            response = await self._http.post(
                self._api_url,
                headers=self._build_headers(),
                json=body,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Suggestion service returned %s", e.response.status_code)
            raise SuggestionServiceException(f"status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Suggestion service request failed: %s", e)
            raise SuggestionServiceException("transport error") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise SuggestionServiceException("missing content") from e
        if not isinstance(content, str) or not content.strip():
            raise SuggestionServiceException("missing content")
        try:
            payload = SuggestionPayload.model_validate(json.loads(content))
        except json.JSONDecodeError as e:
            raise SuggestionServiceException("invalid JSON") from e
        except ValidationError as e:
            logger.warning("Suggestion payload has the wrong shape: %s", e)
            raise SuggestionServiceException("invalid shape") from e
        return SuggestionResult(
            suggested_matches=payload.suggested_matches,
            alternative_search_terms=payload.alternative_search_terms,
            recommend_follow_up=payload.recommend_follow_up,
        )
