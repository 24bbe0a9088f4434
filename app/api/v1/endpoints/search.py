"""Compatibility search API (public)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_search_service
from app.application.use_cases import SearchService
from app.core.limiter import limit_search
from app.schemas.search import SearchResponse

router = APIRouter()


@router.get("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    term: Annotated[str, Query(description="Device model text, at least 2 characters")],
    category: Annotated[str | None, Query(description="accessoryType to search within")] = None,
):
    """Groups with a model containing term; LLM suggestions when nothing matches."""
    result = await search_svc.search(term, category)
    return SearchResponse.model_validate(result)
