"""
Search Routes - Article search and query enhancement endpoints.

Enhancement:
- With PERPLEXITY_API_KEY: queries are rewritten and widened with related terms
- Without it: the raw query is searched as typed
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, ValidationError

from gscnews.config import SearchError, get_settings
from gscnews.domains.search import (
    ArticleSearchEngine,
    EnhancementResult,
    QueryEnhancer,
    SearchQuery,
    SearchResponse,
)
from gscnews.interfaces.api.deps import get_query_enhancer, get_search_engine

router = APIRouter()


class EnhanceRequest(BaseModel):
    """Enhancement request body."""

    query: str = Field(..., max_length=500, description="Raw search query")


@router.get("", response_model=SearchResponse)
async def search_articles(
    q: str = "",
    limit: int | None = None,
    offset: int = 0,
    ai: bool = True,
    engine: ArticleSearchEngine = Depends(get_search_engine),
):
    """
    Search published articles.

    - **q**: Search query text (blank returns no results)
    - **limit**: Maximum results (1-100)
    - **offset**: Results to skip
    - **ai**: Use AI query enhancement when available
    """
    if limit is None:
        limit = get_settings().search_default_limit

    try:
        query = SearchQuery(query=q, limit=limit, offset=offset, use_ai=ai)
    except ValidationError as e:
        raise SearchError(
            "Invalid search parameters",
            {"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]},
        ) from e

    return await engine.search(query)


@router.post("/enhance", response_model=EnhancementResult)
async def enhance_query(
    request: EnhanceRequest,
    enhancer: QueryEnhancer = Depends(get_query_enhancer),
):
    """
    Show how a query would be enhanced.

    Always answers 200: when enhancement is unavailable or fails the
    result echoes the query with type "standard".
    """
    return await enhancer.enhance(request.query)
