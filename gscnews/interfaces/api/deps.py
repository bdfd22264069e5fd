"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of storage and enhancement services.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from gscnews.adapters.sqlite import ArticleRepository
from gscnews.config import get_settings
from gscnews.domains.search import ArticleSearchEngine, QueryEnhancer


@lru_cache
def get_article_repository() -> ArticleRepository:
    """Get article repository singleton."""
    settings = get_settings()
    return ArticleRepository(settings.db_path)


@lru_cache
def get_query_enhancer() -> QueryEnhancer:
    """Get query enhancer singleton."""
    return QueryEnhancer(settings=get_settings())


def get_search_engine(
    repo: ArticleRepository = Depends(get_article_repository),
    enhancer: QueryEnhancer = Depends(get_query_enhancer),
) -> ArticleSearchEngine:
    """Search engine wired to the current repository and enhancer."""
    return ArticleSearchEngine(repo, enhancer)


async def init_services() -> None:
    """
    Initialize services on startup.

    This should be called from the FastAPI lifespan handler.
    """
    repo = get_article_repository()
    await repo.initialize()

    # Builds the enhancer so a missing API key is reported at startup
    get_query_enhancer()


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    repo = get_article_repository()
    await repo.close()
