"""
Article Search Engine - Token search over published articles.

Features:
- Optional AI query enhancement (falls back to the raw query)
- Related terms widen the token set
- Newest-first paging with total count
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import Article, SearchQuery, SearchResponse

if TYPE_CHECKING:
    from .contracts import ArticleStore, SearchEnhancer

logger = logging.getLogger(__name__)

__all__ = ["ArticleSearchEngine", "build_search_tokens"]


def build_search_tokens(normalized_query: str, related_terms: list[str]) -> list[str]:
    """
    Tokens to match: the whole query, its words longer than one character,
    then related terms. Order-preserving, no duplicates, no empty tokens.
    """
    words = [word.strip() for word in normalized_query.split()]
    candidates = [normalized_query, *(w for w in words if len(w) > 1), *related_terms]
    return [token for token in dict.fromkeys(candidates) if token]


class ArticleSearchEngine:
    """
    Article search with optional query enhancement.

    Example:
        >>> engine = ArticleSearchEngine(repo, QueryEnhancer())
        >>> response = await engine.search(SearchQuery(query="container shortage"))
    """

    def __init__(
        self,
        store: ArticleStore,
        enhancer: SearchEnhancer | None = None,
    ) -> None:
        """
        Initialize search engine.

        Args:
            store: Article storage
            enhancer: Query enhancer; None disables AI enhancement
        """
        self._store = store
        self._enhancer = enhancer

    async def search(self, query: SearchQuery) -> SearchResponse:
        """
        Execute article search.

        Args:
            query: Search parameters

        Returns:
            Page of matching articles, total count, and the enhanced query
            when enhancement changed it
        """
        raw_normalized = query.query.strip().lower()
        if not raw_normalized:
            return SearchResponse(articles=[], total=0)

        normalized = raw_normalized
        related_terms: list[str] = []
        query_context: str | None = None

        if query.use_ai and self._enhancer is not None:
            enhancement = await self._enhancer.enhance(query.query)
            normalized = enhancement.enhanced_query.strip().lower() or raw_normalized
            related_terms = list(enhancement.related_terms)
            query_context = enhancement.query_context

        tokens = build_search_tokens(normalized, related_terms)
        rows, total = await self._store.search_articles(
            tokens,
            limit=query.limit,
            offset=query.offset,
        )

        logger.info(
            "Article search: query='%s' -> %d/%d results (tokens=%d)",
            query.query[:50],
            len(rows),
            total,
            len(tokens),
        )

        return SearchResponse(
            articles=[Article.model_validate(row) for row in rows],
            total=total,
            enhanced_query=normalized if normalized != raw_normalized else None,
            query_context=query_context,
        )
