"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from gscnews.adapters.perplexity import ChatMessage, CompletionOutcome

from .models import EnhancementResult, SearchQuery, SearchResponse


@runtime_checkable
class CompletionProvider(Protocol):
    """Contract for chat completion backends."""

    @property
    def configured(self) -> bool:
        """Whether the backend has the credentials it needs."""
        ...

    async def complete(self, messages: list[ChatMessage]) -> CompletionOutcome:
        """Run one completion. Must return failures, not raise them."""
        ...


@runtime_checkable
class SearchEnhancer(Protocol):
    """Contract for query enhancement implementations."""

    @property
    def available(self) -> bool:
        """Whether enhancement can reach an upstream service."""
        ...

    async def enhance(self, original_query: str) -> EnhancementResult:
        """Enhance a raw query. Never raises."""
        ...


@runtime_checkable
class ArticleStore(Protocol):
    """Contract for article storage used by search."""

    async def search_articles(
        self,
        tokens: list[str],
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[dict[str, Any]], int]:
        """Return a page of published matches and the total count."""
        ...


@runtime_checkable
class SearchEngine(Protocol):
    """Contract for article search implementations."""

    async def search(self, query: SearchQuery) -> SearchResponse:
        """Execute search and return a page of results."""
        ...
