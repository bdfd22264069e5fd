"""
Query Enhancer - AI-assisted rewrite of raw search queries.

Flow per call:
    check preconditions -> (skip to default) | request completion
    -> (default on failure) | decode -> (default on failure) | result

The enhancer is total: every failure path returns the same default result
(original query, no related terms, "standard", confidence 1.0).
"""

from __future__ import annotations

import logging

from gscnews.adapters.perplexity import CompletionFailure, PerplexityClient
from gscnews.config import Settings

from .contracts import CompletionProvider
from .decoding import DecodeFailure, decode_enhancement
from .models import EnhancementResult
from .prompts import build_enhancement_messages

logger = logging.getLogger(__name__)

__all__ = ["QueryEnhancer"]


class QueryEnhancer:
    """
    Rewrites search queries through a completion service.

    Example:
        >>> enhancer = QueryEnhancer()
        >>> result = await enhancer.enhance("why are ports backed up")
        >>> result.enhanced_query, result.related_terms
        ('port congestion 2024', ['supply chain', 'shipping delays'])
    """

    def __init__(
        self,
        provider: CompletionProvider | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the enhancer.

        Args:
            provider: Completion backend (default: PerplexityClient from settings)
            settings: Settings used to build the default provider
        """
        self._provider = provider or PerplexityClient.from_settings(settings)

        if not self.available:
            logger.warning(
                "PERPLEXITY_API_KEY is not set. AI-enhanced search will be limited."
            )

    @property
    def available(self) -> bool:
        """Whether enhancement can reach an upstream service."""
        return self._provider.configured

    async def enhance(self, original_query: str) -> EnhancementResult:
        """
        Enhance a raw search query.

        Args:
            original_query: The user's search input

        Returns:
            Enhanced result, or the default result when enhancement is
            unavailable, the query is blank, or anything fails
        """
        default = EnhancementResult.default(original_query)

        try:
            if not self.available or not original_query.strip():
                return default
            return await self._request_enhancement(original_query, default)
        except Exception:
            logger.exception('Error enhancing search query: "%s"', original_query)
            return default

    async def _request_enhancement(
        self,
        original_query: str,
        default: EnhancementResult,
    ) -> EnhancementResult:
        logger.info('Enhancing search query: "%s"', original_query)

        outcome = await self._provider.complete(build_enhancement_messages(original_query))
        if isinstance(outcome, CompletionFailure):
            logger.warning(
                "Query enhancement failed (%s): %s", outcome.code.value, outcome.message
            )
            return default

        decoded = decode_enhancement(outcome.content, original_query)
        if isinstance(decoded, DecodeFailure):
            logger.error("Error parsing AI response: %s", decoded.reason)
            logger.error("Raw response: %s", decoded.raw)
            return default

        logger.info('Enhanced query: "%s"', decoded.enhanced_query)
        logger.info("Related terms: %s", ", ".join(decoded.related_terms))
        return decoded
