"""
Search Domain - Article search with AI query enhancement.

This domain handles:
- Query enhancement via a completion service, with deterministic fallback
- Decoding and validating model replies
- Token search over published articles
"""

from .article_search import ArticleSearchEngine, build_search_tokens
from .contracts import ArticleStore, CompletionProvider, SearchEngine, SearchEnhancer
from .decoding import DecodeFailure, decode_enhancement
from .enhancer import QueryEnhancer
from .models import (
    Article,
    EnhancementResult,
    EnhancementType,
    SearchQuery,
    SearchResponse,
)

__all__ = [
    # Contracts
    "CompletionProvider",
    "SearchEnhancer",
    "ArticleStore",
    "SearchEngine",
    # Models
    "EnhancementType",
    "EnhancementResult",
    "SearchQuery",
    "Article",
    "SearchResponse",
    # Implementations
    "QueryEnhancer",
    "ArticleSearchEngine",
    "DecodeFailure",
    "decode_enhancement",
    "build_search_tokens",
]
