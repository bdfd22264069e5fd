"""
Adapters - External service integrations.

All external API calls are wrapped here to isolate domains from third-party changes.
"""

from .perplexity import PerplexityClient
from .sqlite import ArticleRepository

__all__ = [
    "PerplexityClient",
    "ArticleRepository",
]
