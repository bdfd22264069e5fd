"""
Perplexity Adapter - Chat completions client used for query enhancement.

This is the ONLY place that calls the Perplexity API.
"""

from .client import PerplexityClient
from .models import (
    ChatMessage,
    CompletionFailure,
    CompletionOutcome,
    CompletionSuccess,
    PerplexityConfig,
)

__all__ = [
    "PerplexityClient",
    "PerplexityConfig",
    "ChatMessage",
    "CompletionOutcome",
    "CompletionSuccess",
    "CompletionFailure",
]
