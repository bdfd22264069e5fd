"""
Perplexity Models - Request/Response types for the chat completions API.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from gscnews.config.errors import ErrorCode


class PerplexityConfig(BaseModel):
    """Configuration for Perplexity client."""

    api_url: str = Field(default="https://api.perplexity.ai/chat/completions")
    model: str = Field(default="llama-3.1-sonar-small-128k-online")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1024, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0.0)

    model_config = {"frozen": True}


class ChatMessage(BaseModel):
    """Single conversation turn."""

    role: Literal["system", "user", "assistant"]
    content: str

    model_config = {"frozen": True}


# --- Response envelope ---


class ChoiceMessage(BaseModel):
    content: str


class Choice(BaseModel):
    message: ChoiceMessage


class CompletionUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionEnvelope(BaseModel):
    """Top-level JSON returned by /chat/completions."""

    id: str = ""
    model: str = ""
    choices: list[Choice] = Field(..., min_length=1)
    usage: CompletionUsage = Field(default_factory=CompletionUsage)


# --- Transport outcome ---


class CompletionSuccess(BaseModel):
    """Upstream answered with a usable first choice."""

    ok: Literal[True] = True
    content: str
    model: str = ""
    response_id: str = ""
    usage: CompletionUsage = Field(default_factory=CompletionUsage)

    model_config = {"frozen": True}


class CompletionFailure(BaseModel):
    """Request could not produce a completion. Never raised, always returned."""

    ok: Literal[False] = False
    code: ErrorCode
    message: str
    status_code: int | None = None
    body: str | None = None

    model_config = {"frozen": True}


CompletionOutcome = CompletionSuccess | CompletionFailure
