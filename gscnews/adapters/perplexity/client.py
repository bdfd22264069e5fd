"""
Perplexity Client - Chat completions over HTTPS.

This is the ONLY place that calls the Perplexity API.

Features:
- Bearer-token auth from settings (missing key disables the client)
- One attempt per call, no retries
- Explicit outcome type: HTTP, transport and envelope errors are
  returned as CompletionFailure, never raised
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gscnews.config import ErrorCode, Settings, get_settings

from .models import (
    ChatCompletionEnvelope,
    ChatMessage,
    CompletionFailure,
    CompletionOutcome,
    CompletionSuccess,
    PerplexityConfig,
)

logger = logging.getLogger(__name__)

__all__ = ["PerplexityClient"]


class PerplexityClient:
    """
    Perplexity chat completions client.

    Example:
        >>> client = PerplexityClient(api_key="pplx-...")
        >>> outcome = await client.complete([ChatMessage(role="user", content="hi")])
        >>> if outcome.ok:
        ...     print(outcome.content)
    """

    def __init__(
        self,
        api_key: str | None,
        config: PerplexityConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Perplexity client.

        Args:
            api_key: Bearer token. None or blank disables the client.
            config: Model and request parameters. Uses defaults if None.
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._api_key = api_key.strip() if api_key else None
        self.config = config or PerplexityConfig()
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> PerplexityClient:
        """Build a client from application settings."""
        settings = settings or get_settings()
        config = PerplexityConfig(
            api_url=settings.perplexity_api_url,
            model=settings.perplexity_model,
            temperature=settings.perplexity_temperature,
            max_tokens=settings.perplexity_max_tokens,
            timeout_seconds=settings.perplexity_timeout_seconds,
        )
        return cls(settings.perplexity_api_key, config=config, transport=transport)

    @property
    def configured(self) -> bool:
        """Whether a credential is available."""
        return bool(self._api_key)

    def build_payload(self, messages: list[ChatMessage]) -> dict[str, Any]:
        """Request body for /chat/completions."""
        return {
            "model": self.config.model,
            "messages": [m.model_dump() for m in messages],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "stream": False,
        }

    async def complete(self, messages: list[ChatMessage]) -> CompletionOutcome:
        """
        Send a single chat completion request.

        Args:
            messages: Conversation turns (system + user)

        Returns:
            CompletionSuccess with the first choice's content, or
            CompletionFailure describing what went wrong
        """
        if not self._api_key:
            return CompletionFailure(
                code=ErrorCode.LLM_UNAVAILABLE,
                message="Perplexity API key is not configured",
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.config.api_url,
                    headers=headers,
                    json=self.build_payload(messages),
                )
        except httpx.TimeoutException:
            logger.warning(
                "Perplexity request timed out after %.1fs", self.config.timeout_seconds
            )
            return CompletionFailure(
                code=ErrorCode.LLM_TRANSPORT_ERROR,
                message=f"Request timed out after {self.config.timeout_seconds}s",
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Perplexity request failed: %s (type: %s)",
                str(e) or repr(e),
                type(e).__name__,
            )
            return CompletionFailure(
                code=ErrorCode.LLM_TRANSPORT_ERROR,
                message=str(e) or type(e).__name__,
            )

        if not response.is_success:
            logger.error(
                "Perplexity API error: %s %s", response.status_code, response.reason_phrase
            )
            logger.error("Error details: %s", response.text)
            return CompletionFailure(
                code=ErrorCode.LLM_HTTP_ERROR,
                message=f"Perplexity API error: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            envelope = ChatCompletionEnvelope.model_validate(response.json())
        except ValueError as e:
            # Covers json.JSONDecodeError and pydantic.ValidationError
            logger.error("Malformed Perplexity response envelope: %s", e)
            return CompletionFailure(
                code=ErrorCode.LLM_INVALID_RESPONSE,
                message="Malformed response envelope",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(
            "Perplexity completion: model=%s tokens=%d",
            envelope.model,
            envelope.usage.total_tokens,
        )

        return CompletionSuccess(
            content=envelope.choices[0].message.content,
            model=envelope.model,
            response_id=envelope.id,
            usage=envelope.usage,
        )
