"""
Search Models - Data types for search domain.
"""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

# Confidence used when the upstream payload has no usable score
DEFAULT_UPSTREAM_CONFIDENCE = 0.8


class EnhancementType(str, Enum):
    """How a query was enhanced."""

    SEMANTIC = "semantic"
    NATURAL_LANGUAGE = "natural-language"
    STANDARD = "standard"


class EnhancementResult(BaseModel):
    """Outcome of query enhancement. Serializes with camelCase keys."""

    enhanced_query: str
    related_terms: list[str] = Field(default_factory=list)
    enhancement_type: EnhancementType = EnhancementType.STANDARD
    confidence_score: float = Field(default=1.0, ge=0.0, le=1.0)
    query_context: str | None = None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    @classmethod
    def default(cls, original_query: str) -> EnhancementResult:
        """Deterministic result used whenever enhancement is skipped or fails."""
        return cls(
            enhanced_query=original_query,
            related_terms=[],
            enhancement_type=EnhancementType.STANDARD,
            confidence_score=1.0,
            query_context=None,
        )


class UpstreamEnhancement(BaseModel):
    """
    Decoded AI payload with per-field defaulting.

    Each validator substitutes a safe value instead of failing, so any JSON
    object decodes. The missing query is resolved against the original
    query in to_result().
    """

    enhanced_query: str | None = None
    related_terms: list[str] = Field(default_factory=list)
    enhancement_type: EnhancementType = EnhancementType.STANDARD
    confidence_score: float = DEFAULT_UPSTREAM_CONFIDENCE
    query_context: str | None = None

    model_config = {"populate_by_name": True, "alias_generator": to_camel, "extra": "ignore"}

    @field_validator("enhanced_query", "query_context", mode="before")
    @classmethod
    def _non_blank_string(cls, value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value
        return None

    @field_validator("related_terms", mode="before")
    @classmethod
    def _string_list(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [term.strip() for term in value if isinstance(term, str) and term.strip()]

    @field_validator("enhancement_type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> EnhancementType:
        if isinstance(value, str):
            try:
                return EnhancementType(value.strip().lower())
            except ValueError:
                pass
        return EnhancementType.STANDARD

    @field_validator("confidence_score", mode="before")
    @classmethod
    def _clamped_score(cls, value: Any) -> float:
        # bool is an int subclass but not a score
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return DEFAULT_UPSTREAM_CONFIDENCE
        # ints may exceed float range, clamp before converting
        if isinstance(value, int):
            return float(max(0, min(1, value)))
        if math.isnan(value):
            return DEFAULT_UPSTREAM_CONFIDENCE
        return max(0.0, min(1.0, value))

    def to_result(self, original_query: str) -> EnhancementResult:
        return EnhancementResult(
            enhanced_query=self.enhanced_query or original_query,
            related_terms=list(self.related_terms),
            enhancement_type=self.enhancement_type,
            confidence_score=self.confidence_score,
            query_context=self.query_context,
        )


class SearchQuery(BaseModel):
    """Article search request."""

    query: str = Field(default="", max_length=500)
    limit: int = Field(default=10, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    use_ai: bool = True

    model_config = {"frozen": True}


class Article(BaseModel):
    """Published news article as returned by search."""

    id: int
    title: str
    slug: str
    summary: str
    content: str
    image_url: str = ""
    category_id: int = 0
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    status: str = "published"
    published_at: datetime
    published_by: str | None = None
    views: int = 0

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


class SearchResponse(BaseModel):
    """Page of matching articles plus enhancement details."""

    articles: list[Article] = Field(default_factory=list)
    total: int = 0
    enhanced_query: str | None = None
    query_context: str | None = None

    model_config = {"populate_by_name": True, "alias_generator": to_camel}
