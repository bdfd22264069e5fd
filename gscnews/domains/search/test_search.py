"""
Tests for article search.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from gscnews.adapters.sqlite import ArticleRepository

from .article_search import ArticleSearchEngine, build_search_tokens
from .models import EnhancementResult, EnhancementType, SearchQuery, SearchResponse


def _row(id: int, slug: str, title: str = "Port congestion eases") -> dict:
    return {
        "id": id,
        "title": title,
        "slug": slug,
        "summary": "Summary",
        "content": "Content",
        "image_url": "",
        "category_id": 1,
        "tags": ["ports"],
        "featured": False,
        "status": "published",
        "published_at": "2024-03-01T12:00:00+00:00",
        "published_by": "Staff",
        "views": 0,
    }


@pytest.fixture
def store() -> AsyncMock:
    """Article store returning one row."""
    mock = AsyncMock()
    mock.search_articles.return_value = ([_row(1, "port-congestion-eases")], 1)
    return mock


@pytest.fixture
def enhancer() -> AsyncMock:
    """Enhancer rewriting the query with related terms."""
    mock = AsyncMock()
    mock.enhance.return_value = EnhancementResult(
        enhanced_query="Port Congestion 2024",
        related_terms=["supply chain", "shipping delays"],
        enhancement_type=EnhancementType.SEMANTIC,
        confidence_score=0.92,
        query_context="Delays at major ports",
    )
    return mock


# --- Token Tests ---


def test_tokens_from_single_word() -> None:
    """Test a one-word query yields one token."""
    assert build_search_tokens("ports", []) == ["ports"]


def test_tokens_include_phrase_and_words() -> None:
    """Test phrase comes first, then its words."""
    assert build_search_tokens("container shortage", []) == [
        "container shortage",
        "container",
        "shortage",
    ]


def test_tokens_skip_single_characters() -> None:
    """Test one-character words are not searched on their own."""
    assert build_search_tokens("a port x", []) == ["a port x", "port"]


def test_tokens_append_related_terms_without_duplicates() -> None:
    """Test related terms follow query words, deduplicated in order."""
    tokens = build_search_tokens("port congestion", ["congestion", "shipping delays", "port"])
    assert tokens == ["port congestion", "port", "congestion", "shipping delays"]


def test_tokens_drop_empty_entries() -> None:
    """Test empty query and terms produce no tokens."""
    assert build_search_tokens("", ["", "freight"]) == ["freight"]


# --- Engine Tests ---


@pytest.mark.parametrize("query", ["", "   "])
async def test_blank_query_returns_empty(store: AsyncMock, enhancer: AsyncMock, query: str) -> None:
    """Test blank queries touch neither enhancer nor store."""
    engine = ArticleSearchEngine(store, enhancer)

    response = await engine.search(SearchQuery(query=query))

    assert response == SearchResponse(articles=[], total=0)
    enhancer.enhance.assert_not_awaited()
    store.search_articles.assert_not_awaited()


async def test_search_without_enhancer(store: AsyncMock) -> None:
    """Test plain search normalizes the query and reports no rewrite."""
    engine = ArticleSearchEngine(store)

    response = await engine.search(SearchQuery(query="  Container Shortage "))

    store.search_articles.assert_awaited_once_with(
        ["container shortage", "container", "shortage"], limit=10, offset=0
    )
    assert response.total == 1
    assert response.articles[0].slug == "port-congestion-eases"
    assert response.enhanced_query is None
    assert response.query_context is None


async def test_search_with_enhancement(store: AsyncMock, enhancer: AsyncMock) -> None:
    """Test enhanced query and related terms drive the token set."""
    engine = ArticleSearchEngine(store, enhancer)

    response = await engine.search(SearchQuery(query="why are ports backed up", limit=5, offset=5))

    enhancer.enhance.assert_awaited_once_with("why are ports backed up")
    store.search_articles.assert_awaited_once_with(
        ["port congestion 2024", "port", "congestion", "2024", "supply chain", "shipping delays"],
        limit=5,
        offset=5,
    )
    assert response.enhanced_query == "port congestion 2024"
    assert response.query_context == "Delays at major ports"


async def test_search_ai_disabled(store: AsyncMock, enhancer: AsyncMock) -> None:
    """Test use_ai=False bypasses the enhancer."""
    engine = ArticleSearchEngine(store, enhancer)

    response = await engine.search(SearchQuery(query="freight rates", use_ai=False))

    enhancer.enhance.assert_not_awaited()
    assert response.enhanced_query is None


async def test_search_with_fallback_enhancement(store: AsyncMock) -> None:
    """Test default enhancement result leaves enhanced_query unset."""
    enhancer = AsyncMock()
    enhancer.enhance.return_value = EnhancementResult.default("Rail Strike")
    engine = ArticleSearchEngine(store, enhancer)

    response = await engine.search(SearchQuery(query="Rail Strike"))

    store.search_articles.assert_awaited_once_with(
        ["rail strike", "rail", "strike"], limit=10, offset=0
    )
    assert response.enhanced_query is None


async def test_search_serializes_camel_case(store: AsyncMock) -> None:
    """Test response JSON uses camelCase keys."""
    engine = ArticleSearchEngine(store)

    response = await engine.search(SearchQuery(query="ports"))
    data = response.model_dump(by_alias=True, mode="json")

    assert set(data) == {"articles", "total", "enhancedQuery", "queryContext"}
    article = data["articles"][0]
    assert article["imageUrl"] == ""
    assert article["publishedAt"].startswith("2024-03-01T12:00:00")
    assert article["publishedBy"] == "Staff"


# --- Integration Tests ---


@pytest.fixture
async def repo(tmp_path: Path) -> ArticleRepository:
    """Repository with a few articles."""
    repository = ArticleRepository(tmp_path / "search.db")
    await repository.initialize()

    await repository.insert_article(
        title="Port congestion eases on the West Coast",
        slug="port-congestion-eases",
        summary="Container dwell times fall.",
        content="Terminal operators report shorter queues.",
        published_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )
    await repository.insert_article(
        title="Shipping delays hit retailers",
        slug="shipping-delays-retail",
        summary="Holiday stock arrives late.",
        content="Retailers scramble for inventory.",
        published_at=datetime(2024, 3, 5, tzinfo=timezone.utc),
    )
    await repository.insert_article(
        title="Warehouse robotics spending rises",
        slug="warehouse-robotics",
        summary="Automation budgets grow.",
        content="Operators invest in picking robots.",
        published_at=datetime(2024, 3, 10, tzinfo=timezone.utc),
    )

    yield repository
    await repository.close()


async def test_engine_with_repository(repo: ArticleRepository) -> None:
    """Test related terms pull in articles the raw query misses."""
    enhancer = AsyncMock()
    enhancer.enhance.return_value = EnhancementResult(
        enhanced_query="port congestion",
        related_terms=["shipping delays"],
        enhancement_type=EnhancementType.SEMANTIC,
        confidence_score=0.9,
    )
    engine = ArticleSearchEngine(repo, enhancer)

    response = await engine.search(SearchQuery(query="why are ports backed up"))

    assert response.total == 2
    assert [a.slug for a in response.articles] == [
        "shipping-delays-retail",
        "port-congestion-eases",
    ]
    assert response.enhanced_query == "port congestion"


async def test_engine_with_repository_no_ai(repo: ArticleRepository) -> None:
    """Test plain search over stored articles."""
    engine = ArticleSearchEngine(repo)

    response = await engine.search(SearchQuery(query="Robots"))

    assert response.total == 1
    assert response.articles[0].slug == "warehouse-robotics"
    assert response.articles[0].published_at == datetime(2024, 3, 10, tzinfo=timezone.utc)


async def test_engine_matches_non_ascii_case_insensitively(repo: ArticleRepository) -> None:
    """Test umlauts match whatever case the query uses."""
    await repo.insert_article(
        title="Überseehafen Hamburg überlastet",
        slug="hamburg-hafen",
        summary="Container stapeln sich.",
        content="Reedereien melden Wartezeiten.",
        published_at=datetime(2024, 3, 12, tzinfo=timezone.utc),
    )
    engine = ArticleSearchEngine(repo)

    for query in ("Überseehafen", "ÜBERSEEHAFEN", "überseehafen"):
        response = await engine.search(SearchQuery(query=query, use_ai=False))
        assert response.total == 1
        assert response.articles[0].slug == "hamburg-hafen"
