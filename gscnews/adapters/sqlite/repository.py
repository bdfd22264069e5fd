"""
SQLite Repository - Article storage with token search.

Features:
- Async operations via aiosqlite
- Case-insensitive substring matching across article text fields
- Published-only search ordered by publication date
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from gscnews.config import ErrorCode, StorageError

logger = logging.getLogger(__name__)

__all__ = ["ArticleRepository"]

# Columns matched against every search token
SEARCHABLE_COLUMNS = ("title", "summary", "content", "slug", "published_by")


def _like_pattern(token: str) -> str:
    """Wrap token for LIKE, escaping wildcard characters."""
    escaped = token.casefold().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _casefold(value: Any) -> Any:
    """Unicode case folding for SQL; LIKE only folds ASCII."""
    return value.casefold() if isinstance(value, str) else value


def _row_to_dict(row: aiosqlite.Row) -> dict[str, Any]:
    data = dict(row)
    data["tags"] = json.loads(data["tags"]) if data.get("tags") else []
    data["featured"] = bool(data.get("featured"))
    return data


class ArticleRepository:
    """
    SQLite repository for news articles.

    Example:
        >>> repo = ArticleRepository("data/gscnews.db")
        >>> await repo.initialize()
        >>> await repo.insert_article(title="Port congestion", slug="port-congestion", ...)
        >>> rows, total = await repo.search_articles(["port"])
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Initialize repository.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: aiosqlite.Connection | None = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = await aiosqlite.connect(str(self.db_path))
            except aiosqlite.Error as e:
                raise StorageError(
                    f"Could not open database: {self.db_path}",
                    {"error": str(e)},
                ) from e
            self._connection.row_factory = aiosqlite.Row
            await self._connection.create_function("casefold", 1, _casefold, deterministic=True)
        return self._connection

    async def initialize(self) -> None:
        """Initialize database schema."""
        conn = await self._get_connection()

        await conn.executescript("""
            CREATE TABLE IF NOT EXISTS articles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                slug TEXT NOT NULL UNIQUE,
                summary TEXT NOT NULL,
                content TEXT NOT NULL,
                image_url TEXT NOT NULL DEFAULT '',
                category_id INTEGER NOT NULL DEFAULT 0,
                tags TEXT,
                featured INTEGER NOT NULL DEFAULT 0,
                status TEXT NOT NULL DEFAULT 'published',
                published_at TEXT NOT NULL,
                published_by TEXT,
                views INTEGER NOT NULL DEFAULT 0
            );

            CREATE INDEX IF NOT EXISTS idx_articles_status ON articles(status);
            CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles(published_at);
        """)

        await conn.commit()
        logger.info("Database initialized: %s", self.db_path)

    async def insert_article(
        self,
        title: str,
        slug: str,
        summary: str,
        content: str,
        image_url: str = "",
        category_id: int = 0,
        tags: list[str] | None = None,
        featured: bool = False,
        status: str = "published",
        published_at: datetime | None = None,
        published_by: str | None = None,
    ) -> int:
        """
        Insert an article.

        Returns:
            Article ID

        Raises:
            StorageError: Slug already exists (STORAGE_WRITE_FAILED) or a
                required column is null (VALIDATION_ERROR)
        """
        conn = await self._get_connection()
        published = published_at or datetime.now(timezone.utc)

        try:
            cursor = await conn.execute(
                """
                INSERT INTO articles
                (title, slug, summary, content, image_url, category_id, tags,
                 featured, status, published_at, published_by)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    title,
                    slug,
                    summary,
                    content,
                    image_url,
                    category_id,
                    json.dumps(tags) if tags else None,
                    int(featured),
                    status,
                    published.isoformat(),
                    published_by,
                ),
            )
        except aiosqlite.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise StorageError(
                    f"Article slug already exists: {slug}",
                    {"slug": slug},
                    code=ErrorCode.STORAGE_WRITE_FAILED,
                ) from e
            raise StorageError(
                f"Article rejected by schema constraint: {slug}",
                {"slug": slug, "error": str(e)},
                code=ErrorCode.VALIDATION_ERROR,
            ) from e

        await conn.commit()
        return cursor.lastrowid

    async def get_article_by_slug(self, slug: str) -> dict[str, Any] | None:
        """Get article by slug."""
        conn = await self._get_connection()

        cursor = await conn.execute("SELECT * FROM articles WHERE slug = ?", (slug,))
        row = await cursor.fetchone()

        if row:
            return _row_to_dict(row)
        return None

    async def search_articles(
        self,
        tokens: list[str],
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Find published articles containing any of the tokens.

        A token matches when it appears (case-insensitive) in the title,
        summary, content, slug or author of an article.

        Args:
            tokens: Search tokens; an empty list matches nothing
            limit: Page size
            offset: Rows to skip

        Returns:
            (page of article rows newest first, total match count)
        """
        tokens = [t for t in tokens if t]
        if not tokens:
            return [], 0

        conn = await self._get_connection()

        token_clause = " OR ".join(
            f"casefold({column}) LIKE ? ESCAPE '\\'"
            for _ in tokens
            for column in SEARCHABLE_COLUMNS
        )
        where = f"status = 'published' AND ({token_clause})"
        params: list[Any] = [
            _like_pattern(token) for token in tokens for _ in SEARCHABLE_COLUMNS
        ]

        try:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM articles WHERE {where}", params)
            count_row = await cursor.fetchone()
            total = count_row[0] if count_row else 0

            cursor = await conn.execute(
                f"""
                SELECT * FROM articles
                WHERE {where}
                ORDER BY published_at DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageError(
                "Article search failed",
                {"error": str(e)},
                code=ErrorCode.STORAGE_READ_FAILED,
            ) from e

        logger.debug("Article search: %d tokens -> %d matches", len(tokens), total)
        return [_row_to_dict(row) for row in rows], total

    async def get_article_count(self) -> int:
        """Get total article count."""
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT COUNT(*) FROM articles")
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None
