"""
CLI Main - Typer-based command-line interface.

Usage:
    gscnews enhance "why are ports backed up"
    gscnews search "container shortage" --limit 5
    gscnews import-articles articles.json
    gscnews serve
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from gscnews.config import GSCNewsError

app = typer.Typer(
    name="gscnews",
    help="GSC News - Supply chain news search",
    add_completion=False,
)
console = Console()


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@app.command()
def enhance(
    query: str = typer.Argument(..., help="Search query to enhance"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON result"),
) -> None:
    """Show how the AI service rewrites a search query."""
    asyncio.run(_enhance_async(query, as_json))


async def _enhance_async(query: str, as_json: bool) -> None:
    """Async enhancement implementation."""
    from gscnews.domains.search import EnhancementType, QueryEnhancer

    enhancer = QueryEnhancer()
    if not enhancer.available:
        console.print("[yellow]PERPLEXITY_API_KEY not set; showing fallback result.[/yellow]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Enhancing...", total=None)
        result = await enhancer.enhance(query)

    if as_json:
        console.print_json(result.model_dump_json(by_alias=True))
        return

    table = Table(title="Query Enhancement")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Original", query)
    table.add_row("Enhanced", result.enhanced_query)
    table.add_row("Type", result.enhancement_type.value)
    table.add_row("Confidence", f"{result.confidence_score:.0%}")
    table.add_row("Related terms", ", ".join(result.related_terms) or "-")
    console.print(table)

    if result.query_context:
        console.print(Panel(result.query_context, title="Context"))

    if result.enhancement_type == EnhancementType.STANDARD and enhancer.available:
        console.print("[dim]Standard result: the query is searched as typed.[/dim]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of results"),
    offset: int = typer.Option(0, "--offset", help="Results to skip"),
    ai: bool = typer.Option(True, "--ai/--no-ai", help="Use AI query enhancement"),
) -> None:
    """Search published articles."""
    asyncio.run(_search_async(query, limit, offset, ai))


async def _search_async(query: str, limit: int, offset: int, ai: bool) -> None:
    """Async search implementation."""
    from pydantic import ValidationError

    from gscnews.adapters.sqlite import ArticleRepository
    from gscnews.config import get_settings
    from gscnews.domains.search import ArticleSearchEngine, QueryEnhancer, SearchQuery

    settings = get_settings()

    try:
        search_query = SearchQuery(query=query, limit=limit, offset=offset, use_ai=ai)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    repo = ArticleRepository(settings.db_path)
    try:
        await repo.initialize()
        engine = ArticleSearchEngine(repo, QueryEnhancer(settings=settings) if ai else None)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Searching...", total=None)
            response = await engine.search(search_query)
    except GSCNewsError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    finally:
        await repo.close()

    if response.enhanced_query:
        console.print(f"[dim]Searched for:[/dim] {response.enhanced_query}")
    if response.query_context:
        console.print(f"[dim]Context:[/dim] {response.query_context}")

    if not response.articles:
        console.print(f'\n[yellow]No results found for "{query}"[/yellow]')
        return

    table = Table(title=f'{response.total} result(s) for "{query}"')
    table.add_column("Published", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Slug", style="cyan")

    for article in response.articles:
        table.add_row(
            article.published_at.strftime("%Y-%m-%d"),
            article.title,
            article.slug,
        )

    console.print(table)


@app.command("import-articles")
def import_articles(
    json_path: Path = typer.Argument(..., help="JSON file with a list of articles"),
) -> None:
    """Load articles from a JSON file into the database."""
    if not json_path.exists():
        console.print(f"[red]Error:[/red] File not found: {json_path}")
        raise typer.Exit(1)

    asyncio.run(_import_async(json_path))


async def _import_async(json_path: Path) -> None:
    """Async import implementation."""
    from gscnews.adapters.sqlite import ArticleRepository
    from gscnews.config import get_settings

    settings = get_settings()

    try:
        records = json.loads(json_path.read_text())
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON: {e}")
        raise typer.Exit(1)

    if not isinstance(records, list):
        console.print("[red]Error:[/red] Expected a JSON list of articles")
        raise typer.Exit(1)

    repo = ArticleRepository(settings.db_path)
    imported = 0
    skipped = 0

    try:
        await repo.initialize()
        for position, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                skipped += 1
                console.print(
                    f"[yellow]Skipped:[/yellow] entry {position} is not an object "
                    f"({type(record).__name__})"
                )
                continue

            published_at = record.get("publishedAt") or record.get("published_at")
            try:
                await repo.insert_article(
                    title=record["title"],
                    slug=record["slug"],
                    summary=record.get("summary") or "",
                    content=record.get("content") or "",
                    image_url=record.get("imageUrl") or record.get("image_url") or "",
                    category_id=record.get("categoryId") or record.get("category_id") or 0,
                    tags=record.get("tags"),
                    featured=bool(record.get("featured", False)),
                    status=record.get("status") or "published",
                    published_at=datetime.fromisoformat(published_at) if published_at else None,
                    published_by=record.get("publishedBy") or record.get("published_by"),
                )
                imported += 1
            except (KeyError, ValueError, GSCNewsError) as e:
                skipped += 1
                console.print(f"[yellow]Skipped:[/yellow] {record.get('slug', '?')} ({e})")
    finally:
        await repo.close()

    console.print(f"\n[green]Imported {imported} article(s)[/green], skipped {skipped}")


@app.command()
def init(
    data_dir: Path | None = typer.Option(None, "--data", "-d", help="Data directory"),
) -> None:
    """Initialize the article database."""
    asyncio.run(_init_async(data_dir))


async def _init_async(data_dir: Path | None) -> None:
    """Async initialization."""
    from gscnews.adapters.sqlite import ArticleRepository
    from gscnews.config import get_settings

    settings = get_settings()
    db_path = (data_dir / settings.db_path.name) if data_dir else settings.db_path

    repo = ArticleRepository(db_path)
    try:
        await repo.initialize()
        count = await repo.get_article_count()
    finally:
        await repo.close()

    console.print("\n[green]Initialization complete![/green]")
    console.print(f"[dim]Database: {db_path} ({count} articles)[/dim]")
    if not settings.enhancement_configured:
        console.print("[yellow]PERPLEXITY_API_KEY not set: AI query enhancement disabled.[/yellow]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    from gscnews.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting GSC News API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "gscnews.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from gscnews import __version__

    console.print(f"GSC News v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
