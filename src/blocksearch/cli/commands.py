"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from blocksearch.config import Settings, load_config
from blocksearch.core.dates import resolve_range
from blocksearch.core.errors import QueryError, ValidationError
from blocksearch.core.search import search_block_usage, validate_block_name
from blocksearch.core.utils.log import setup_logging
from blocksearch.crud.database import has_schema, init_db, make_engine, reset_db
from blocksearch.crud.posts import import_posts, load_records
from blocksearch.crud.sql_repo import SQLRepo


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def search_cmd(
    date_before: Annotated[Optional[str], typer.Option("--date-before", help="Posts published on or before this date (YYYY-MM-DD)")] = None,
    date_after: Annotated[Optional[str], typer.Option("--date-after", help="Posts published on or after this date (YYYY-MM-DD)")] = None,
    block: Annotated[Optional[str], typer.Option("--block", help="Namespaced block name to search for")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Verification threads")] = None,
    ):
    """Search for published posts containing a block within a date range."""
    settings = _settings(overrides={"block_name": block, "workers": workers})

    try:
        date_range, defaulted = resolve_range(date_after, date_before, window_days=settings.window_days)
        block_name = validate_block_name(settings.block_name)
    except ValidationError as e:
        _fail(str(e))
    if defaulted:
        typer.echo(
            f"No date range specified. Searching last {settings.window_days} days "
            f"(since {date_range.after.isoformat()})."
        )

    typer.echo(f"Searching for posts containing {block_name} blocks...")
    try:
        engine = make_engine(settings.db_url)
        if not has_schema(engine):
            _fail(f"Database not initialized at {settings.db_url}. Run 'blocksearch init' first.")
        post_ids = search_block_usage(
            block_name, date_range, SQLRepo(engine),
            status=settings.post_status, post_type=settings.post_type, workers=settings.workers,
        )
    except ValidationError as e:
        _fail(str(e))
    except (QueryError, SQLAlchemyError) as e:
        _fail("Error during search", e)

    if not post_ids:
        typer.echo(f"No posts found containing the {block_name} block in the specified date range.")
        return

    typer.echo(f"Found {len(post_ids)} post(s) containing the {block_name} block:")
    for post_id in post_ids:
        typer.echo(f"Post ID: {post_id}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def import_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="JSON or JSON-lines file of posts")],
    ):
    """Upsert posts from a JSON export into the database."""
    settings = _settings()
    try:
        records = load_records(path)
    except ValueError as e:
        _fail(str(e))

    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            counts = import_posts(session, records)
            session.commit()
    except (ValueError, SQLAlchemyError) as e:
        _fail("Import failed", e)

    typer.echo(
        f"Import complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )
