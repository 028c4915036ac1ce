"""Main CLI entry point for the Wikiquote ingestion pipeline."""
import sys
from pathlib import Path

import click
import anthropic
from anthropic import Anthropic
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from utils.logger import setup_logger
from storage.database import Database
from classification.author_classifier import AuthorClassifier
from classification.quote_scorer import QuoteScorer
from classification.retry_policy import ClassificationError
from ingestion.dump_reader import DumpFormatError, DumpReadError
from loading.checkpoint import CheckpointError, CheckpointStore, StaleCheckpointError
from loading.wikiquote_loader import WikiquoteLoader
from parsing.content.registry import UnsupportedLanguageError
import config

logger = setup_logger(__name__)
console = Console()

FATAL_ERRORS = (
    DumpReadError,
    DumpFormatError,
    CheckpointError,
    StaleCheckpointError,
    UnsupportedLanguageError,
    ClassificationError,
    anthropic.APIError,
)


@click.group()
def cli():
    """Wikiquote ingestion pipeline - loads quotes from wiki dumps into a database"""
    pass


@cli.command()
@click.option('--dump', 'dump_path', required=True, type=click.Path(exists=True, dir_okay=False), help='Path to the wiki dump (XML)')
@click.option('--db', 'db_path', default=str(config.DB_PATH), type=click.Path(dir_okay=False), help='SQLite database path')
def load(dump_path, db_path):
    """Load quotes from a wiki dump into the database."""
    console.print("\n[bold cyan]Wikiquote Loading[/bold cyan]\n")

    if not config.ANTHROPIC_API_KEY:
        console.print("[red]Error: ANTHROPIC_API_KEY not set in environment[/red]")
        sys.exit(1)

    # Initialize components
    db = Database(Path(db_path))
    client = Anthropic(api_key=config.ANTHROPIC_API_KEY)
    loader = WikiquoteLoader(
        database=db,
        author_classifier=AuthorClassifier(client, config.AUTHOR_MODEL),
        quote_scorer=QuoteScorer(client, config.QUOTE_MODEL)
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        task = progress.add_task("Loading quotes (this may take a long time)...", total=None)

        try:
            report = loader.load_quotes_from_dump(dump_path)
            progress.update(task, completed=True)
        except FATAL_ERRORS as e:
            console.print(f"[red]Error: {e}[/red]")
            logger.exception("Loading failed")
            sys.exit(1)

    if report.skipped_as_done:
        console.print(f"[yellow]Wiki dump already processed: {report.dump_path}[/yellow]")
        return

    table = Table(title="Loading Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Language", report.language or "-")
    table.add_row("Resumed from", report.resumed_from or "-")
    table.add_row("Pages in dump", str(report.pages_total))
    table.add_row("Pages processed", str(report.pages_processed))
    table.add_row("Pages skipped", str(report.pages_skipped))
    table.add_row("Quotes saved", str(report.quotes_saved))
    table.add_row("Quotes in database", str(db.count_quotes()))
    console.print(table)

    console.print("\n[green]✓ Loading complete![/green]")


@cli.command()
@click.option('--dump', 'dump_path', required=True, type=click.Path(exists=True, dir_okay=False), help='Path to the wiki dump (XML)')
@click.option('--db', 'db_path', default=str(config.DB_PATH), type=click.Path(dir_okay=False), help='SQLite database path')
def status(dump_path, db_path):
    """Show loading state of a wiki dump."""
    store = CheckpointStore(Path(dump_path))
    db = Database(Path(db_path))

    table = Table(title=f"Status of {store.dump_path.name}")
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Processed", "yes" if store.is_done() else "no")

    try:
        checkpoint = store.load()
    except CheckpointError as e:
        console.print(f"[red]Error: {e}[/red]")
        checkpoint = None

    if checkpoint is not None:
        table.add_row("Checkpoint created", checkpoint.created_at.isoformat())
        table.add_row("Resume page", checkpoint.last_page_title)
        matches = checkpoint.dump_checksum == store.compute_checksum()
        table.add_row("Checksum", "matches" if matches else "[red]stale[/red]")
    else:
        table.add_row("Checkpoint", "none")

    for language in db.get_languages():
        table.add_row(f"Quotes ({language.english_name})", str(db.count_quotes(language.abbreviation)))
    table.add_row("Quotes (total)", str(db.count_quotes()))

    console.print(table)


@cli.command()
@click.option('--dump', 'dump_path', required=True, type=click.Path(dir_okay=False), help='Path to the wiki dump (XML)')
def clear_checkpoint(dump_path):
    """Delete the checkpoint of a wiki dump so the next run starts over."""
    store = CheckpointStore(Path(dump_path))

    if not store.exists():
        console.print(f"[yellow]No checkpoint for {store.dump_path}[/yellow]")
        return

    store.delete()
    if store.exists():
        console.print(f"[red]Error: could not remove {store.checkpoint_file}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Checkpoint removed for {store.dump_path}[/green]")


if __name__ == '__main__':
    cli()
