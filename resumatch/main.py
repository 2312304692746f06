"""ResuMatch CLI - match a resume against job listings."""

import json
import logging
import mimetypes
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from resumatch.config import (
    CATALOG_BACKEND,
    CATALOG_PATH,
    DATABASE_URL,
    EMBEDDING_MODEL,
    GROQ_API_KEY,
    GROQ_MODEL,
    HF_TOKEN,
    JOB_EMBEDDING_COLUMN,
    JOB_TABLE,
    PGHOST,
    TOP_JOBS_COUNT,
)
from resumatch.db.queries import is_safe_identifier
from resumatch.errors import PipelineFailure
from resumatch.schemas.match import MatchResult
from resumatch.schemas.resume import ResumeDocument, ResumeInput
from resumatch.services.match_service import match_resume

app = typer.Typer(help="ResuMatch - Match a resume against job listings and suggest improvements")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def match(
    text: str | None = typer.Option(None, "--text", "-t", help="Resume text to match"),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Path to resume file (PDF or plain text)"
    ),
    top_k: int = typer.Option(
        TOP_JOBS_COUNT, "--top-k", "-k", help="Number of job listings to return"
    ),
    output_json: bool = typer.Option(
        False, "--json", help="Output results as JSON instead of pretty format"
    ),
) -> None:
    """Match a resume against the job catalog and suggest improvements."""
    document = None
    if file is not None:
        if not file.exists():
            console.print(f"[red]Error: Resume file not found: {file}[/red]")
            raise typer.Exit(1)
        content_type, _ = mimetypes.guess_type(file.name)
        document = ResumeDocument(
            content=file.read_bytes(),
            filename=file.name,
            content_type=content_type,
        )

    resume = ResumeInput(text=text, document=document)

    if not output_json:
        console.print("[bold cyan]Matching resume against job listings...[/bold cyan]")

    try:
        result = match_resume(resume, top_k=top_k)
    except PipelineFailure as e:
        if output_json:
            json.dump(obj=e.to_dict(), fp=sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            console.print(f"[red]Error ({e.stage}): {e.message}[/red]")
        raise typer.Exit(2 if e.is_client_error else 1)

    if output_json:
        _output_json(result=result)
    else:
        _output_pretty(result=result)


@app.command()
def info() -> None:
    """Display the active configuration."""
    console.print("[bold cyan]ResuMatch Configuration[/bold cyan]\n")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Embedding Model", EMBEDDING_MODEL)
    table.add_row("HF_TOKEN", "set" if HF_TOKEN else "[red]missing[/red]")
    table.add_row("LLM Model", GROQ_MODEL)
    table.add_row("GROQ_API_KEY", "set" if GROQ_API_KEY else "[red]missing[/red]")
    table.add_row("Catalog Backend", CATALOG_BACKEND)

    if CATALOG_BACKEND == "local":
        table.add_row("Catalog File", str(CATALOG_PATH))
    else:
        if DATABASE_URL:
            table.add_row("Database", "DATABASE_URL")
        else:
            table.add_row("Database Host", PGHOST or "[red]missing[/red]")
        for label, name in (("Job Table", JOB_TABLE), ("Embedding Column", JOB_EMBEDDING_COLUMN)):
            value = name if is_safe_identifier(name) else f"[red]{name} (invalid identifier)[/red]"
            table.add_row(label, value)

    table.add_row("Top K", str(TOP_JOBS_COUNT))
    console.print(table)


def _output_json(result: MatchResult) -> None:
    """Output result as JSON to stdout."""
    json.dump(obj=result.to_response(), fp=sys.stdout, indent=2)
    sys.stdout.write("\n")


def _output_pretty(result: MatchResult) -> None:
    """Output result in pretty console format."""
    if not result.matches:
        console.print("[yellow]No matching job listings found.[/yellow]")
        return

    console.print(f"\n[bold green]Found {len(result.matches)} top matches![/bold green]\n")

    table = Table(title="Top Job Matches")
    table.add_column("#", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Similarity", style="green", justify="right")

    for i, match in enumerate(iterable=result.matches, start=1):
        listing = match.listing
        table.add_row(
            str(i),
            listing.title or str(listing.id),
            listing.company or "-",
            listing.location or "-",
            f"{match.similarity:.3f}",
        )

    console.print(table)
    console.print()
    console.print(
        Panel(
            renderable=Markdown(result.suggestions),
            title="[bold]Suggestions[/bold]",
            border_style="blue",
        )
    )


if __name__ == "__main__":
    app()
