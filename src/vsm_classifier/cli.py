"""Command-line interface for the VSM classifier.

Provides ``evaluate`` and ``search`` commands over JSON fixtures with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    vsm-classifier evaluate testdata/training.json
    vsm-classifier search testdata/training.json "gold silver truck."
    vsm-classifier search --top 3 --output json testdata/training.json "shipment gold"
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import LOG_LEVELS, Settings
from .errors import VSMError
from .fixtures import CaseOutcome, evaluate_fixture, load_fixture, resolve_fixture_path, train_fixture

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@click.group()
@click.version_option(package_name="vsm-classifier")
@click.option("--log-level", type=click.Choice(LOG_LEVELS,
              case_sensitive=False), default=None,
              help="Logging level (defaults to VSM_LOG_LEVEL).")
@click.pass_context
def main(ctx: click.Context, log_level: Optional[str]) -> None:
    """Vector Space Model document classifier.

    Train on labeled sentences and classify queries by cosine similarity.
    """
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    _configure_logging((log_level or settings.log_level).upper())
    ctx.obj = settings


@main.command()
@click.argument("fixture", type=click.Path(path_type=Path), required=False)
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_obj
def evaluate(settings: Settings, fixture: Optional[Path], output: str) -> None:
    """Run every test case of a fixture file.

    FIXTURE defaults to VSM_FIXTURE_DIR/VSM_FIXTURE_FILE. Exits with status 1
    if any case fails.

    Example: vsm-classifier evaluate testdata/training.json
    """
    path = fixture or resolve_fixture_path(settings)

    with console.status("[bold blue]Evaluating fixture...", spinner="dots"):
        try:
            loaded = load_fixture(path)
            outcomes = asyncio.run(evaluate_fixture(loaded, timeout=settings.train_timeout))
        except VSMError as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    if output == "json":
        click.echo(json.dumps([o.to_dict() for o in outcomes], indent=2))
    else:
        _render_outcomes(outcomes, path.name)

    if not all(o.passed for o in outcomes):
        sys.exit(1)


@main.command()
@click.argument("fixture", type=click.Path(exists=True, path_type=Path))
@click.argument("query", nargs=-1, required=True)
@click.option("--top", "-n", type=click.IntRange(min=1), default=None,
              help="Show the N best matches instead of only the best one.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_obj
def search(
    settings: Settings,
    fixture: Path,
    query: tuple[str, ...],
    top: Optional[int],
    output: str,
) -> None:
    """Train on a fixture's documents and classify QUERY.

    Example: vsm-classifier search testdata/training.json gold silver truck.
    """
    text = " ".join(query)

    with console.status("[bold blue]Training...", spinner="dots"):
        try:
            loaded = load_fixture(fixture)
            vsm = asyncio.run(train_fixture(loaded, timeout=settings.train_timeout))
            matches = vsm.rank(text, limit=top or 1)
        except VSMError as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    if output == "json":
        click.echo(json.dumps({
            "query": text,
            "matches": [m.to_dict() for m in matches],
        }, indent=2))
        return

    if not matches:
        console.print(Panel("No trained document shares a term with the query.",
                            title=f"🔍 {text}", border_style="yellow"))
        return

    table = Table(title=f"🔍 {text}", show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Class", style="cyan")
    table.add_column("Sentence", style="white", max_width=60)
    table.add_column("Similarity", justify="right", width=10)
    for i, match in enumerate(matches, 1):
        table.add_row(str(i), match.document.label, match.document.sentence,
                      f"{match.similarity:.4f}")
    console.print(table)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_outcomes(outcomes: list[CaseOutcome], filename: str) -> None:
    """Render fixture outcomes as a rich table."""
    table = Table(title=f"Fixture: {filename}", show_lines=False)
    table.add_column("Query", style="white", max_width=50)
    table.add_column("Expected", style="cyan")
    table.add_column("Got", style="cyan")
    table.add_column("Result", justify="center", width=8)

    for outcome in outcomes:
        if outcome.passed:
            result = Text("PASS", style="bold green")
        else:
            result = Text("FAIL", style="bold red")
        got = outcome.error or (outcome.got if outcome.got is not None else "-")
        table.add_row(outcome.query, outcome.want, got, result)

    console.print(table)
    passed = sum(1 for o in outcomes if o.passed)
    style = "bold green" if passed == len(outcomes) else "bold red"
    console.print(f"[{style}]{passed}/{len(outcomes)} cases passed[/]")


if __name__ == "__main__":
    main()
