"""
Typer CLI for QuizDesk.

Commands:
    quizdesk                 - Start the interactive quiz shell
    quizdesk run             - Same, with options
    quizdesk subjects        - List loaded subjects and question counts

Usage:
    quizdesk --help
    quizdesk run --data-dir ./data
    quizdesk run --backend sql
    quizdesk subjects
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import Settings, get_settings
from quizdesk.cli.console import RichConsoleIO
from quizdesk.cli.session import SessionController
from quizdesk.core.context import build_context
from quizdesk.core.errors import PersistenceError
from quizdesk.core.grading import Difficulty
from quizdesk.storage.catalog import SubjectCatalog

app = typer.Typer(
    help="QuizDesk: console quizzes for students, reports for admins",
    no_args_is_help=False,
    invoke_without_command=True,
)

console = Console()


def configure_logging(settings: Settings) -> None:
    """Route loguru to stderr (and optionally a file) at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB", retention=5)


def _settings_with(data_dir: Optional[Path], backend: Optional[str]) -> Settings:
    settings = get_settings()
    overrides = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if backend is not None:
        overrides["roster_backend"] = backend
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def run_shell(settings: Settings) -> int:
    """Load everything and run the interactive loop. Returns the exit code."""
    configure_logging(settings)
    io = RichConsoleIO(console)

    try:
        context = build_context(settings, io)
    except PersistenceError as e:
        console.print(f"[red]Startup failed:[/red] {escape(str(e))}")
        return 1

    return SessionController(context).run()


@app.callback()
def main_callback(ctx: typer.Context):
    """
    QuizDesk console.

    Run without arguments to start the interactive quiz shell.
    """
    if ctx.invoked_subcommand is None:
        raise typer.Exit(run_shell(get_settings()))


@app.command()
def run(
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d", help="Directory with subjects and roster"),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="Roster backend: json or sql"),
):
    """Start the interactive quiz shell."""
    if backend is not None and backend not in ("json", "sql"):
        console.print(f"[red]Unknown backend:[/red] {escape(backend)}")
        raise typer.Exit(2)

    raise typer.Exit(run_shell(_settings_with(data_dir, backend)))


@app.command()
def subjects(
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", "-d", help="Directory with subjects and roster"),
):
    """List loaded subjects and their question counts."""
    settings = _settings_with(data_dir, None)
    configure_logging(settings)

    try:
        catalog = SubjectCatalog.load(settings.subjects_path, settings.data_dir)
    except PersistenceError as e:
        console.print(f"[red]Failed to load subjects:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not len(catalog):
        console.print("[yellow]No subjects configured[/yellow]")
        return

    table = Table(title="Subjects", box=box.SIMPLE)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    for difficulty in Difficulty:
        table.add_column(difficulty.value.capitalize(), justify="right")

    for subject in catalog.all():
        table.add_row(
            subject.id,
            subject.name,
            *(str(len(subject.questions_for(d))) for d in Difficulty),
        )

    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
