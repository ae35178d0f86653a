"""Command-line interface for the guru dashboard."""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from database import TeacherQueries, close_database_pool, get_database_pool
from evaluation import EvaluationOrchestrator
from guru_dashboard.config import Settings
from guru_dashboard.dashboard import TeacherDashboard
from guru_dashboard.display import RichDisplaySink, print_dashboard, render_feedback
from relay import run_relay
from scoring import SORT_KEYS
from utils.llm import RelayClient

app = typer.Typer(
    name="guru-dashboard",
    help="Guru Dashboard - Teacher performance table with AI evaluations",
    add_completion=False,
)

console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@app.callback()
def main_callback():
    """Load settings and configure logging before any command runs."""
    settings = Settings.load()
    configure_logging(settings.app.log_level)


def build_dashboard(settings: Settings, display: Optional[RichDisplaySink] = None) -> TeacherDashboard:
    queries = TeacherQueries()
    orchestrator = EvaluationOrchestrator(
        analyzer=RelayClient(settings.relay.url),
        store=queries,
        display=display,
    )
    return TeacherDashboard(queries, orchestrator)


def run_with_config_errors(coro):
    """Run a coroutine, turning configuration errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def version():
    """Show version information."""
    from guru_dashboard import __version__

    console.print(Panel.fit(
        f"[bold blue]Guru Dashboard[/bold blue]\n"
        f"Version: [green]{__version__}[/green]",
        title="Version Info"
    ))


@app.command()
def teachers(
    sort: Optional[str] = typer.Option(
        None,
        "--sort",
        "-s",
        help=f"Sort column ({', '.join(SORT_KEYS)})"
    ),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
):
    """Show the teacher table with status and top/bottom rankings."""
    settings = Settings.load()
    dashboard = build_dashboard(settings)

    async def run():
        try:
            await dashboard.load()
        finally:
            await close_database_pool()

    run_with_config_errors(run())

    try:
        rows = dashboard.rows(sort_by=sort, descending=desc)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    print_dashboard(console, rows, dashboard.top(), dashboard.bottom())


@app.command()
def detail(teacher_id: int = typer.Argument(..., help="Teacher id")):
    """Show the AI evaluation for one teacher, requesting it if needed."""
    settings = Settings.load()
    sink = RichDisplaySink(console)
    dashboard = build_dashboard(settings, display=sink)

    async def run():
        try:
            await dashboard.load()
            return await dashboard.detail(teacher_id)
        finally:
            await close_database_pool()

    result = run_with_config_errors(run())

    if result is None:
        console.print(f"[red]Teacher {teacher_id} not found[/red]")
        raise typer.Exit(code=1)

    record = dashboard.find(teacher_id)
    console.print(render_feedback(record.feedback if record else result.feedback))
    if result.error:
        console.print(f"[yellow]AI evaluation unavailable: {result.error}[/yellow]")
    elif not result.from_cache and not result.persisted:
        console.print("[yellow]Evaluation shown but not saved[/yellow]")


@app.command("serve-relay")
def serve_relay(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (defaults to RELAY_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (defaults to RELAY_PORT)"),
):
    """Run the /api/ai-analyze relay."""
    settings = Settings.load()
    relay_config = settings.relay.model_copy(update={
        key: value for key, value in (("host", host), ("port", port)) if value is not None
    })
    run_relay(settings.openrouter, relay_config)


@app.command("check-db")
def check_db():
    """Test database connectivity."""
    console.print("[yellow]Testing database connection...[/yellow]")

    async def run() -> bool:
        try:
            pool = await get_database_pool()
            return await pool.health_check()
        finally:
            await close_database_pool()

    try:
        healthy = asyncio.run(run())
    except Exception as e:
        console.print(f"[red]❌ Database connection failed: {e}[/red]")
        raise typer.Exit(code=1)

    if healthy:
        console.print("[green]✅ Database connection successful![/green]")
    else:
        console.print("[red]❌ Database health check failed[/red]")
        raise typer.Exit(code=1)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
