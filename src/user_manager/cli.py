"""Command line interface for running the User Manager service."""

import typer
from rich.console import Console
from rich.panel import Panel

from user_manager import __version__
from user_manager.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="user-manager",
    help="User Manager - CRUD service for user records",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.command()
def serve(
    host: str | None = typer.Option(
        None, "--host", help="Interface to bind (defaults to config app.host)"
    ),
    port: int | None = typer.Option(
        None, "--port", "-p", help="Port to listen on (defaults to config app.port)"
    ),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]User Manager {__version__}[/bold green]\n"
            f"Environment: [cyan]{config.app.environment}[/cyan]\n"
            f"Listening on: [cyan]http://{bind_host}:{bind_port}[/cyan]",
            title="Starting server",
        )
    )

    # Request logs come from the application middleware
    uvicorn.run(
        "user_manager.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,
        timeout_graceful_shutdown=30,
    )


@app.command("init-db")
def init_db_command() -> None:
    """Create the database tables."""
    from user_manager.runtime.init_db import init_db

    config = get_config()
    console.print(f"[blue]Creating tables on {config.database.backend} database...[/blue]")
    try:
        init_db()
    except Exception as e:
        console.print(f"[red]Database initialization failed: {e}[/red]")
        raise typer.Exit(1) from e
    console.print("[green]Database initialized[/green]")


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"user-manager {__version__}")


if __name__ == "__main__":
    app()
