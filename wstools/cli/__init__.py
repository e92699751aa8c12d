"""wstools CLI application - main entry point."""

from typing import Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="wstools",
    help="Workspace-scoped file tools: search, read, and write inside a single root directory",
    no_args_is_help=True,
)

console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    root: Optional[str] = typer.Option(None, "--root", help="Workspace root (default: config or current directory)"),
):
    """Serve the tool catalog and dispatcher over HTTP."""
    from wstools.config import load_config, resolve_workspace_root
    from wstools.models import ToolContext
    from wstools.server import serve as run_server

    config = load_config()
    try:
        workspace_root = resolve_workspace_root(root, config)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(2)

    bind_host = host or config.host
    bind_port = port or config.port
    console.print(f"Serving [bold]{workspace_root}[/bold] on http://{bind_host}:{bind_port}")
    run_server(ToolContext.for_root(workspace_root), bind_host, bind_port)


@app.command()
def version():
    """Show version information."""
    from wstools import __version__

    console.print(f"wstools version {__version__}")


# Register subcommands from separate modules
from .config import config_app  # noqa: E402
from .tools import tools_app  # noqa: E402

app.add_typer(tools_app, name="tools")
app.add_typer(config_app, name="config")
