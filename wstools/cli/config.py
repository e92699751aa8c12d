"""Configuration CLI commands."""

import typer
from rich.console import Console

console = Console()

config_app = typer.Typer(help="Inspect wstools configuration")


@config_app.command("show")
def config_show():
    """Show current configuration."""
    from wstools.config import get_config_path, load_config, resolve_workspace_root

    config_path = get_config_path()
    config = load_config(config_path)

    console.print(f"[cyan]Configuration file:[/cyan] [dim]{config_path}[/dim]\n")

    try:
        workspace_root = resolve_workspace_root(config=config)
        console.print(f"[bold]Workspace Root:[/bold] {workspace_root}")
    except ValueError as e:
        console.print(f"[red]{e}[/red]")

    console.print(f"[bold]Server:[/bold] http://{config.host}:{config.port}")
