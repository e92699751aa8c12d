"""Tools CLI commands."""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

tools_app = typer.Typer(help="Inspect and run workspace tools")


@tools_app.command("list")
def tools_list():
    """List all available tools."""
    from wstools.tools import get_tool_catalog

    catalog = get_tool_catalog()
    if not catalog:
        console.print("[yellow]No tools registered[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("Tool", style="bold", no_wrap=True)
    table.add_column("Purpose")
    for entry in catalog:
        table.add_row(entry["name"], entry["purpose"])

    console.print(table)
    console.print(f"\n[dim]Total: {len(catalog)} tool{'s' if len(catalog) != 1 else ''}[/dim]")


@tools_app.command("show")
def tools_show(
    tool_name: str = typer.Argument(help="Tool name to inspect"),
):
    """Show detailed information about a specific tool."""
    from wstools.exceptions import ToolError
    from wstools.tools import get_tool

    try:
        tool_info = get_tool(tool_name)
    except ToolError:
        console.print(f"[red]Tool '{tool_name}' not found[/red]")
        console.print("\nUse [cyan]wstools tools list[/cyan] to see all available tools")
        raise typer.Exit(1)

    console.print(f"\n[bold cyan]{tool_info.name}[/bold cyan]")
    console.print(f"[dim]{tool_info.purpose}[/dim]\n")

    properties = tool_info.input_schema.get("properties", {})
    if not properties:
        console.print("[dim]No parameters[/dim]")
        return

    required_fields = set(tool_info.input_schema.get("required", []))
    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("Parameter", style="bold", no_wrap=True)
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Default")
    table.add_column("Description")

    for param_name, param_schema in properties.items():
        required = "✓" if param_name in required_fields else ""
        default = "" if "default" not in param_schema else json.dumps(param_schema["default"])
        table.add_row(
            param_name,
            param_schema.get("type", ""),
            required,
            default,
            param_schema.get("description", ""),
        )

    console.print(table)


@tools_app.command("run")
def tools_run(
    tool_name: str = typer.Argument(help="Tool name to run"),
    input_json: Optional[str] = typer.Option(None, "--input", "-i", help="Tool input as a JSON object"),
    root: Optional[str] = typer.Option(None, "--root", help="Workspace root (default: config or current directory)"),
):
    """Run a tool against the workspace and print its JSON result.

    Examples:
        wstools tools run search_files -i '{"query": "TODO", "glob": "**/*.py"}'
        wstools tools run read_file -i '{"path": "README.md", "max_chars": 2000}'
    """
    from wstools.config import resolve_workspace_root
    from wstools.models import ToolContext
    from wstools.tools import run_tool

    try:
        tool_input = json.loads(input_json) if input_json else {}
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid --input JSON: {e}[/red]")
        raise typer.Exit(2)

    try:
        workspace_root = resolve_workspace_root(root)
    except ValueError as e:
        err_console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(2)

    result = run_tool(tool_name, tool_input, ToolContext.for_root(workspace_root))
    console.print_json(data=result.to_dict())

    if not result.ok:
        raise typer.Exit(1)
