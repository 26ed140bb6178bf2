from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from routegen.codegen.naming import route_function_name
from routegen.domain.models import GeneratorSettings
from routegen.errors import RouteGenError
from routegen.orchestrator.pipeline import load_routes, run_generate
from routegen.scaffold.route import scaffold_route


app = typer.Typer(
    name="routegen",
    help="Generate a typed TypeScript client or handler boilerplate from Python routes.",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

routes_app = typer.Typer(no_args_is_help=True)
app.add_typer(routes_app, name="routes", help="Inspect the route table.")

console = Console()


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


@app.command()
def client(
    output: Path = typer.Option(
        Path("client/api.ts"), "--output", "-o", envvar="ROUTEGEN_OUTPUT", help="Output file path"
    ),
    routes: Path = typer.Option(
        Path("src/config/routes.py"), "--routes", envvar="ROUTEGEN_ROUTES", help="Route table file"
    ),
    root: Path = typer.Option(Path("."), "--root", envvar="ROUTEGEN_ROOT", help="Project root"),
) -> None:
    """Generate a TypeScript client from the route table."""
    settings = GeneratorSettings(root=root, routes_file=routes, output=output)

    console.print("Scanning routes...")
    try:
        result = run_generate(settings)
    except RouteGenError as exc:
        _fail(exc)

    console.print(f"Found {len(result.routes)} route(s)")
    console.print(
        f"Bindings: [bold]{result.bindings}[/bold]  Interfaces: [bold]{result.interfaces}[/bold]"
        f"  Skipped: [bold]{len(result.skipped)}[/bold]"
    )
    console.print(f"[bold green]✓[/bold green] Generated TypeScript client: {result.output_path}")
    console.print("")
    console.print("Usage in your frontend:")
    console.print("  import { api } from './api';")
    console.print("  const result = await api.functionName(data);")


@app.command()
def route(
    name: str = typer.Argument(..., help="Route name in kebab-case, e.g. user-login"),
    directory: Path = typer.Option(Path("routes"), "--dir", help="Directory for route handlers"),
) -> None:
    """Create a new route handler file."""
    try:
        result = scaffold_route(name, directory)
    except RouteGenError as exc:
        _fail(exc)

    if result.created_dir:
        console.print(f"Created {directory} directory")
    console.print(f"[bold green]Created[/bold green] {result.path} ({result.class_name})")


@routes_app.command("list")
def routes_list(
    routes: Path = typer.Option(
        Path("src/config/routes.py"), "--routes", envvar="ROUTEGEN_ROUTES", help="Route table file"
    ),
    root: Path = typer.Option(Path("."), "--root", envvar="ROUTEGEN_ROOT", help="Project root"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    settings = GeneratorSettings(root=root, routes_file=routes)

    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    try:
        rows = load_routes(settings)
    except RouteGenError as exc:
        _fail(exc)

    if fmt == "json":
        payload = [
            {
                "method": r.method,
                "path": r.path,
                "handler": r.handler,
                "binding": route_function_name(r.path, r.method),
            }
            for r in rows
        ]
        console.print(json.dumps(payload, indent=2))
        return

    console.print(f"[bold]Routes:[/bold] {len(rows)}")
    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("HANDLER")
    table.add_column("BINDING", no_wrap=True)

    for r in rows:
        table.add_row(r.method, r.path, r.handler, route_function_name(r.path, r.method))

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
