"""CLI entrypoints for inspecting and previewing the Hearth theme."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import CONFIG_FILENAME, ThemeConfig, dump_default_config, load_config
from .context import build_context
from .header import admin_header_style, header_style_css
from .hooks import activate
from .host import InMemoryHost
from .preview import load_fixture, render_preview
from .themes import ThemeError

console = Console()
app = typer.Typer(help="Hearth theme configuration and render tooling.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to hearth.yml or the directory holding it."),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging from the render pipeline."),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def init(
    target: Annotated[Path, typer.Argument(help="Directory that will receive hearth.yml.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing config.")] = False,
) -> None:
    """Write a default configuration file."""
    target.mkdir(parents=True, exist_ok=True)
    destination = target / CONFIG_FILENAME
    if destination.exists() and not force:
        console.print(f"[bold red]Refusing to overwrite[/]: {destination} (use --force).")
        raise typer.Exit(code=1)
    destination.write_text(dump_default_config(), encoding="utf-8")
    console.print(f"[bold green]Created[/] {destination}")


@app.command()
def features(config_path: ConfigPathOption = ".") -> None:
    """Activate the theme on an in-memory host and list what it registered."""
    config = _load(config_path)
    host = InMemoryHost(theme_options=config.theme_options)
    activate(host, config)

    table = Table(title="Theme supports")
    table.add_column("Feature")
    table.add_column("Arguments")
    for feature, args in host.theme_supports.items():
        table.add_row(feature, _summarize(args))
    console.print(table)

    sizes = Table(title="Image sizes")
    sizes.add_column("Name")
    sizes.add_column("Width", justify="right")
    sizes.add_column("Height", justify="right")
    sizes.add_column("Crop")
    for name, (width, height, crop) in host.image_sizes.items():
        sizes.add_row(name, str(width), str(height), "yes" if crop else "no")
    console.print(sizes)

    areas = Table(title="Widget areas")
    areas.add_column("Id")
    areas.add_column("Name")
    for sidebar in host.sidebars.values():
        areas.add_row(sidebar.id, sidebar.name)
    console.print(areas)

    console.print(f"[bold blue]Menus[/]: {', '.join(host.nav_menus)}")
    console.print(f"[bold blue]Default headers[/]: {', '.join(host.default_headers)}")


@app.command("header-css")
def header_css(
    color: Annotated[str, typer.Argument(help="Header text color (hex without '#', or 'blank').")],
    admin: Annotated[bool, typer.Option("--admin", help="Print the admin preview stylesheet instead.")] = False,
    config_path: ConfigPathOption = ".",
) -> None:
    """Print the style block injected for a header text color."""
    config = _load(config_path)
    host = InMemoryHost(header_textcolor=color.lstrip("#"))
    activate(host, config)
    ctx = build_context(host, config)
    if admin:
        css = admin_header_style(ctx)
    else:
        css = header_style_css(ctx, host.get_header_textcolor(), config.header.default_text_color)
    if not css:
        console.print("[bold yellow]No style block[/]: color matches the default.")
        return
    typer.echo(css)


@app.command()
def render(
    fixture_path: Annotated[Path, typer.Argument(help="YAML file describing the request to render.")],
    config_path: ConfigPathOption = ".",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the HTML here instead of stdout."),
    ] = None,
) -> None:
    """Render a page preview from a fixture file."""
    config = _load(config_path)
    try:
        fixture = load_fixture(fixture_path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Fixture file not found: {fixture_path}") from exc
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        html = render_preview(fixture, config)
    except ThemeError as exc:
        console.print(f"[bold red]Theme error[/]: {exc}")
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(html, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    console.print(f"[bold green]Rendered[/] {output}")


def _summarize(args: object) -> str:
    if args is True:
        return "-"
    if isinstance(args, list):
        return ", ".join(getattr(item, "slug", str(item)) for item in args)
    if isinstance(args, dict):
        return ", ".join(f"{key}={value}" for key, value in args.items())
    if hasattr(args, "width") and hasattr(args, "height"):
        return f"{args.width}x{args.height}"
    return str(args)


def _load(path: str) -> ThemeConfig:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    app()
