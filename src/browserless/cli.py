"""Command line entry point for the Browserless client."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

import browserless
from browserless.api import Browserless
from browserless.config.loader import (
    CONFIG_FILENAME,
    BrowserlessConfig,
    get_global_dir,
    get_project_dir,
    load_config,
)
from browserless.exceptions import BrowserlessError
from browserless.logging import configure_logging, mask_sensitive

app = typer.Typer(
    name="browserless",
    help="Browserless client - render, capture and scrape pages with a remote browser.",
    no_args_is_help=True,
)

# Status and errors go to stderr, results to stdout
console = Console(stderr=True)
output = Console()

config_app = typer.Typer(name="config", help="Inspect and validate client configuration.")
app.add_typer(config_app)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"browserless {browserless.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to browserless.yaml."
    ),
    token: str | None = typer.Option(None, "--token", help="API token (overrides config)."),
    url: str | None = typer.Option(None, "--url", help="Base URL (overrides config)."),
    verbose: bool = typer.Option(False, "--verbose", help="Log requests to stderr."),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Browserless client - render, capture and scrape pages with a remote browser."""
    ctx.obj = {"config": config, "token": token, "url": url, "verbose": verbose}


def _fail(message: object) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _load(ctx: typer.Context) -> BrowserlessConfig:
    settings = ctx.obj or {}
    try:
        config = load_config(settings.get("config"))
    except (FileNotFoundError, ValueError) as e:
        _fail(e)
    overrides = {key: settings[key] for key in ("token", "url") if settings.get(key)}
    return config.model_copy(update=overrides) if overrides else config


def _client(ctx: typer.Context) -> Browserless:
    config = _load(ctx)
    if (ctx.obj or {}).get("verbose"):
        configure_logging(config.logging, level="DEBUG")
    elif config.logging.enabled:
        configure_logging(config.logging)
    try:
        return Browserless.from_config(config)
    except BrowserlessError as e:
        _fail(e)


def _print_json(data: Any) -> None:
    output.print_json(json.dumps(data, default=str))


@app.command()
def pdf(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Page to render."),
    out: Path = typer.Option(Path("page.pdf"), "--output", "-o", help="Output file."),
    paper_format: str = typer.Option("A4", "--format", help="Paper format."),
    landscape: bool = typer.Option(False, "--landscape", help="Landscape orientation."),
    background: bool = typer.Option(
        True, "--background/--no-background", help="Print CSS backgrounds."
    ),
) -> None:
    """Render a page to PDF."""
    client = _client(ctx)
    try:
        response = (
            client.pdf()
            .url(url)
            .format(paper_format)
            .landscape(landscape)
            .print_background(background)
            .send()
        )
        response.save(out)
    except BrowserlessError as e:
        _fail(e)
    console.print(f"[green]Saved[/green] {out} ({response.size()} bytes)")


@app.command()
def screenshot(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Page to capture."),
    out: Path = typer.Option(Path("page.png"), "--output", "-o", help="Output file."),
    full_page: bool = typer.Option(False, "--full-page", help="Capture the whole page."),
    image_type: str = typer.Option("png", "--type", help="jpeg, png or webp."),
    quality: int | None = typer.Option(None, "--quality", help="JPEG/WebP quality (0-100)."),
) -> None:
    """Capture a page as an image."""
    client = _client(ctx)
    try:
        builder = client.screenshot().url(url).full_page(full_page).type(image_type)
        if quality is not None:
            builder.quality(quality)
        response = builder.send()
        response.save(out)
    except BrowserlessError as e:
        _fail(e)
    console.print(f"[green]Saved[/green] {out} ({response.size()} bytes)")


@app.command()
def content(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Page to render."),
    out: Path | None = typer.Option(None, "--output", "-o", help="Write HTML to a file."),
) -> None:
    """Print the rendered HTML of a page."""
    client = _client(ctx)
    try:
        response = client.content().url(url).send()
        if out is not None:
            response.save(out)
    except BrowserlessError as e:
        _fail(e)
    if out is None:
        typer.echo(response.content())
    else:
        console.print(f"[green]Saved[/green] {out}")


@app.command()
def scrape(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Page to scrape."),
    selectors: list[str] = typer.Option(
        ..., "--selector", "-s", help="CSS selector (repeatable)."
    ),
) -> None:
    """Extract elements from a page as JSON."""
    client = _client(ctx)
    try:
        response = client.scrape().url(url).elements(selectors).send()
        data = response.all_results()
    except BrowserlessError as e:
        _fail(e)
    _print_json(data)


@app.command()
def bql(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="BQL query text, or @file to read it from a file."),
    variables: str | None = typer.Option(None, "--variables", help="Variables as JSON."),
) -> None:
    """Run a BQL query and print the JSON result."""
    if query.startswith("@"):
        try:
            query = Path(query[1:]).read_text()
        except OSError as e:
            _fail(e)
    client = _client(ctx)
    try:
        builder = client.bql().query(query)
        if variables:
            builder.variables(json.loads(variables))
        response = builder.send()
        data = response.data()
    except json.JSONDecodeError as e:
        _fail(f"--variables is not valid JSON: {e}")
    except BrowserlessError as e:
        _fail(e)
    _print_json(data)
    if response.has_errors():
        raise typer.Exit(1)


@app.command()
def sessions(ctx: typer.Context) -> None:
    """List browser sessions running on the service."""
    client = _client(ctx)
    try:
        response = client.sessions().get()
        rows = response.sessions()
    except BrowserlessError as e:
        _fail(e)

    table = Table(title=f"Sessions ({len(rows)})")
    table.add_column("ID", style="cyan")
    table.add_column("Browser")
    table.add_column("Running")
    table.add_column("Clients", justify="right")
    for session in rows:
        table.add_row(
            str(session.get("id") or session.get("browserId", "")),
            str(session.get("browser", "")),
            "yes" if session.get("running") else "no",
            str(session.get("numbConnected", "")),
        )
    output.print(table)


@app.command()
def metrics(
    ctx: typer.Context,
    total: bool = typer.Option(False, "--total", help="Show totals instead of the latest window."),
) -> None:
    """Show usage metrics."""
    client = _client(ctx)
    try:
        response = client.metrics().total() if total else client.metrics().get()
        data = response.latest()
    except BrowserlessError as e:
        _fail(e)
    _print_json(data)


@app.command("server-config")
def server_config(ctx: typer.Context) -> None:
    """Show the remote service configuration."""
    client = _client(ctx)
    try:
        data = client.config().get().data()
    except BrowserlessError as e:
        _fail(e)
    _print_json(data)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the effective client configuration (secrets masked)."""
    config = _load(ctx)
    _print_json(mask_sensitive(config.model_dump()))


@config_app.command("validate")
def config_validate() -> None:
    """Validate project and global configuration files."""
    errors: list[str] = []
    validated: list[str] = []

    for path in (get_project_dir() / CONFIG_FILENAME, get_global_dir() / CONFIG_FILENAME):
        if not path.exists():
            continue
        try:
            load_config(path)
            validated.append(str(path))
        except (FileNotFoundError, ValueError) as e:
            errors.append(f"{path}: {e}")

    if validated:
        console.print("[green]Valid configurations:[/green]")
        for path in validated:
            console.print(f"  ✓ {path}")
    if errors:
        console.print("[red]Invalid configurations:[/red]")
        for error in errors:
            console.print(f"  ✗ {error}")
        raise typer.Exit(1)
    if not validated:
        console.print("[dim]No configuration files found; using defaults.[/dim]")


def cli() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    cli()
