"""CLI entry point for clipfeed."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from clipfeed.config import ClipfeedConfig, load_config
from clipfeed.config.loader import DEFAULT_CONFIG_TEMPLATE
from clipfeed.errors import FatalStartupError, RegenerationError
from clipfeed.logging_setup import configure_logging
from clipfeed.regenerator import RegenerationReport, Regenerator
from clipfeed.watch import ChangeWatcher

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="clipfeed",
    help="Publish a folder of Markdown clippings as RSS, Atom and JSON feeds.",
)

config_app = typer.Typer(help="Manage clipfeed configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ClipfeedConfig | None = None


def _get_config() -> ClipfeedConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to clipfeed.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _with_target(cfg: ClipfeedConfig, target_dir: str | None) -> ClipfeedConfig:
    if target_dir is None:
        return cfg
    source = cfg.source.model_copy(update={"target_dir": target_dir})
    return cfg.model_copy(update={"source": source})


def _initial_generation(regenerator: Regenerator) -> RegenerationReport:
    """First run; any failure here means there is nothing worth serving."""
    try:
        report = regenerator.regenerate()
    except RegenerationError as e:
        raise FatalStartupError(f"Failed to generate initial feeds: {e}") from e
    if not report.ok:
        failed = ", ".join(name for name, _err in report.failed)
        raise FatalStartupError(f"Failed to generate initial feeds: {failed}")
    return report


def _display_report(report: RegenerationReport, output_dir: Path) -> None:
    table = Table(title=f"Artifacts in {output_dir}")
    table.add_column("File", style="bold")
    table.add_column("Status")
    for name in report.written:
        table.add_row(name, "[green]written[/green]")
    for name, err in report.failed:
        table.add_row(name, f"[red]failed:[/red] {err}")
    rprint(table)
    rprint(f"{report.selected} items selected from {report.scanned} documents")


@app.command()
def serve(
    target_dir: Annotated[
        str | None, typer.Argument(help="Clippings directory (overrides config)")
    ] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="HTTP port")] = None,
    watch: Annotated[
        bool, typer.Option("--watch/--no-watch", help="Regenerate when files change")
    ] = True,
) -> None:
    """Generate feeds, then serve them and keep them up to date."""
    from clipfeed.server import serve as serve_http

    cfg = _with_target(_get_config(), target_dir)
    configure_logging(cfg.log_level, cfg.log_format)

    temporary = cfg.output.directory is None
    output_dir = Path(cfg.output.directory or tempfile.mkdtemp(prefix="clipfeed-"))
    if temporary:
        logger.info("Created temp directory: %s", output_dir)

    watcher: ChangeWatcher | None = None
    try:
        regenerator = Regenerator(cfg, output_dir)
        _initial_generation(regenerator)

        if watch:
            watcher = ChangeWatcher(
                cfg.source.target_dir,
                regenerator.regenerate,
                debounce_seconds=cfg.watch.debounce_seconds,
                extension=cfg.source.extension,
            )
            watcher.start()

        http_port = port or cfg.server.port
        logger.info("Starting feed server on port %d", http_port)
        logger.info("Watching directory: %s", cfg.source.target_dir)
        logger.info("Serving files from: %s", output_dir)
        logger.info("Debounce delay: %ss", cfg.watch.debounce_seconds)
        serve_http(output_dir, cfg.server.host, http_port, title=cfg.feed.title)
    except FatalStartupError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        if watcher is not None:
            watcher.stop()
        if temporary:
            shutil.rmtree(output_dir, ignore_errors=True)


@app.command()
def generate(
    target_dir: Annotated[
        str | None, typer.Argument(help="Clippings directory (overrides config)")
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Directory for the artifacts")
    ] = None,
) -> None:
    """Generate the feeds and listing page once, then exit."""
    cfg = _with_target(_get_config(), target_dir)
    configure_logging(cfg.log_level, cfg.log_format)

    output_dir = Path(output or cfg.output.directory or "public")
    regenerator = Regenerator(cfg, output_dir, update_mode="one-shot")
    try:
        report = regenerator.regenerate()
    except RegenerationError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _display_report(report, output_dir)
    if not report.ok:
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default clipfeed.yaml in current directory."""
    target = Path("clipfeed.yaml")
    if target.exists() and not force:
        rprint("[yellow]clipfeed.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
