"""CLI entry point for duview."""

from __future__ import annotations

import logging
import sys

import click

from duview import __version__
from duview.settings import Settings
from duview.utils import expand_home, parse_recency

log = logging.getLogger(__name__)


def _setup_logging(verbosity: int, log_file: str | None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    # The TUI owns the terminal, so records never go to stderr.
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            force=True,
        )
    else:
        from textual.logging import TextualHandler

        logging.basicConfig(level=level, handlers=[TextualHandler()], force=True)


def resolve_args(path: str, recency: str | None, settings: Settings) -> tuple[str, int]:
    """Turn raw CLI arguments into a scan path and recency filter."""
    minutes = settings.recency_minutes() if recency is None else parse_recency(recency)
    return expand_home(path), minutes


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("path", default=".", required=False)
@click.argument("recency", required=False)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write log records to this file")
@click.version_option(__version__, prog_name="duview")
def main(path: str, recency: str | None, verbose: int, log_file: str | None) -> None:
    """Explore disk usage below PATH (default: current directory).

    RECENCY, in minutes, keeps only files modified less than that long
    ago. Anything that is not an integer disables the filter.
    """
    _setup_logging(verbose, log_file)

    from duview_tui.app import DuviewApp

    settings = Settings.instance()
    path, minutes = resolve_args(path, recency, settings)
    log.info("Scanning %s (recency filter: %d min)", path, minutes)

    app = DuviewApp(path, minutes, settings=settings)
    app.run()

    if app.scan_error is not None:
        click.echo(f"Error scanning directory: {app.scan_error}", err=True)
        sys.exit(1)
    sys.exit(app.return_code or 0)
