"""CLI entry point for gridcat. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from gridcat.config import LOG_LEVELS, Settings
from gridcat.errors import DeviceUnavailable, DiscoveryError, GridcatError
from gridcat.session import Session


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


class _GridcatCommand(click.Command):
    """Reports bad usage with exit status 1, like every other failure."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(cls=_GridcatCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directory", required=False, type=click.Path())
@click.option("-r", "--recursive", is_flag=True, help="Scan directory recursively")
@click.option(
    "-n",
    "--max-images",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of images to display (default: 100)",
)
@click.option("-x", "--columns", type=click.IntRange(min=0), default=None, help="Grid columns (0 = 4)")
@click.option("-y", "--rows", type=click.IntRange(min=0), default=None, help="Grid rows (0 = 4)")
@click.option("-j", "--workers", type=click.IntRange(min=1), default=None, help="Parallel transcodes")
@click.option("-w", "--watch", is_flag=True, help="Re-render whenever the window is resized")
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default=None, help="Log verbosity on stderr")
def main(directory, recursive, max_images, columns, rows, workers, watch, log_level):
    """Display the images in DIRECTORY as a grid in a kitty-compatible terminal."""
    if directory is None:
        click.echo("Please specify a directory", err=True)
        sys.exit(1)

    settings = Settings.from_env().override(
        recursive=recursive or None,
        max_images=max_images,
        columns=columns,
        rows=rows,
        workers=workers,
        watch=watch or None,
        log_level=log_level,
    )
    _configure_logging(settings.log_level)

    session = Session(directory, settings)
    try:
        report = asyncio.run(session.run())
    except DiscoveryError as e:
        click.echo(f"Error discovering images: {e}", err=True)
        sys.exit(1)
    except DeviceUnavailable as e:
        click.echo(f"Error querying terminal size: {e}", err=True)
        sys.exit(1)
    except GridcatError as e:
        click.echo(f"Error rendering image grid: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        return

    if report is None:
        click.echo(f"No images found in {directory}")
        return

    if report.failed:
        click.echo(
            f"{len(report.failed)} of {report.rendered + len(report.failed)} images could not be shown",
            err=True,
        )


if __name__ == "__main__":
    main()
