"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from nuke import __version__
from nuke.cli.commands import config, rm, trash
from nuke.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="nuke",
    help="Safe file deletion with a restorable trash.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nuke version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route the package logger through Rich on stderr.

    Args:
        verbose: Emit DEBUG records when True, only warnings otherwise.
    """
    logger = logging.getLogger("nuke")
    logger.handlers.clear()
    handler = RichHandler(console=err_console, show_path=verbose, rich_tracebacks=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """nuke - Safe file deletion with a restorable trash.

    Deleted files are moved to a trash directory from which they can be
    restored, or shredded when they must never come back.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Register commands
app.add_typer(rm.app)
app.add_typer(trash.app, name="trash")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
