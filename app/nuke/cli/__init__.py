"""CLI package for nuke.

This package contains the Typer application and all subcommands.
"""

from nuke.cli.main import app

__all__ = ["app"]
