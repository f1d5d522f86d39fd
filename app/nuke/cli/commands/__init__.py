"""CLI commands for nuke.

This package contains all subcommand implementations.
"""

from nuke.cli.commands import config, rm, trash

__all__ = ["config", "rm", "trash"]
