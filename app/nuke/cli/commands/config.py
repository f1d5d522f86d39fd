"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer

from nuke.core.config import ConfigError, NukeConfig, load_config, save_config
from nuke.core.paths import get_config_path
from nuke.core.protected import DEFAULT_PROTECTED_PATHS
from nuke.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(f"[bold_header]Config file:[/] {get_config_path()}")
    console.print(f"  trash_retention_days = {config.trash_retention_days}")
    console.print(f"  trash_max_size_mb    = {config.trash_max_size_mb}")
    console.print(f"  auto_cleanup         = {str(config.auto_cleanup).lower()}")
    console.print(f"  workers              = {config.workers}")
    console.print(f"  trash_dir            = {config.trash_dir or '(default)'}")

    console.print("\n[bold_header]Protected paths:[/]")
    for path in DEFAULT_PROTECTED_PATHS:
        console.print(f"  [muted]{path}[/muted]")
    for path in config.protected_paths:
        console.print(f"  {path}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default values."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        save_config(NukeConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default config to {path}")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_config_path()))
