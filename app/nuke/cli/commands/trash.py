"""Trash management commands.

Provides commands to list, restore, empty, and clean up the trash.
"""

from typing import Annotated

import typer

from nuke.cli.display import create_trash_table
from nuke.core.config import ConfigError, NukeConfig, load_config
from nuke.errors import ConflictError, NotFoundError, NukeError, StaleEntryError
from nuke.trash.store import TrashStore
from nuke.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Inspect and manage the trash.",
    no_args_is_help=True,
)


@app.command("list")
def list_trash() -> None:
    """Show what is in the trash."""
    store = _open_store(_load_config())
    try:
        entries, total = store.list_entries()
        orphans = store.find_orphans()
    except NukeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not entries:
        print_info("Trash is empty.")
    else:
        console.print(create_trash_table(entries))
        console.print(f"\n[muted]{len(entries)} item(s), {format_size(total)} total[/muted]")

    if orphans:
        print_warning(
            f"{len(orphans)} trash record(s) have no staged data and cannot be restored."
        )


@app.command()
def restore(
    name: Annotated[
        str,
        typer.Argument(help="File name or fragment of the original path."),
    ],
) -> None:
    """Restore an item from the trash to its original location."""
    store = _open_store(_load_config())

    try:
        entry = store.restore(name)
    except (NotFoundError, ConflictError, StaleEntryError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except NukeError as e:
        print_error(f"Restore failed: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Restored: {entry.original_path}")


@app.command()
def empty(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Permanently delete everything in the trash."""
    store = _open_store(_load_config())
    try:
        entries, total = store.list_entries()
        has_orphans = bool(store.find_orphans())
    except NukeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not entries and not has_orphans:
        print_info("Trash is already empty.")
        return

    console.print(f"Trash contains {len(entries)} item(s) ({format_size(total)}).")
    if not yes:
        confirmed = typer.confirm("Empty trash permanently?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        store.purge_all()
    except NukeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success("Trash emptied.")


@app.command()
def cleanup(
    retention_days: Annotated[
        int | None,
        typer.Option("--days", min=0, help="Retention in days (default from config)."),
    ] = None,
    max_size_mb: Annotated[
        int | None,
        typer.Option("--max-size", min=0, help="Size cap in MiB (default from config)."),
    ] = None,
) -> None:
    """Evict old items and enforce the trash size limit."""
    config = _load_config()
    store = _open_store(config)

    days = config.trash_retention_days if retention_days is None else retention_days
    cap = config.trash_max_size_mb if max_size_mb is None else max_size_mb

    console.print(f"[info]Running trash cleanup[/info] (retention {days} days, max {cap} MB)")
    try:
        result = store.evict(days, cap)
    except NukeError as e:
        print_error(f"Cleanup failed: {e}")
        raise typer.Exit(code=1) from e

    if result.items_removed == 0:
        print_success("Trash is within limits. No cleanup needed.")
        return

    print_success(
        f"Removed {result.items_removed} item(s), freed {format_size(result.bytes_freed)}."
    )


# === Private helper functions ===


def _load_config() -> NukeConfig:
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _open_store(config: NukeConfig) -> TrashStore:
    try:
        return TrashStore(root=config.trash_dir)
    except NukeError as e:
        print_error(f"Failed to open trash: {e}")
        raise typer.Exit(code=1) from e
