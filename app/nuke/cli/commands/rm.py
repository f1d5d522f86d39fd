"""Delete command implementation.

Scans targets, applies filters, and soft-deletes (or shreds) the
resulting candidates with a progress bar.
"""

import glob
import os
from typing import Annotated

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from nuke.cli.display import (
    create_candidates_table,
    print_candidates_summary,
    print_deletion_summary,
)
from nuke.core.config import ConfigError, NukeConfig, load_config
from nuke.core.protected import is_protected_path
from nuke.core.safety import CONFIRMATION_PHRASE, detect_dangerous_operation
from nuke.deleter.engine import DeletionEngine
from nuke.errors import InvalidFilterError, NukeError, ScanError
from nuke.filter.criteria import FilterCriteria
from nuke.models.candidate import CandidateEntry
from nuke.models.deletion import DeletionMode, DeletionReport
from nuke.scanner.walker import scan
from nuke.trash.store import TrashStore
from nuke.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer()


@app.command("rm")
def remove(
    ctx: typer.Context,
    targets: Annotated[
        list[str],
        typer.Argument(help="Files, directories, or glob patterns to delete."),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Descend into directories."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip the confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    shred: Annotated[
        bool,
        typer.Option("--shred", help="Overwrite files before deleting (irreversible)."),
    ] = False,
    older_than: Annotated[
        str | None,
        typer.Option("--older-than", help="Only entries older than a duration (e.g. 30d)."),
    ] = None,
    newer_than: Annotated[
        str | None,
        typer.Option("--newer-than", help="Only entries newer than a duration (e.g. 24h)."),
    ] = None,
    size: Annotated[
        str | None,
        typer.Option("--size", help="Size filter: +100M (larger) or -1G (smaller)."),
    ] = None,
    include: Annotated[
        list[str] | None,
        typer.Option("--include", help="Only entries matching this glob (repeatable)."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Skip entries matching this glob (repeatable)."),
    ] = None,
    regex: Annotated[
        str | None,
        typer.Option("--regex", help="Only entries whose path or name matches."),
    ] = None,
    skip_hidden: Annotated[
        bool,
        typer.Option("--skip-hidden", help="Ignore dot-files and dot-directories."),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", help="Concurrent workers (default from config: 8)."),
    ] = None,
) -> None:
    """Delete files safely by moving them to the trash."""
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))

    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    # Fail fast on malformed filters, before touching the filesystem
    try:
        criteria = FilterCriteria.from_options(
            older_than=older_than,
            newer_than=newer_than,
            size=size,
            include=include or (),
            exclude=exclude or (),
            regex=regex,
            skip_hidden=skip_hidden,
        )
    except InvalidFilterError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print("[info]Scanning targets...[/info]")
    candidates = _scan_targets(targets, recursive, criteria, config, verbose)

    if not candidates:
        print_success("No files match the specified criteria.")
        return

    print_candidates_summary(candidates)
    if verbose or dry_run:
        console.print(create_candidates_table(candidates, dry_run=dry_run))

    reason = detect_dangerous_operation(targets, len(candidates))
    if reason is not None:
        print_warning(f"DANGEROUS OPERATION DETECTED: {reason}")
        answer = typer.prompt(f"To proceed, type '{CONFIRMATION_PHRASE}'", default="")
        if answer.strip() != CONFIRMATION_PHRASE:
            print_error("Dangerous operation not confirmed.")
            raise typer.Exit(code=1)

    if dry_run:
        print_success("Dry run complete. No files were modified.")
        return

    if not force:
        verb = "Shred" if shred else "Delete"
        confirmed = typer.confirm(f"\n{verb} {len(candidates)} item(s)?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    mode = DeletionMode.SHRED if shred else DeletionMode.SOFT
    trash = None
    if mode == DeletionMode.SOFT:
        try:
            trash = TrashStore(root=config.trash_dir)
        except NukeError as e:
            print_error(f"Failed to initialize trash: {e}")
            raise typer.Exit(code=1) from e

    engine = DeletionEngine(mode=mode, workers=workers or config.workers, trash=trash)
    report = _run_with_progress(engine, candidates, mode)

    print_deletion_summary(report, mode, verbose)

    if trash is not None and config.auto_cleanup:
        _auto_cleanup(trash, config)

    if report.failure_count:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _scan_targets(
    targets: list[str],
    recursive: bool,
    criteria: FilterCriteria,
    config: NukeConfig,
    verbose: bool,
) -> list[CandidateEntry]:
    """Expand globs, skip protected targets, and scan every target.

    Only the targets themselves are checked against the protected list;
    the core deletes whatever candidate list it is handed.
    """
    candidates: list[CandidateEntry] = []
    seen: set[str] = set()

    for target in targets:
        matches = sorted(glob.glob(target)) or [target]
        for match in matches:
            absolute = os.path.abspath(match)
            if is_protected_path(absolute, config.protected_paths):
                print_warning(f"Skipping protected path: {absolute}")
                continue

            try:
                found = scan(absolute, recursive=recursive, criteria=criteria)
            except ScanError as e:
                print_warning(str(e))
                continue

            if verbose:
                print_info(f"{absolute}: {len(found)} candidate(s)")

            for entry in found:
                # Overlapping targets (e.g. "dir" and "dir/*") yield duplicates
                if entry.path not in seen:
                    seen.add(entry.path)
                    candidates.append(entry)

    return candidates


def _run_with_progress(
    engine: DeletionEngine,
    candidates: list[CandidateEntry],
    mode: DeletionMode,
) -> DeletionReport:
    """Run the engine while advancing a Rich progress bar."""
    description = "Shredding" if mode == DeletionMode.SHRED else "Deleting"

    with Progress(
        TextColumn("[info]{task.description}[/info]"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(description, total=len(candidates))

        def on_progress(_path: str, _error: Exception | None) -> None:
            progress.advance(task)

        return engine.apply(candidates, on_progress=on_progress)


def _auto_cleanup(trash: TrashStore, config: NukeConfig) -> None:
    """Run the retention sweep, reporting but not failing on errors."""
    try:
        result = trash.evict(config.trash_retention_days, config.trash_max_size_mb)
    except NukeError as e:
        print_warning(f"Trash cleanup failed: {e}")
        return

    if result.items_removed:
        print_info(
            f"Trash cleanup removed {result.items_removed} old item(s), "
            f"freed {format_size(result.bytes_freed)}."
        )
