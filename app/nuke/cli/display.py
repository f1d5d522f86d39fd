"""Shared Rich display functions for candidates, trash entries, and results."""

from datetime import UTC, datetime

from rich.markup import escape
from rich.table import Table

from nuke.models.candidate import CandidateEntry
from nuke.models.deletion import DeletionMode, DeletionReport
from nuke.models.trash import TrashEntry
from nuke.utils.formatting import console, format_size, print_success, truncate_path

_PATH_WIDTH = 80


def create_candidates_table(candidates: list[CandidateEntry], dry_run: bool = False) -> Table:
    """Create a Rich table listing deletion candidates.

    Args:
        candidates: Candidates in deletion order.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for candidate display.
    """
    title = "Would Delete (Dry Run)" if dry_run else "Candidates"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Type", width=5, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Size", justify="right", style="info")

    for candidate in candidates:
        if candidate.is_dir:
            kind = "[directory]dir[/directory]"
            path = f"[directory]{escape(truncate_path(candidate.path, _PATH_WIDTH))}[/directory]"
        else:
            kind = "[file]file[/file]"
            path = escape(truncate_path(candidate.path, _PATH_WIDTH))
        table.add_row(kind, path, format_size(candidate.size))

    return table


def create_trash_table(entries: list[TrashEntry], now: datetime | None = None) -> Table:
    """Create a Rich table listing trash contents.

    Args:
        entries: Trash entries, oldest first.
        now: Reference time for the age column (defaults to now).

    Returns:
        Rich Table configured for trash display.
    """
    reference = now or datetime.now(UTC)

    table = Table(
        title="Trash",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", style="muted")
    table.add_column("Name", no_wrap=True)
    table.add_column("Original Path", style="muted")
    table.add_column("Size", justify="right", style="info")
    table.add_column("Deleted", style="muted")

    for index, entry in enumerate(entries, start=1):
        days = (reference - entry.deleted_at).days
        style = "directory" if entry.is_dir else "trashed"
        table.add_row(
            str(index),
            f"[{style}]{escape(entry.name)}[/{style}]",
            escape(truncate_path(entry.original_path, _PATH_WIDTH)),
            format_size(entry.size),
            f"{days}d ago ({entry.deleted_at.astimezone():%Y-%m-%d %H:%M:%S})",
        )

    return table


def print_candidates_summary(candidates: list[CandidateEntry]) -> None:
    """Print the number and total size of candidates."""
    total = sum(c.size for c in candidates)
    directories = sum(1 for c in candidates if c.is_dir)
    console.print(
        f"\nSummary: [info]{len(candidates)}[/info] item(s) "
        f"({len(candidates) - directories} file(s), {directories} dir(s)), "
        f"[info]{format_size(total)}[/info] total"
    )


def print_deletion_summary(report: DeletionReport, mode: DeletionMode, verbose: bool) -> None:
    """Print the final tally of a deletion batch.

    Args:
        report: Outcomes of the batch.
        mode: Disposition that was applied.
        verbose: Whether to list every failure.
    """
    if report.failure_count == 0:
        print_success(f"All {report.success_count} item(s) processed successfully.")
    else:
        console.print(
            f"\n[success]{report.success_count} succeeded[/success], "
            f"[error]{report.failure_count} failed[/error]"
        )
        failures = report.failed if verbose else report.failed[:10]
        for outcome in failures:
            reason = escape(str(outcome.error))
            console.print(f"  [error]-[/error] {escape(outcome.path)}: [muted]{reason}[/muted]")
        if len(failures) < report.failure_count:
            console.print(f"  [muted]... and {report.failure_count - len(failures)} more[/muted]")

    if mode == DeletionMode.SOFT and report.success_count:
        console.print(
            "\n[muted]Items moved to trash. Use 'nuke trash restore NAME' to restore "
            "or 'nuke trash empty' to delete permanently.[/muted]"
        )
