"""Interactive scan → pick → clean flow."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import click

from broom.core.engine import BroomEngine, ProgressCallback, Selection, resolve_selection
from broom.core.tracker import Tracker
from broom.models.clean_result import CleanSummary
from broom.models.scan_result import ScanResult
from broom.picker.session import run_picker
from broom.scanners.base import ScanOptions
from broom.utils import bytes_to_human

log = logging.getLogger(__name__)

PICKER_MESSAGE = "Select categories to clean (space to toggle, enter to confirm):"


@dataclass
class InteractiveOptions:
    include_risky: bool = False
    file_picker_for_all: bool = False
    absolute_paths: bool = False
    dry_run: bool = False
    assume_yes: bool = False
    show_progress: bool = True
    extra_file_selection: list[str] = field(default_factory=list)
    scan_options: ScanOptions = field(default_factory=ScanOptions)


def file_selection_ids(results: list[ScanResult], force_all: bool = False, extra: list[str] | None = None) -> set[str]:
    """Categories whose items are picked one by one.

    ``force_all`` puts every category in file-selection mode; otherwise
    the catalog flag decides, plus any ids listed in *extra*.
    """
    if force_all:
        return {r.category.id for r in results}
    extra_ids = set(extra or ())
    return {r.category.id for r in results if r.category.supports_file_selection or r.category.id in extra_ids}


def _stdout_is_tty() -> bool:
    return click.get_text_stream("stdout").isatty()


def _report_scan_error(category_id: str, status: str) -> None:
    if status == "error":
        click.echo(f"  {click.style('✗', fg='red')} {category_id:35s} — error during scan")


@contextmanager
def _progress(enabled: bool, length: int, label: str, fallback: ProgressCallback | None = None) -> Iterator[ProgressCallback | None]:
    """Yield an engine progress callback that advances a progress bar.

    Each finished or failed category moves the bar by one.  The engine
    reports from worker threads, so updates are serialized.
    """
    if not enabled or length == 0:
        yield fallback
        return

    lock = threading.Lock()
    with click.progressbar(length=length, label=label, item_show_func=lambda name: name) as bar:

        def on_progress(category_id: str, status: str) -> None:
            if status in ("done", "error"):
                with lock:
                    bar.update(1, current_item=category_id)

        yield on_progress


def interactive_clean(engine: BroomEngine, options: InteractiveOptions, tracker: Tracker | None = None) -> CleanSummary | None:
    """Scan, let the user pick, confirm and clean.

    Returns None when nothing was cleaned.  ``PickerAborted`` from the
    picker propagates to the caller.
    """
    click.echo()
    click.echo(click.style("🧹 Broom", fg="cyan", bold=True))
    click.echo(click.style("─" * 50, dim=True))
    click.echo(f"\n{click.style('🔍', bold=True)} Scanning for cleanable files...\n")

    show_progress = options.show_progress and _stdout_is_tty()
    scanner_count = len(engine.registry.get_available())
    with _progress(show_progress, scanner_count, "Scanning categories", _report_scan_error) as on_progress:
        scanned = engine.scan(options=options.scan_options, on_progress=on_progress)
    results = [r for r in scanned if r.items]
    total = sum(r.total_size for r in results)
    if total == 0:
        click.echo(click.style("✓ Already clean! Nothing to remove.\n", fg="green"))
        return None

    risky = [r for r in results if r.category.safety_level == "risky"]
    if not options.include_risky and risky:
        click.echo(click.style("⚠ Hiding risky categories:", fg="yellow"))
        for result in risky:
            click.echo(click.style(f"  ● {result.category.name}: {bytes_to_human(result.total_size)}", dim=True))
        click.echo(click.style(f"  Total hidden: {bytes_to_human(sum(r.total_size for r in risky))}", dim=True))
        click.echo(click.style("  Run with --risky to include these categories", dim=True))
        results = [r for r in results if r.category.safety_level != "risky"]

    if not results:
        click.echo(click.style("\n✓ Nothing safe to clean!\n", fg="green"))
        return None

    shown = sum(r.total_size for r in results)
    click.echo(f"\nFound {click.style(bytes_to_human(shown), fg='green', bold=True)} that can be cleaned:\n")

    file_ids = file_selection_ids(results, options.file_picker_for_all, options.extra_file_selection)
    picked = run_picker(results, PICKER_MESSAGE, file_ids, options.absolute_paths)
    selection = resolve_selection(results, picked.selected_categories, picked.selected_files_by_category, file_ids)

    if not selection:
        click.echo(click.style("\nNo items selected. Nothing to clean.\n", fg="yellow"))
        return None

    _print_selection_summary(selection)

    if not options.assume_yes and not click.confirm("Proceed with cleaning?", default=True):
        click.echo(click.style("\nCleaning cancelled.\n", fg="yellow"))
        return None

    log.info("Cleaning %d categories%s", len(selection), " (dry run)" if options.dry_run else "")
    click.echo(f"\n{click.style('🧹', bold=True)} Cleaning...\n")
    with _progress(show_progress, len(selection), "Cleaning selection") as on_progress:
        summary = engine.clean(selection, dry_run=options.dry_run, on_progress=on_progress)

    if not options.dry_run:
        tracker = tracker or Tracker()
        tracker.record(summary.results)
        tracker.save_session()

    print_clean_results(summary, dry_run=options.dry_run)
    return summary


def _print_selection_summary(selection: Selection) -> None:
    items = sum(len(i) for _, i in selection)
    size = sum(item.size for _, i in selection for item in i)
    click.echo()
    click.echo(click.style("Summary:", bold=True))
    click.echo(f"  Items to delete: {click.style(str(items), fg='yellow')}")
    click.echo(f"  Space to free:   {click.style(bytes_to_human(size), fg='green')}")
    click.echo()


def print_clean_results(summary: CleanSummary, dry_run: bool = False) -> None:
    title = "✓ Dry run complete (nothing was deleted)" if dry_run else "✓ Cleaning complete!"
    click.echo(click.style(title, fg="green", bold=True))
    click.echo(click.style("─" * 50, dim=True))

    for result in summary.results:
        if result.cleaned_items > 0:
            click.echo(
                f"  {result.category.name:30s} {click.style('✓', fg='green')} "
                f"{bytes_to_human(result.freed_space)} {'would be ' if dry_run else ''}freed"
            )
        for error in result.errors:
            click.echo(f"  {result.category.name:30s} {click.style('✗', fg='red')} {error}")

    click.echo(click.style("─" * 50, dim=True))
    verb = "Would free" if dry_run else "Freed"
    click.echo(click.style(f"{verb} {bytes_to_human(summary.total_freed_space)} of disk space", bold=True))
    click.echo(click.style(f"   Cleaned {summary.total_cleaned_items} items", dim=True))
    if summary.total_errors:
        click.echo(click.style(f"   Errors: {summary.total_errors}", fg="red"))
    click.echo()
