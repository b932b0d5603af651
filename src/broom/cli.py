"""CLI interface for Broom."""

from __future__ import annotations

import json
import logging

import click

from broom import __version__
from broom.core.engine import BroomEngine
from broom.core.tracker import Tracker
from broom.interactive import InteractiveOptions, interactive_clean
from broom.picker.session import PickerAborted
from broom.scanners import build_registry
from broom.settings import Settings
from broom.utils import bytes_to_human

SAFETY_MARKERS = {
    "safe": ("●", "green"),
    "moderate": ("●", "yellow"),
    "risky": ("●", "red"),
}


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_engine() -> BroomEngine:
    return BroomEngine(build_registry())


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(__version__, prog_name="broom")
@click.pass_context
def main(ctx: click.Context, verbose: int) -> None:
    """Broom — interactive disk cleanup for the terminal."""
    _setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(clean)


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--risky", is_flag=True, help="Include risky categories")
@click.option("--file-picker", "-f", is_flag=True, help="Pick individual files in every category")
@click.option("--absolute-paths", "-A", is_flag=True, help="Show absolute paths instead of ~")
@click.option("--dry-run", is_flag=True, help="Show what would be cleaned without doing it")
@click.option("--yes", "-y", is_flag=True, help="Skip the final confirmation")
@click.option("--no-progress", is_flag=True, help="Hide the scan and clean progress bars")
def clean(risky: bool, file_picker: bool, absolute_paths: bool, dry_run: bool, yes: bool, no_progress: bool) -> None:
    """Scan, pick and clean interactively."""
    settings = Settings()
    options = InteractiveOptions(
        include_risky=risky or bool(settings.get("clean.include_risky")),
        file_picker_for_all=file_picker,
        absolute_paths=absolute_paths or bool(settings.get("picker.absolute_paths")),
        dry_run=dry_run,
        assume_yes=yes,
        show_progress=not no_progress,
        extra_file_selection=list(settings.get("picker.file_selection") or []),
        scan_options=settings.scan_options(),
    )
    try:
        interactive_clean(_build_engine(), options, Tracker())
    except PickerAborted:
        click.echo(click.style("\nCancelled. Nothing was cleaned.\n", fg="yellow"))


# ── categories ───────────────────────────────────────────────────────────

@main.command()
def categories() -> None:
    """List cleanup categories with their safety level."""
    for group, members in _build_engine().registry.by_group().items():
        click.echo(f"\n  {click.style(group, fg='blue', bold=True)}")
        for category in members:
            marker, color = SAFETY_MARKERS[category.safety_level]
            files_tag = click.style(" [file picker]", fg="cyan") if category.supports_file_selection else ""
            click.echo(
                f"    {click.style(marker, fg=color)} {click.style(category.id, bold=True):30s}  "
                f"{category.name}{files_tag}"
            )
            click.echo(f"      {category.description}")
            if category.safety_note:
                click.echo(click.style(f"      {category.safety_note}", dim=True))

    click.echo(
        f"\n  {click.style('●', fg='green')} safe  "
        f"{click.style('●', fg='yellow')} moderate  "
        f"{click.style('●', fg='red')} risky\n"
    )


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("category_ids", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(category_ids: tuple[str, ...], as_json: bool) -> None:
    """Scan for cleanable files (preview only, never deletes)."""
    engine = _build_engine()
    ids = list(category_ids) if category_ids else None

    if not as_json:
        count = len(ids) if ids else len(engine.registry.get_available())
        click.echo(f"\n{click.style('🔍', bold=True)} Scanning {count} categories...\n")

    def on_progress(category_id: str, status: str) -> None:
        if as_json:
            return
        if status == "error":
            click.echo(f"  {click.style('✗', fg='red')} {category_id:35s} — error during scan")

    results = engine.scan(category_ids=ids, options=Settings().scan_options(), on_progress=on_progress)

    if as_json:
        data = [
            {
                "category_id": r.category.id,
                "category_name": r.category.name,
                "safety_level": r.category.safety_level,
                "total_size": r.total_size,
                "item_count": len(r.items),
                "items": [
                    {
                        "path": i.path,
                        "size": i.size,
                        "is_directory": i.is_directory,
                    }
                    for i in r.items
                ],
            }
            for r in results
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for result in results:
        if result.total_size > 0:
            size_str = bytes_to_human(result.total_size)
            click.echo(
                f"  {click.style('✓', fg='green')} {result.category.name:35s} — "
                f"{click.style(size_str, fg='green', bold=True)} ({len(result.items):,} items)"
            )
        else:
            click.echo(f"  {click.style('·', fg='bright_black')} {result.category.name:35s} — nothing to clean")

    scanned_ids = {r.category.id for r in results}
    for scanner in engine.registry:
        if scanner.category_id not in scanned_ids and not scanner.is_available():
            click.echo(
                f"  {click.style('✗', fg='bright_black')} {scanner.category.name:35s} — "
                f"{click.style(scanner.unavailable_reason or 'not available', fg='bright_black')}"
            )

    total = sum(r.total_size for r in results)
    click.echo(f"\nTotal reclaimable: {click.style(bytes_to_human(total), fg='green', bold=True)}\n")


# ── stats ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--period", "-p", default="all", type=click.Choice(["today", "week", "month", "all"]))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(period: str, as_json: bool) -> None:
    """Show space freed statistics."""
    data = Tracker().get_stats(period)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n{click.style('📊', bold=True)} Statistics ({period})\n")
    click.echo(f"  Space freed:    {click.style(bytes_to_human(data['bytes_freed']), fg='green', bold=True)}")
    click.echo(f"  Items cleaned:  {data['items_cleaned']:,}")
    click.echo(f"  Sessions:       {data['session_count']}")
    click.echo(f"  Lifetime total: {click.style(bytes_to_human(data['lifetime_bytes_freed']), fg='cyan', bold=True)}")

    if data["per_category"]:
        click.echo("\n  Per-category breakdown:")
        for cid, cstats in sorted(data["per_category"].items(), key=lambda x: x[1]["bytes_freed"], reverse=True):
            click.echo(f"    {cid:25s} {bytes_to_human(cstats['bytes_freed']):>10s}  ({cstats['items_cleaned']:,} items)")
    click.echo()


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Configuration file commands."""


@config.command("init")
def config_init() -> None:
    """Write a config file with the default values."""
    settings = Settings()
    existed = settings.exists()
    path = settings.init()
    if existed:
        click.echo(f"Updated {path} (existing values kept)")
    else:
        click.echo(f"Created {path}")


@config.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    click.echo(json.dumps(Settings().as_dict(), indent=2))


@config.command("path")
def config_path() -> None:
    """Print the config file location."""
    click.echo(str(Settings().path))


if __name__ == "__main__":
    main()
