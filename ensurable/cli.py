"""ensurable CLI — converge files and directories from the command line."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ensurable import __version__
from ensurable.config import LOG_LEVELS, Settings, configure_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: $ENSURABLE_LOG_LEVEL or WARNING)",
)
def main(log_level: str | None):
    """ensurable — check a target state and converge only when needed.

    Every command checks first. The change is made only if the check
    finds the target state missing, so running a command twice is safe.
    """
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level, console=console)


def _print_met(label: str, met) -> bool:
    """Print one convergence report; return False if it failed."""
    label = escape(label)
    if not met.ok:
        console.print(f"  [red]FAILED[/] {label}: {escape(str(met.error))}")
        return False
    if met.value.converged:
        console.print(f"  [cyan]CHANGED[/] {label}")
    else:
        console.print(f"  [green]OK[/] {label} (already met)")
    return True


def _ensure_one(label: str, entity) -> None:
    from ensurable.driver import meet

    if not _print_met(label, meet(entity)):
        sys.exit(1)


# ── Single targets ───────────────────────────────────────────────────


@main.command(name="file")
@click.argument("path")
@click.option("--content", "-c", default="", help="Content for the file if it has to be created")
def file_cmd(path: str, content: str):
    """Ensure a regular file exists at PATH."""
    from ensurable.targets.filesystem import file_exists

    _ensure_one(f"file {path}", file_exists(path, content=content))


@main.command(name="dir")
@click.argument("path")
def dir_cmd(path: str):
    """Ensure a directory exists at PATH."""
    from ensurable.targets.filesystem import directory_exists

    _ensure_one(f"directory {path}", directory_exists(path))


@main.command()
@click.argument("path")
def absent(path: str):
    """Ensure nothing exists at PATH (directories must be empty)."""
    from ensurable.targets.filesystem import path_absent

    _ensure_one(f"absent {path}", path_absent(path))


# ── Manifests ────────────────────────────────────────────────────────


@main.command()
@click.argument("manifest_path")
def check(manifest_path: str):
    """Validate a target manifest without touching anything."""
    from ensurable.manifest import validate_manifest

    issues = validate_manifest(manifest_path)
    if issues:
        console.print(f"[red]Manifest invalid:[/] {escape(manifest_path)}")
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        sys.exit(1)
    console.print("[green]Valid![/]")


@main.command()
@click.argument("manifest_path")
@click.option("--dry-run", is_flag=True, help="Only check; report what would change")
def apply(manifest_path: str, dry_run: bool):
    """Ensure every target in a manifest, in order.

    Each target is checked and converged on its own; a failing target does
    not stop the ones after it. Exits with status 1 if any target failed.
    """
    from pathlib import Path

    from ensurable.errors import ManifestError
    from ensurable.manifest import load_manifest

    try:
        specs = load_manifest(manifest_path)
    except ManifestError as e:
        console.print(f"[red]Manifest invalid:[/] {escape(manifest_path)}")
        for issue in e.issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        sys.exit(1)

    base_dir = Path(manifest_path).resolve().parent
    if dry_run:
        failed = _plan(specs, base_dir)
    else:
        failed = _apply(specs, base_dir)

    if failed:
        console.print(f"\n[red]{failed} of {len(specs)} target(s) failed[/]")
        sys.exit(1)


def _apply(specs, base_dir) -> int:
    from ensurable.driver import meet

    failed = 0
    for spec in specs:
        if not _print_met(spec.describe(), meet(spec.to_ensurable(base_dir))):
            failed += 1
    return failed


def _plan(specs, base_dir) -> int:
    from ensurable.driver import probe
    from ensurable.models.outcome import AlreadyMet

    table = Table(title=f"Plan ({len(specs)} targets)")
    table.add_column("Kind", style="dim")
    table.add_column("Path", style="cyan")
    table.add_column("Status")

    failed = 0
    for spec in specs:
        outcome = probe(spec.to_ensurable(base_dir))
        if not outcome.ok:
            failed += 1
            status = f"[red]error: {escape(str(outcome.error))}[/]"
        elif isinstance(outcome.value, AlreadyMet):
            status = "[green]ok[/]"
        else:
            status = "[yellow]would change[/]"
        table.add_row(spec.kind.value, escape(spec.path), status)

    console.print(table)
    return failed


if __name__ == "__main__":
    main()
