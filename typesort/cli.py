"""
cli.py - Sort a directory into category folders by detected file type

Backs up ROOT to <backup-dir>/<name>.bak.zip, moves every file into
Documents/, Pictures/, Videos/, Audio/, Applications/ or Miscellaneous/,
then deletes whatever else is left at the top of ROOT.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .classify import Category, TypeClassifier
from .config import DEFAULT_BACKUP_DIR, SortConfig
from .detect import DEFAULT_DETECTOR, DETECTORS, get_detector, magic_available
from .errors import BackupFailedError, InvalidRootError
from .organize import SortResult, run_sort, write_log

console = Console()


def print_summary(result: SortResult, console: Console = console):
    """Print per-category counts and the overall outcome."""
    counts = result.category_counts()

    console.print("\n[bold]Files by category:[/bold]")
    table = Table()
    table.add_column("Category", style="cyan")
    table.add_column("Files", justify="right")
    for category in Category:
        if counts[category]:
            table.add_row(category.folder, f"{counts[category]:,}")
    console.print(table)

    cleanup = result.cleanup
    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Total: {len(result.operations):,}")
    console.print(f"  [green]Successful: {len(result.operations) - len(result.failures):,}[/green]")
    if result.failures:
        console.print(f"  [red]Failed: {len(result.failures):,}[/red]")
    if cleanup is not None:
        console.print(f"  Removed top-level entries: {len(cleanup.removed):,}")
        if cleanup.kept:
            console.print(f"  [yellow]Kept (hold unmoved files): {len(cleanup.kept):,}[/yellow]")
        for error in cleanup.errors:
            console.print(f"  [red]Cleanup failed: {escape(str(error))}[/red]")


@click.command()
@click.argument("root", required=False, type=click.Path(path_type=Path))
@click.option(
    "--backup-dir",
    "-b",
    default=str(DEFAULT_BACKUP_DIR),
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the backup archive (must be outside ROOT)",
)
@click.option(
    "--log-file",
    "-l",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path for operation log file (default: next to the backup)",
)
@click.option(
    "--detector",
    "-d",
    default=DEFAULT_DETECTOR,
    type=click.Choice(sorted(DETECTORS)),
    help="How to detect file types",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Preview moves without executing them",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Stop at the first file that cannot be moved",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Do not ask for confirmation",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Print every move",
)
def main(
    root: Path | None,
    backup_dir: Path,
    log_file: Path | None,
    detector: str,
    dry_run: bool,
    fail_fast: bool,
    yes: bool,
    verbose: bool,
):
    """Sort the files under ROOT (default: current directory) by type."""

    mode = "[DRY RUN] " if dry_run else ""
    console.print(f"[bold blue]{mode}Type Sorter[/bold blue]")

    try:
        config = SortConfig.from_root(root, backup_dir=backup_dir)
    except InvalidRootError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"Root: {config.root}")
    console.print(f"Backup: {config.backup_path}")
    console.print(f"Detector: {detector}")

    if not dry_run and not yes:
        console.print("\n[bold yellow]This will MOVE files and delete the leftover folders.[/bold yellow]")
        if not click.confirm("Proceed?"):
            console.print("[yellow]Aborted.[/yellow]")
            sys.exit(0)

    if detector != "extension" and not magic_available():
        if detector == "content":
            console.print("[red]Error: libmagic is not available; use --detector extension[/red]")
            sys.exit(1)
        console.print("[yellow]Warning: libmagic is not available; detecting by extension only[/yellow]")

    classifier = TypeClassifier(get_detector(detector))

    try:
        result = run_sort(
            config,
            classifier,
            dry_run=dry_run,
            fail_fast=fail_fast,
            verbose=verbose,
            console=console,
        )
    except BackupFailedError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        console.print("[red]Nothing was moved.[/red]")
        sys.exit(1)
    except OSError as e:
        # Enumeration failed; it runs before any move
        console.print(f"[red]Error: Cannot read {escape(str(config.root))}: {escape(str(e))}[/red]")
        console.print("[red]Nothing was moved.[/red]")
        sys.exit(1)

    log_path = log_file or config.default_log_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        write_log(log_path, result)
        console.print(f"\n[green]Log written: {log_path}[/green]")
    except OSError as e:
        console.print(f"\n[yellow]Warning: Could not write log {log_path}: {e}[/yellow]")

    print_summary(result, console=console)

    if dry_run:
        console.print("\n[yellow]DRY RUN - no files were moved. Run without --dry-run to execute.[/yellow]")

    if not result.ok:
        console.print("\n[bold red]Finished with errors.[/bold red]")
        sys.exit(1)

    if not dry_run:
        console.print("\n[bold green]Sorting complete![/bold green]")


if __name__ == "__main__":
    main()
