"""
organize.py - Move every file under a root into its category folder

Pipeline, strictly in this order:
- Snapshot the root to a zip archive outside it (abort on failure)
- Enumerate every file under the root up front
- Classify each file and move it into <root>/<Category>/<filename>
- Remove top-level entries that are not category folders

Directory structure is flattened: only the file name is kept. A file
already present at the destination is overwritten.
"""

import errno
import os
import shutil
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .backup import backup_root, create_archive
from .classify import Category, TypeClassifier, classify_media_type
from .cleanup import CleanupResult, cleanup_root
from .config import SortConfig
from .errors import MoveFailedError
from .router import CategoryRouter
from .walker import collect_files

console = Console()


@dataclass
class MoveOperation:
    """Represents a file move operation."""
    source: Path
    destination: Path
    category: Category
    media_type: str | None = None
    success: bool = False
    message: str = ""
    overwrote: bool = False


@dataclass
class SortResult:
    """Result of a sorting run."""
    root: Path
    backup_path: Path | None
    operations: list[MoveOperation] = field(default_factory=list)
    created_folders: list[Path] = field(default_factory=list)
    cleanup: CleanupResult | None = None
    dry_run: bool = False
    aborted: bool = False  # Stopped at the first failed move

    @property
    def failures(self) -> list[MoveOperation]:
        return [op for op in self.operations if not op.success]

    @property
    def ok(self) -> bool:
        if self.aborted or self.failures:
            return False
        return self.cleanup is None or not self.cleanup.errors

    def category_counts(self) -> Counter:
        return Counter(op.category for op in self.operations if op.success)


def plan_move(source: Path, classifier: TypeClassifier, router: CategoryRouter) -> MoveOperation:
    """Classify a file and work out where it goes (nothing is created)."""
    media_type = classifier.detect_type(source)
    category = classify_media_type(media_type)
    destination = router.destination_for(category) / source.name
    return MoveOperation(
        source=source,
        destination=destination,
        category=category,
        media_type=media_type,
    )


def move_file(source: Path, destination: Path) -> None:
    """Rename source to destination, replacing an existing file."""
    try:
        os.replace(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        # Different filesystem (mount point inside the root)
        shutil.move(str(source), str(destination))


def execute_move(
    op: MoveOperation,
    router: CategoryRouter,
    dry_run: bool = False,
    planned: set[Path] | None = None,
) -> tuple[bool, str]:
    """
    Execute a single move operation.
    Returns (success, message).
    """
    try:
        router.ensure(op.category, op.source)

        if op.source == op.destination:
            return True, "Already in place"

        if op.destination.is_dir() and not op.destination.is_symlink():
            raise MoveFailedError(op.source, op.destination, "destination is a directory")

        op.overwrote = os.path.lexists(op.destination) or (
            planned is not None and op.destination in planned
        )

        if not dry_run:
            move_file(op.source, op.destination)

        return True, "OK"
    except MoveFailedError as e:
        return False, e.reason
    except PermissionError as e:
        return False, f"Permission denied: {e}"
    except OSError as e:
        return False, f"OS error: {e}"


def run_sort(
    config: SortConfig,
    classifier: TypeClassifier,
    snapshot: Callable[..., object] = create_archive,
    dry_run: bool = False,
    fail_fast: bool = False,
    verbose: bool = False,
    console: Console = console,
) -> SortResult:
    """
    Back up, sort and clean up config.root.

    Raises BackupFailedError before touching anything if the snapshot
    fails. Per-file errors are recorded on the returned SortResult.
    """
    backup_path = None
    if dry_run:
        console.print(f"[yellow]Skipping backup (dry run): {config.backup_path}[/yellow]")
    else:
        console.print(f"Making a backup of the original folder at {config.backup_path}")
        backup_path = backup_root(config, snapshot)
        console.print(f"[green]Backup written: {backup_path}[/green]")

    files = collect_files(config.root)
    console.print(f"Files found: {len(files):,}")

    result = SortResult(root=config.root, backup_path=backup_path, dry_run=dry_run)
    router = CategoryRouter(config, dry_run=dry_run)
    planned: set[Path] = set()

    console.print(f"\n[bold]{'Simulating' if dry_run else 'Sorting'} files...[/bold]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Moving files", total=len(files))

        for source in files:
            try:
                op = plan_move(source, classifier, router)
            except Exception as e:
                # Left where it is; cleanup keeps its folder
                op = MoveOperation(
                    source=source,
                    destination=source,
                    category=Category.MISCELLANEOUS,
                    message=f"Type detection failed: {e}",
                )
            else:
                op.success, op.message = execute_move(op, router, dry_run=dry_run, planned=planned)
            result.operations.append(op)
            planned.add(op.destination)

            move = f"{escape(str(op.source))} -> {escape(str(op.destination))}"
            if not op.success:
                progress.console.print(f"[red]Failed: {move}: {escape(op.message)}[/red]")
            elif verbose:
                progress.console.print(f"  {move}")
            progress.advance(task)

            if not op.success and fail_fast:
                result.aborted = True
                break

    result.created_folders = list(router.created)

    if result.aborted:
        console.print("[red]Stopped at the first failed move; cleanup skipped.[/red]")
        return result

    failed_sources = {op.source for op in result.failures}
    result.cleanup = cleanup_root(config, keep=failed_sources, dry_run=dry_run)
    return result


def write_log(log_file: Path, result: SortResult):
    """Write operation log to file."""
    mode = "DRY RUN" if result.dry_run else "EXECUTED"
    cleanup = result.cleanup or CleanupResult()

    with open(log_file, "w", encoding="utf-8") as f:
        f.write(f"Sort Operations Log - {mode}\n")
        f.write(f"Generated: {datetime.now().isoformat()}\n")
        f.write(f"Root: {result.root}\n")
        if result.backup_path:
            f.write(f"Backup: {result.backup_path}\n")
        f.write("=" * 80 + "\n\n")

        success_count = len(result.operations) - len(result.failures)
        overwrite_count = sum(1 for op in result.operations if op.success and op.overwrote)

        f.write("Summary:\n")
        f.write(f"  Total operations: {len(result.operations)}\n")
        f.write(f"  Successful: {success_count}\n")
        f.write(f"  Failed: {len(result.failures)}\n")
        f.write(f"  Overwritten at destination: {overwrite_count}\n")
        f.write(f"  Folders created: {len(result.created_folders)}\n")
        f.write(f"  Top-level entries removed: {len(cleanup.removed)}\n")
        if result.aborted:
            f.write("  Run stopped at the first failure; cleanup skipped\n")

        f.write("\n" + "=" * 80 + "\n\n")

        f.write("SUCCESSFUL MOVES:\n")
        f.write("-" * 40 + "\n")
        for op in result.operations:
            if op.success:
                marker = "[OVERWROTE] " if op.overwrote else ""
                f.write(f"{marker}{op.category.folder} ({op.media_type or 'unknown type'})\n")
                f.write(f"  FROM: {op.source}\n")
                f.write(f"  TO:   {op.destination}\n\n")

        if result.failures:
            f.write("\nFAILED MOVES:\n")
            f.write("-" * 40 + "\n")
            for op in result.failures:
                f.write(f"  FROM: {op.source}\n")
                f.write(f"  TO:   {op.destination}\n")
                f.write(f"  ERROR: {op.message}\n\n")

        if cleanup.removed:
            f.write("\nREMOVED:\n")
            f.write("-" * 40 + "\n")
            for path in cleanup.removed:
                f.write(f"  {path}\n")

        if cleanup.kept:
            f.write("\nKEPT (hold files that were not moved):\n")
            f.write("-" * 40 + "\n")
            for path in cleanup.kept:
                f.write(f"  {path}\n")

        if cleanup.errors:
            f.write("\nCLEANUP ERRORS:\n")
            f.write("-" * 40 + "\n")
            for error in cleanup.errors:
                f.write(f"  {error.path}: {error.reason}\n")
