"""
cleanup.py - Remove everything at the top of the root that is not a category folder

Only the immediate children of the root are inspected. Category folders
are kept as they are; any other entry is deleted recursively unless it
still holds a file that failed to move.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .classify import CATEGORY_FOLDERS
from .config import SortConfig
from .errors import CleanupError


@dataclass
class CleanupResult:
    """Outcome of the cleanup pass."""
    removed: list[Path] = field(default_factory=list)
    kept: list[Path] = field(default_factory=list)  # Still hold unmoved files
    errors: list[CleanupError] = field(default_factory=list)


def remove_entry(path: Path) -> None:
    """Delete a file, symlink or directory tree."""
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


def holds_any(entry: Path, paths: set[Path]) -> bool:
    """True if entry is one of paths or contains one of them."""
    return any(p == entry or entry in p.parents for p in paths)


def cleanup_root(
    config: SortConfig,
    keep: set[Path] | None = None,
    dry_run: bool = False,
) -> CleanupResult:
    """Remove stray top-level entries under config.root."""
    keep = keep or set()
    result = CleanupResult()

    for entry in sorted(config.root.iterdir()):
        if entry.name in CATEGORY_FOLDERS:
            continue

        if holds_any(entry, keep):
            result.kept.append(entry)
            continue

        if not dry_run:
            try:
                remove_entry(entry)
            except OSError as e:
                result.errors.append(CleanupError(entry, str(e)))
                continue
        result.removed.append(entry)

    return result
