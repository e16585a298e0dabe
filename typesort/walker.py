"""
walker.py - Enumerate every file under a root, depth-first
"""

import os
from pathlib import Path
from typing import Iterator

from .errors import InvalidRootError


def walk_files(directory: Path) -> Iterator[Path]:
    """
    Yield every non-directory entry under directory, depth-first.

    Entries are visited in name order. Symlinks are yielded, never followed.
    """
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from walk_files(Path(entry.path))
        else:
            yield Path(entry.path)


def collect_files(root: Path) -> list[Path]:
    """Collect all files under root before anything is moved."""
    if not root.is_dir():
        raise InvalidRootError(root)
    return list(walk_files(root))
