"""
errors.py - Error kinds raised while sorting a directory tree

Pre-mutation errors (InvalidRootError, BackupFailedError) abort the run.
Per-file errors (MoveFailedError, CleanupError) are recorded and reported.
"""

from pathlib import Path


class SortError(Exception):
    """Base class for all sorting errors."""


class InvalidRootError(SortError):
    """Root path does not exist or is not a directory."""

    def __init__(self, root: Path, reason: str = "is not a valid path"):
        self.root = root
        super().__init__(f"{root} {reason}")


class BackupFailedError(SortError):
    """The snapshot of the root could not be written."""


class MoveFailedError(SortError):
    """A single file could not be moved into its category folder."""

    def __init__(self, source: Path, destination: Path, reason: str):
        self.source = source
        self.destination = destination
        self.reason = reason
        super().__init__(f"Cannot move {source} -> {destination}: {reason}")


class DirectoryCreateError(MoveFailedError):
    """A category folder could not be created for a file's move."""


class CleanupError(SortError):
    """A stray top-level entry could not be removed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot remove {path}: {reason}")
