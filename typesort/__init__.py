"""Sort a directory tree into category folders by detected file type."""

from .classify import Category, TypeClassifier, classify_media_type
from .config import SortConfig
from .errors import (
    BackupFailedError,
    CleanupError,
    DirectoryCreateError,
    InvalidRootError,
    MoveFailedError,
    SortError,
)
from .organize import SortResult, run_sort

__version__ = "0.1.0"

__all__ = [
    "BackupFailedError",
    "Category",
    "CleanupError",
    "DirectoryCreateError",
    "InvalidRootError",
    "MoveFailedError",
    "SortConfig",
    "SortError",
    "SortResult",
    "TypeClassifier",
    "classify_media_type",
    "run_sort",
]
