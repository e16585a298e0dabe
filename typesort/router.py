"""
router.py - Category folders under the root, created on first use
"""

from pathlib import Path

from .classify import Category
from .config import SortConfig
from .errors import DirectoryCreateError


class CategoryRouter:
    """Resolve category folders; create each one only when a file needs it."""

    def __init__(self, config: SortConfig, dry_run: bool = False):
        self.config = config
        self.dry_run = dry_run
        self.created: list[Path] = []
        self._ready: set[Category] = set()

    def destination_for(self, category: Category) -> Path:
        return self.config.destination_for(category)

    def ensure(self, category: Category, source: Path | None = None) -> Path:
        """Return the folder for category, creating it if needed."""
        folder = self.destination_for(category)
        if category in self._ready:
            return folder

        if not folder.is_dir():
            if not self.dry_run:
                try:
                    folder.mkdir(exist_ok=True)
                except OSError as e:
                    raise DirectoryCreateError(
                        source or folder, folder, f"cannot create folder: {e}"
                    ) from e
            self.created.append(folder)

        self._ready.add(category)
        return folder
