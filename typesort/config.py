"""
config.py - Resolved paths for a sorting run

SortConfig is built once from the root argument and passed to every stage.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .classify import Category
from .errors import InvalidRootError

# Backups land outside the tree being sorted
DEFAULT_BACKUP_DIR = Path.home()
BACKUP_SUFFIX = ".bak.zip"
LOG_SUFFIX = ".sort-log.txt"


def resolve_root(root: str | Path | None) -> Path:
    """Resolve the root argument (default: cwd) and check it is a directory."""
    path = Path(root if root is not None else Path.cwd()).expanduser().resolve()
    if not path.exists():
        raise InvalidRootError(path)
    if not path.is_dir():
        raise InvalidRootError(path, "is not a directory")
    return path


@dataclass(frozen=True)
class SortConfig:
    root: Path
    backup_dir: Path = DEFAULT_BACKUP_DIR
    destinations: dict[Category, Path] = field(default_factory=dict)

    @classmethod
    def from_root(
        cls,
        root: str | Path | None = None,
        backup_dir: str | Path | None = None,
    ) -> "SortConfig":
        root_path = resolve_root(root)
        backup_path = Path(backup_dir).expanduser().resolve() if backup_dir else DEFAULT_BACKUP_DIR
        destinations = {category: root_path / category.folder for category in Category}
        return cls(root=root_path, backup_dir=backup_path, destinations=destinations)

    @property
    def root_name(self) -> str:
        # "/" has no base name
        return self.root.name or "root"

    @property
    def backup_path(self) -> Path:
        return self.backup_dir / f"{self.root_name}{BACKUP_SUFFIX}"

    @property
    def default_log_path(self) -> Path:
        return self.backup_dir / f"{self.root_name}{LOG_SUFFIX}"

    def destination_for(self, category: Category) -> Path:
        return self.destinations[category]
