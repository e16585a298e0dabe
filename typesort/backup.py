"""
backup.py - Zip snapshot of the root taken before anything moves

The archive holds the root folder itself (entries are prefixed with the
root's base name) including empty directories, so extracting it next to
the original recreates the tree. Symlinks are stored as links, never
followed, and an unreadable directory fails the backup.
"""

import os
import stat
import zipfile
from pathlib import Path
from typing import Callable

from .config import SortConfig
from .errors import BackupFailedError

PARTIAL_SUFFIX = ".partial"


def raise_walk_error(error: OSError):
    """os.walk skips unreadable directories unless told to raise."""
    raise error


def write_entry(zf: zipfile.ZipFile, path: Path, arcname: str):
    """Add path to the archive; symlinks are stored as links, not followed."""
    if not path.is_symlink():
        zf.write(path, arcname)
        return

    info = zipfile.ZipInfo(arcname)
    info.create_system = 3  # Unix, so external_attr carries the mode
    info.external_attr = (stat.S_IFLNK | 0o777) << 16
    zf.writestr(info, os.readlink(path))


def create_archive(source_dir: Path, destination: Path, overwrite: bool = True) -> Path:
    """
    Write a zip archive of source_dir to destination.

    The archive is built under a temporary name and renamed into place,
    so a failure never leaves a half-written file at destination.
    Returns the archive path.
    """
    source_dir = Path(source_dir)
    destination = Path(destination)

    if destination.exists() and not overwrite:
        raise FileExistsError(f"{destination} already exists")

    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
    prefix = Path(source_dir.name or "root")

    try:
        with zipfile.ZipFile(partial, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.write(source_dir, prefix.as_posix())
            for dirpath, dirnames, filenames in os.walk(source_dir, onerror=raise_walk_error):
                dirnames.sort()
                current = Path(dirpath)
                rel_dir = prefix / current.relative_to(source_dir)
                for name in dirnames:
                    write_entry(zf, current / name, (rel_dir / name).as_posix())
                for name in sorted(filenames):
                    write_entry(zf, current / name, (rel_dir / name).as_posix())
        os.replace(partial, destination)
    except BaseException:
        partial.unlink(missing_ok=True)
        raise

    return destination


def is_within(path: Path, root: Path) -> bool:
    """True if path is root or lies under it."""
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def backup_root(
    config: SortConfig,
    snapshot: Callable[..., object] = create_archive,
) -> Path:
    """
    Snapshot config.root to config.backup_path or raise BackupFailedError.

    Nothing under the root is touched if this raises.
    """
    destination = config.backup_path

    if is_within(destination, config.root):
        raise BackupFailedError(
            f"Backup destination {destination} is inside {config.root}; "
            "choose a backup directory outside the tree being sorted"
        )

    try:
        status = snapshot(config.root, destination, overwrite=True)
    except Exception as e:
        raise BackupFailedError(f"Failed to make a backup of {config.root}: {e}") from e

    if not status:
        raise BackupFailedError(f"Failed to make a backup of {config.root}")

    return destination
