from __future__ import annotations

from pathlib import Path

import pytest

from typesort.classify import Category
from typesort.config import SortConfig, resolve_root
from typesort.errors import InvalidRootError


def test_from_root_resolves_destinations(data_root: Path, backup_dir: Path) -> None:
    config = SortConfig.from_root(data_root, backup_dir=backup_dir)

    assert config.root == data_root.resolve()
    assert len(config.destinations) == 6
    assert config.destination_for(Category.PICTURE) == config.root / "Pictures"
    assert config.destination_for(Category.MISCELLANEOUS) == config.root / "Miscellaneous"


def test_backup_and_log_paths(data_root: Path, backup_dir: Path) -> None:
    config = SortConfig.from_root(data_root, backup_dir=backup_dir)
    assert config.backup_path == backup_dir.resolve() / "data.bak.zip"
    assert config.default_log_path == backup_dir.resolve() / "data.sort-log.txt"


def test_root_defaults_to_cwd(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(data_root)
    assert resolve_root(None) == data_root.resolve()


def test_relative_root_is_made_absolute(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(data_root.parent)
    assert SortConfig.from_root("data").root == data_root.resolve()


def test_backup_dir_defaults_to_home(data_root: Path) -> None:
    assert SortConfig.from_root(data_root).backup_dir == Path.home()


def test_missing_root(tmp_path: Path) -> None:
    with pytest.raises(InvalidRootError, match="is not a valid path"):
        SortConfig.from_root(tmp_path / "nope")


def test_root_is_a_file(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    path.write_text("x")
    with pytest.raises(InvalidRootError, match="is not a directory"):
        SortConfig.from_root(path)
