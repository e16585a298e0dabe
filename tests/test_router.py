from __future__ import annotations

from pathlib import Path

import pytest

from typesort.classify import Category
from typesort.config import SortConfig
from typesort.errors import DirectoryCreateError, MoveFailedError
from typesort.router import CategoryRouter


@pytest.fixture
def config(data_root: Path, backup_dir: Path) -> SortConfig:
    return SortConfig.from_root(data_root, backup_dir=backup_dir)


def test_folders_are_created_lazily(config: SortConfig) -> None:
    router = CategoryRouter(config)
    assert router.destination_for(Category.AUDIO) == config.root / "Audio"
    assert list(config.root.iterdir()) == []

    folder = router.ensure(Category.AUDIO)

    assert folder.is_dir()
    assert [p.name for p in config.root.iterdir()] == ["Audio"]
    assert router.created == [folder]


def test_ensure_is_idempotent(config: SortConfig) -> None:
    router = CategoryRouter(config)
    first = router.ensure(Category.DOCUMENT)
    second = router.ensure(Category.DOCUMENT)

    assert first == second
    assert router.created == [first]
    assert CategoryRouter(config).ensure(Category.DOCUMENT) == first


def test_existing_folder_is_left_untouched(config: SortConfig) -> None:
    existing = config.root / "Videos"
    existing.mkdir()
    (existing / "old.mp4").write_bytes(b"v")

    router = CategoryRouter(config)
    assert router.ensure(Category.VIDEO) == existing
    assert (existing / "old.mp4").read_bytes() == b"v"
    assert router.created == []


def test_dry_run_creates_nothing(config: SortConfig) -> None:
    router = CategoryRouter(config, dry_run=True)
    folder = router.ensure(Category.PICTURE)
    assert not folder.exists()
    assert router.created == [folder]


def test_folder_blocked_by_file(config: SortConfig) -> None:
    (config.root / "Pictures").write_text("not a folder")
    router = CategoryRouter(config)
    source = config.root / "x.png"

    with pytest.raises(DirectoryCreateError) as excinfo:
        router.ensure(Category.PICTURE, source)

    assert isinstance(excinfo.value, MoveFailedError)
    assert excinfo.value.source == source
    assert excinfo.value.destination == config.root / "Pictures"
