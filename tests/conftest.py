from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from typesort.classify import TypeClassifier

OFFICE_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Suffix -> media type, standing in for a real detection service
FAKE_TYPES = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".yml": "application/yaml",
    ".docx": OFFICE_DOCX,
    ".exe": "application/x-msdownload",
    ".zip": "application/zip",
}


def fake_detect(path: Path) -> str | None:
    return FAKE_TYPES.get(Path(path).suffix.lower())


def write_file(path: Path, data: bytes = b"xx") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def make_tree(root: Path, relpaths: list[str]) -> list[Path]:
    """Create files under root; entries ending in '/' become empty directories."""
    created = []
    for rel in relpaths:
        if rel.endswith("/"):
            (root / rel).mkdir(parents=True, exist_ok=True)
        else:
            created.append(write_file(root / rel, rel.encode()))
    return created


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def classifier() -> TypeClassifier:
    return TypeClassifier(fake_detect)


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    return tmp_path / "backups"
