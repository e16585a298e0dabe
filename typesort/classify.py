"""
classify.py - Map detected media types to category folders

Rules are evaluated in order, first match wins:
- Office Open XML documents -> Documents
- application/pdf, yaml, csv -> Documents
- text/* -> Documents
- image/* -> Pictures
- video/* -> Videos
- audio/* -> Audio
- application/* -> Applications
- anything else (or no detected type) -> Miscellaneous
"""

from enum import Enum
from pathlib import Path
from typing import Callable


class Category(Enum):
    """Fixed set of categories; the value is the destination folder name."""

    DOCUMENT = "Documents"
    PICTURE = "Pictures"
    VIDEO = "Videos"
    AUDIO = "Audio"
    APPLICATION = "Applications"
    MISCELLANEOUS = "Miscellaneous"

    @property
    def folder(self) -> str:
        return self.value


CATEGORY_FOLDERS = frozenset(c.folder for c in Category)


class MediaKind(Enum):
    """Top-level part of a media type."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    APPLICATION = "application"
    OTHER = "other"


# Office Open XML families that are documents even though they are application/*
OFFICE_PREFIX = "vnd.openxmlformats-officedocument."
OFFICE_FAMILIES = {"wordprocessingml", "presentationml", "spreadsheetml"}

# Document-like application/* subtypes
DOCUMENT_SUBTYPES = {"pdf", "yaml", "x-yaml", "csv"}


def normalize_media_type(media_type: str | None) -> str | None:
    """Strip parameters and fold case: 'Text/Plain; charset=utf-8' -> 'text/plain'."""
    if not media_type:
        return None
    media_type = media_type.split(";", 1)[0].strip().lower()
    return media_type or None


def parse_media_type(media_type: str | None) -> tuple[MediaKind, str] | None:
    """Split a media type into (kind, subtype). Returns None if undetermined."""
    media_type = normalize_media_type(media_type)
    if media_type is None:
        return None

    top, _, subtype = media_type.partition("/")
    try:
        kind = MediaKind(top)
    except ValueError:
        kind = MediaKind.OTHER
    return kind, subtype


def is_office_document(kind: MediaKind, subtype: str) -> bool:
    if kind is not MediaKind.APPLICATION or not subtype.startswith(OFFICE_PREFIX):
        return False
    family = subtype[len(OFFICE_PREFIX):].split(".", 1)[0]
    return family in OFFICE_FAMILIES


def is_document_application(kind: MediaKind, subtype: str) -> bool:
    return kind is MediaKind.APPLICATION and subtype in DOCUMENT_SUBTYPES


def _kind_is(expected: MediaKind) -> Callable[[MediaKind, str], bool]:
    def rule(kind: MediaKind, subtype: str) -> bool:
        return kind is expected
    return rule


# Order matters: office/pdf/yaml/csv are application/* and must win over the
# generic application rule.
CLASSIFICATION_RULES: list[tuple[Callable[[MediaKind, str], bool], Category]] = [
    (is_office_document, Category.DOCUMENT),
    (is_document_application, Category.DOCUMENT),
    (_kind_is(MediaKind.TEXT), Category.DOCUMENT),
    (_kind_is(MediaKind.IMAGE), Category.PICTURE),
    (_kind_is(MediaKind.VIDEO), Category.VIDEO),
    (_kind_is(MediaKind.AUDIO), Category.AUDIO),
    (_kind_is(MediaKind.APPLICATION), Category.APPLICATION),
]


def classify_media_type(media_type: str | None) -> Category:
    """Return the category for a detected media type (None -> Miscellaneous)."""
    parsed = parse_media_type(media_type)
    if parsed is None:
        return Category.MISCELLANEOUS

    kind, subtype = parsed
    for rule, category in CLASSIFICATION_RULES:
        if rule(kind, subtype):
            return category
    return Category.MISCELLANEOUS


class TypeClassifier:
    """Classify files using a type-detection service."""

    def __init__(self, detect: Callable[[Path], str | None]):
        self.detect = detect

    def detect_type(self, path: Path) -> str | None:
        return normalize_media_type(self.detect(path))

    def classify(self, path: Path) -> Category:
        return classify_media_type(self.detect_type(path))
