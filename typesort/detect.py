"""
detect.py - Best-guess media type detection for a file path

Three detectors, all returning a media type string or None:
- extension: mimetypes lookup on the file name
- content: libmagic sniffing of the file contents
- auto: extension first, libmagic when the extension is unknown
"""

import mimetypes
from pathlib import Path
from typing import Callable

# libmagic answers that mean "could not tell"
UNDETERMINED_TYPES = {"application/octet-stream", "unknown", ""}
UNDETERMINED_PREFIXES = ("inode/",)

DEFAULT_DETECTOR = "auto"


def detect_by_extension(filepath: Path) -> str | None:
    """Guess MIME type from the file name."""
    mime_type, _ = mimetypes.guess_type(str(filepath))
    return mime_type


def load_magic():
    """Import python-magic; raises ImportError when libmagic is missing."""
    import magic

    return magic


def magic_available() -> bool:
    """True if libmagic can be loaded on this host."""
    try:
        load_magic()
    except (ImportError, OSError):
        return False
    return True


def detect_by_content(filepath: Path) -> str | None:
    """Detect MIME type using libmagic. Any detection error gives None."""
    try:
        mime_type = load_magic().from_file(str(filepath), mime=True)
    except Exception:
        return None

    if mime_type is None:
        return None
    mime_type = mime_type.strip().lower()
    if mime_type in UNDETERMINED_TYPES or mime_type.startswith(UNDETERMINED_PREFIXES):
        return None
    return mime_type


def detect_auto(filepath: Path) -> str | None:
    """Extension lookup, falling back to content sniffing."""
    return detect_by_extension(filepath) or detect_by_content(filepath)


DETECTORS: dict[str, Callable[[Path], str | None]] = {
    "auto": detect_auto,
    "extension": detect_by_extension,
    "content": detect_by_content,
}


def get_detector(name: str = DEFAULT_DETECTOR) -> Callable[[Path], str | None]:
    """Look up a detector by name."""
    try:
        return DETECTORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown detector {name!r} (choose from {', '.join(sorted(DETECTORS))})"
        ) from None
