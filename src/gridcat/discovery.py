"""Image source: find displayable files under a directory."""

from __future__ import annotations

import os
from pathlib import Path

from gridcat.errors import DiscoveryError

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tif", ".tiff"}


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def _raise_walk_error(error: OSError) -> None:
    raise DiscoveryError(f"cannot scan {error.filename}: {error.strerror}") from error


def discover(root: str | Path, recursive: bool = False) -> list[Path]:
    """Return image files under *root*, sorted by path, case-insensitively.

    Only the top level is listed unless *recursive* is set.
    """
    directory = Path(root).expanduser()
    if not directory.exists():
        raise DiscoveryError(f"{directory}: no such directory")
    if not directory.is_dir():
        raise DiscoveryError(f"{directory}: not a directory")

    if not recursive:
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise DiscoveryError(f"cannot scan {directory}: {e.strerror}") from e
        images = [path for path in entries if path.is_file() and is_image_file(path)]
    else:
        images = []
        for dirpath, _dirnames, filenames in os.walk(directory, onerror=_raise_walk_error):
            base = Path(dirpath)
            images.extend(base / name for name in filenames if is_image_file(base / name))

    return sorted(images, key=lambda path: str(path).lower())
