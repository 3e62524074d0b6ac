"""Exception hierarchy for gridcat."""

from __future__ import annotations

from pathlib import Path


class GridcatError(Exception):
    """Base class for all errors raised by gridcat."""


class DeviceUnavailable(GridcatError):
    """The controlling terminal could not be queried for its size."""


class DiscoveryError(GridcatError):
    """The image directory could not be scanned."""


class OutOfBounds(GridcatError):
    """A navigation move would leave the image list."""

    def __init__(self, index: int, image_count: int) -> None:
        super().__init__(f"index {index} outside [0, {image_count})")
        self.index = index
        self.image_count = image_count


class TranscodeError(GridcatError):
    """A single image could not be turned into a graphics payload."""

    stage = "transcode"

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"{path}: {self.stage} failed: {reason}")
        self.path = Path(path)
        self.reason = reason


class ReadError(TranscodeError):
    stage = "read"


class DecodeError(TranscodeError):
    stage = "decode"


class EncodeError(TranscodeError):
    stage = "encode"
