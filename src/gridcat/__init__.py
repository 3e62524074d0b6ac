"""gridcat: show a directory of images as a grid in a kitty-compatible terminal."""

from gridcat.config import Settings
from gridcat.discovery import IMAGE_EXTENSIONS, discover
from gridcat.errors import (
    DecodeError,
    DeviceUnavailable,
    DiscoveryError,
    EncodeError,
    GridcatError,
    OutOfBounds,
    ReadError,
    TranscodeError,
)
from gridcat.geometry import GeometryTracker
from gridcat.kitty import emit
from gridcat.layout import cell_size, grid_position, layout, resolve_grid
from gridcat.navigation import Navigator
from gridcat.render import GridRenderer, RenderReport
from gridcat.resize import ResizeNotification, ResizeNotifier, watch_resizes
from gridcat.session import Session
from gridcat.transcode import transcode
from gridcat.types import (
    CellPlacement,
    EncodedPayload,
    GeometrySnapshot,
    GridConfig,
    ImageRecord,
    NavigationState,
    records_from_paths,
)

__all__ = [
    # Types
    "CellPlacement",
    "EncodedPayload",
    "GeometrySnapshot",
    "GridConfig",
    "ImageRecord",
    "NavigationState",
    "records_from_paths",
    # Errors
    "DecodeError",
    "DeviceUnavailable",
    "DiscoveryError",
    "EncodeError",
    "GridcatError",
    "OutOfBounds",
    "ReadError",
    "TranscodeError",
    # Components
    "GeometryTracker",
    "GridRenderer",
    "Navigator",
    "RenderReport",
    "ResizeNotification",
    "ResizeNotifier",
    "Session",
    "Settings",
    "IMAGE_EXTENSIONS",
    "cell_size",
    "discover",
    "emit",
    "grid_position",
    "layout",
    "resolve_grid",
    "transcode",
    "watch_resizes",
]
