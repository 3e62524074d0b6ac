"""Core type definitions for gridcat."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Iterable

# Base64 text of a PNG byte stream, ready to embed in a graphics sequence.
EncodedPayload = str

DEFAULT_GRID_SIZE = 4

_U16_MAX = 0xFFFF


@dataclass(frozen=True)
class GeometrySnapshot:
    """Terminal size at one point in time.

    ``rows``/``cols`` are character cells; ``pixel_width``/``pixel_height``
    are the total drawable area. All four come from a single TIOCGWINSZ
    reply and are never updated individually.
    """

    rows: int
    cols: int
    pixel_width: int
    pixel_height: int

    EMPTY: ClassVar[GeometrySnapshot]

    def __post_init__(self) -> None:
        for name in ("rows", "cols", "pixel_width", "pixel_height"):
            value = getattr(self, name)
            if not 0 <= value <= _U16_MAX:
                raise ValueError(f"{name} out of range: {value}")

    @property
    def has_pixels(self) -> bool:
        return self.pixel_width > 0 and self.pixel_height > 0


GeometrySnapshot.EMPTY = GeometrySnapshot(rows=0, cols=0, pixel_width=0, pixel_height=0)


@dataclass(frozen=True)
class GridConfig:
    columns: int = 0
    rows: int = 0


@dataclass(frozen=True)
class ImageRecord:
    path: Path
    index: int


@dataclass(frozen=True)
class CellPlacement:
    image_index: int
    grid_x: int
    grid_y: int
    pixel_width: int
    pixel_height: int


@dataclass(frozen=True)
class NavigationState:
    selected_index: int
    grid_x: int
    grid_y: int

    ORIGIN: ClassVar[NavigationState]

    @classmethod
    def at(cls, index: int, columns: int) -> NavigationState:
        """Build the state for *index*, deriving its cell from *columns*."""
        return cls(
            selected_index=index,
            grid_x=index % columns,
            grid_y=index // columns,
        )


NavigationState.ORIGIN = NavigationState(selected_index=0, grid_x=0, grid_y=0)


def records_from_paths(paths: Iterable[str | Path]) -> list[ImageRecord]:
    """Number *paths* in display order."""
    return [ImageRecord(path=Path(p), index=i) for i, p in enumerate(paths)]
