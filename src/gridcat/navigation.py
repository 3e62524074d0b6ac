"""Selection state over the displayed grid."""

from __future__ import annotations

from typing import Sequence

from gridcat.errors import OutOfBounds
from gridcat.types import DEFAULT_GRID_SIZE, ImageRecord, NavigationState


class Navigator:
    """Tracks the selected image and its grid cell.

    The state is always rebuilt from the selected index, so ``grid_x`` and
    ``grid_y`` cannot drift from ``index % columns`` and ``index // columns``.
    """

    def __init__(self, image_count: int = 0, columns: int = DEFAULT_GRID_SIZE) -> None:
        self._image_count = 0
        self._columns = DEFAULT_GRID_SIZE
        self._state = NavigationState.ORIGIN
        self.reset(image_count, columns)

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def image_count(self) -> int:
        return self._image_count

    @property
    def columns(self) -> int:
        return self._columns

    def reset(self, image_count: int, columns: int | None = None) -> None:
        """Load a new image list; selection goes back to the first image."""
        if image_count < 0:
            raise ValueError(f"image count must not be negative: {image_count}")
        if columns is not None:
            if columns < 1:
                raise ValueError(f"columns must be at least 1: {columns}")
            self._columns = columns
        self._image_count = image_count
        self._state = NavigationState.ORIGIN

    def select(self, index: int) -> NavigationState:
        if not 0 <= index < self._image_count:
            raise OutOfBounds(index, self._image_count)
        self._state = NavigationState.at(index, self._columns)
        return self._state

    def move_by(self, dx: int, dy: int) -> NavigationState:
        """Move the selection by *dx* cells and *dy* rows.

        Moves are index arithmetic, so stepping right from the last column
        lands on the first column of the next row. Raises
        :class:`OutOfBounds` without changing state when the target index
        falls outside the image list.
        """
        return self.select(self._state.selected_index + dy * self._columns + dx)

    def selected_record(self, records: Sequence[ImageRecord]) -> ImageRecord | None:
        if not records:
            return None
        return records[self._state.selected_index]
