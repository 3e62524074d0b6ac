"""Grid layout: map image indices and terminal geometry to cell placements."""

from __future__ import annotations

from typing import Iterator

from gridcat.types import DEFAULT_GRID_SIZE, CellPlacement, GeometrySnapshot, GridConfig


def resolve_grid(config: GridConfig | None = None) -> GridConfig:
    """Fill unset (zero) dimensions with the default of 4."""
    if config is None:
        config = GridConfig()
    if config.columns < 0 or config.rows < 0:
        raise ValueError(f"grid dimensions must not be negative: {config}")
    return GridConfig(
        columns=config.columns or DEFAULT_GRID_SIZE,
        rows=config.rows or DEFAULT_GRID_SIZE,
    )


def cell_size(config: GridConfig, geometry: GeometrySnapshot) -> tuple[int, int]:
    """Pixel size of one cell.

    Floor division; the leftover strip on the right and bottom edges is not
    covered by any cell.
    """
    grid = resolve_grid(config)
    return geometry.pixel_width // grid.columns, geometry.pixel_height // grid.rows


def cell_span(pixel_width: int, geometry: GeometrySnapshot) -> int:
    """Character columns covered by an image *pixel_width* pixels wide."""
    if not geometry.has_pixels or geometry.cols == 0:
        return 0
    return -(-pixel_width * geometry.cols // geometry.pixel_width)


def grid_position(index: int, columns: int) -> tuple[int, int]:
    return index % columns, index // columns


def is_row_end(index: int, columns: int) -> bool:
    return (index + 1) % columns == 0


def layout(
    image_count: int,
    config: GridConfig,
    geometry: GeometrySnapshot,
) -> Iterator[CellPlacement]:
    """Yield one placement per image in index order.

    Images beyond ``columns * rows`` are still placed on further rows;
    truncating the list is up to the caller.
    """
    grid = resolve_grid(config)
    width, height = cell_size(grid, geometry)
    for index in range(image_count):
        x, y = grid_position(index, grid.columns)
        yield CellPlacement(
            image_index=index,
            grid_x=x,
            grid_y=y,
            pixel_width=width,
            pixel_height=height,
        )
