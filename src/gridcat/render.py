"""One render pass: layout, transcode and emit a grid of images."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections import deque
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Callable, Sequence, TextIO

from gridcat import kitty
from gridcat.errors import DeviceUnavailable, TranscodeError
from gridcat.geometry import GeometryTracker
from gridcat.layout import cell_size, cell_span, is_row_end, layout, resolve_grid
from gridcat.transcode import transcode
from gridcat.types import CellPlacement, EncodedPayload, GeometrySnapshot, GridConfig, ImageRecord

logger = logging.getLogger(__name__)

Transcoder = Callable[[str, int, int], EncodedPayload]


@dataclass
class RenderReport:
    geometry: GeometrySnapshot
    grid: GridConfig
    rendered: int = 0
    failed: list[TranscodeError] = field(default_factory=list)


class GridRenderer:
    """Writes image grids to *out* using the tracker's current geometry."""

    def __init__(
        self,
        tracker: GeometryTracker,
        out: TextIO | None = None,
        executor: Executor | None = None,
        window: int = 4,
        transcoder: Transcoder = transcode,
    ) -> None:
        self._tracker = tracker
        self._out = out
        self._executor = executor
        self._window = max(1, window)
        self._transcoder = transcoder

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _write(self, data: str) -> None:
        self.out.write(data)
        self.out.flush()

    async def render(
        self,
        records: Sequence[ImageRecord],
        config: GridConfig,
        clear: bool = False,
    ) -> RenderReport:
        """Render *records* as one grid.

        The geometry snapshot is read once here; resizes that land during
        the pass apply to the next one. Per-image failures are logged and
        recorded in the report, the cell is left empty and the rest of the
        grid still renders.
        """
        geometry = self._tracker.snapshot
        grid = resolve_grid(config)
        width, height = cell_size(grid, geometry)
        if width < 1 or height < 1:
            raise DeviceUnavailable(
                f"terminal reported {geometry.pixel_width}x{geometry.pixel_height} pixels, "
                f"too small for a {grid.columns}x{grid.rows} grid"
            )

        report = RenderReport(geometry=geometry, grid=grid)
        if clear:
            self._write(kitty.delete_all_images() + kitty.clear_screen())

        loop = asyncio.get_running_loop()
        pending: deque[tuple[CellPlacement, asyncio.Future[EncodedPayload]]] = deque()
        placements = layout(len(records), grid, geometry)

        def submit(placement: CellPlacement) -> None:
            path = str(records[placement.image_index].path)
            future = loop.run_in_executor(
                self._executor,
                self._transcoder,
                path,
                placement.pixel_width,
                placement.pixel_height,
            )
            pending.append((placement, future))

        try:
            for placement in placements:
                submit(placement)
                if len(pending) >= self._window:
                    await self._flush_one(pending, grid, report)
            while pending:
                await self._flush_one(pending, grid, report)
        finally:
            for _, future in pending:
                future.cancel()

        logger.info(
            "Rendered %d of %d images (%d failed) at %dx%d px per cell",
            report.rendered,
            len(records),
            len(report.failed),
            width,
            height,
        )
        return report

    async def _flush_one(
        self,
        pending: deque[tuple[CellPlacement, asyncio.Future[EncodedPayload]]],
        grid: GridConfig,
        report: RenderReport,
    ) -> None:
        placement, future = pending.popleft()
        try:
            payload = await future
        except TranscodeError as e:
            logger.warning("Skipping image: %s", e)
            report.failed.append(e)
            span = cell_span(placement.pixel_width, report.geometry)
            if not is_row_end(placement.image_index, grid.columns):
                self._write(kitty.cursor_forward(span))
        else:
            self._write(kitty.emit(payload, placement.pixel_width, placement.pixel_height))
            report.rendered += 1

        if is_row_end(placement.image_index, grid.columns):
            self._write(kitty.ROW_BREAK)
