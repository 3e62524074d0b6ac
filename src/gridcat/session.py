"""A display session: discovery, resize listener and render passes."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TextIO

from gridcat.config import Settings
from gridcat.discovery import discover
from gridcat.errors import DeviceUnavailable
from gridcat.geometry import GeometryTracker
from gridcat.navigation import Navigator
from gridcat.render import GridRenderer, RenderReport
from gridcat.resize import ResizeNotifier, watch_resizes
from gridcat.types import GeometrySnapshot, ImageRecord, records_from_paths

logger = logging.getLogger(__name__)


class Session:
    """Shows one directory's images and keeps them sized to the terminal."""

    def __init__(
        self,
        directory: str | Path,
        settings: Settings | None = None,
        tracker: GeometryTracker | None = None,
        notifier: ResizeNotifier | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.directory = Path(directory)
        self.settings = settings or Settings()
        self.tracker = tracker or GeometryTracker()
        self.notifier = notifier or ResizeNotifier()
        self.out = out
        self.records: list[ImageRecord] = []
        self.navigator = Navigator(0, self.settings.grid.columns)
        self._resized = asyncio.Event()

    def load(self) -> list[ImageRecord]:
        """Discover images and replace the session's image list."""
        paths = discover(self.directory, recursive=self.settings.recursive)
        if len(paths) > self.settings.max_images:
            logger.info(
                "Showing the first %d of %d images", self.settings.max_images, len(paths)
            )
            paths = paths[: self.settings.max_images]
        self.records = records_from_paths(paths)
        self.navigator.reset(len(self.records), self.settings.grid.columns)
        return self.records

    def _on_resize(self, snapshot: GeometrySnapshot) -> None:
        logger.debug("Window resized to %dx%d px", snapshot.pixel_width, snapshot.pixel_height)
        self._resized.set()

    async def run(self) -> RenderReport | None:
        """Render the grid once, or keep re-rendering on resize in watch mode.

        Returns the report of the last completed pass, or ``None`` when the
        directory holds no images. Discovery and geometry errors propagate.
        """
        if not self.load():
            return None

        self.notifier.start()
        try:
            self.tracker.refresh()
        except DeviceUnavailable:
            self.notifier.stop()
            raise

        listener = asyncio.create_task(
            watch_resizes(self.tracker, self.notifier.subscribe(), self._on_resize),
            name="gridcat-resize-listener",
        )
        executor = ThreadPoolExecutor(
            max_workers=self.settings.workers, thread_name_prefix="gridcat-transcode"
        )
        renderer = GridRenderer(
            self.tracker, out=self.out, executor=executor, window=self.settings.workers
        )
        try:
            report = await renderer.render(self.records, self.settings.grid)
            selected = self.navigator.selected_record(self.records)
            if selected is not None:
                logger.debug("Selected %s", selected.path)

            while self.settings.watch:
                await self._resized.wait()
                self._resized.clear()
                if self.tracker.snapshot == report.geometry:
                    continue
                report = await renderer.render(self.records, self.settings.grid, clear=True)
            return report
        finally:
            listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await listener
            self.notifier.stop()
            # Transcodes already running finish on their own threads; the loop does not wait.
            executor.shutdown(wait=False, cancel_futures=True)
