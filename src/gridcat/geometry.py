"""Terminal geometry tracking.

Provides ``GeometryTracker``, which queries the controlling terminal for its
character and pixel dimensions with ``TIOCGWINSZ`` and caches the answer as a
single immutable :class:`~gridcat.types.GeometrySnapshot`.

The cached snapshot is only ever replaced, never edited, so readers can take
``tracker.snapshot`` without locking and always see one complete reply. Writes
go through a lock so that the startup refresh and the resize listener cannot
interleave.
"""

from __future__ import annotations

import fcntl
import logging
import os
import struct
import termios
import threading
from typing import Callable

from gridcat.errors import DeviceUnavailable
from gridcat.types import GeometrySnapshot

logger = logging.getLogger(__name__)

TTY_DEVICE = "/dev/tty"

_OPEN_FLAGS = os.O_RDWR | os.O_NOCTTY | os.O_CLOEXEC | os.O_NDELAY
_WINSIZE = struct.Struct("HHHH")

# Takes an open file descriptor, returns (rows, cols, xpixel, ypixel).
WinsizeQuery = Callable[[int], tuple[int, int, int, int]]


def query_winsize(fd: int) -> tuple[int, int, int, int]:
    """Issue ``TIOCGWINSZ`` on *fd*."""
    packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, bytes(_WINSIZE.size))
    rows, cols, xpixel, ypixel = _WINSIZE.unpack(packed)
    return rows, cols, xpixel, ypixel


class GeometryTracker:
    """Owns the process-wide terminal geometry snapshot."""

    def __init__(
        self,
        device: str = TTY_DEVICE,
        query: WinsizeQuery = query_winsize,
    ) -> None:
        self._device = device
        self._query = query
        self._snapshot: GeometrySnapshot = GeometrySnapshot.EMPTY
        self._write_lock = threading.Lock()

    @property
    def snapshot(self) -> GeometrySnapshot:
        return self._snapshot

    def refresh(self) -> GeometrySnapshot:
        """Query the terminal once and replace the cached snapshot.

        Raises :class:`DeviceUnavailable` if the device cannot be opened or
        does not answer the size query; the cached snapshot is then left as
        it was.
        """
        try:
            fd = os.open(self._device, _OPEN_FLAGS)
        except OSError as e:
            raise DeviceUnavailable(f"cannot open {self._device}: {e}") from e

        try:
            rows, cols, xpixel, ypixel = self._query(fd)
        except OSError as e:
            raise DeviceUnavailable(f"size query failed on {self._device}: {e}") from e
        finally:
            os.close(fd)

        if rows == 0 or cols == 0:
            raise DeviceUnavailable(f"{self._device} reported an empty window")

        snapshot = GeometrySnapshot(
            rows=rows, cols=cols, pixel_width=xpixel, pixel_height=ypixel
        )
        with self._write_lock:
            self._snapshot = snapshot

        logger.debug(
            "rows: %d columns: %d width: %d height: %d", rows, cols, xpixel, ypixel
        )
        return snapshot
