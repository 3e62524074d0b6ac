"""Shared fixtures for gridcat tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from gridcat.geometry import GeometryTracker


class FakeWinsize:
    """Stands in for the TIOCGWINSZ ioctl; replies can be swapped between calls."""

    def __init__(self, reply: tuple[int, int, int, int] = (24, 80, 800, 480)) -> None:
        self.reply: tuple[int, int, int, int] | None = reply
        self.calls = 0

    def __call__(self, fd: int) -> tuple[int, int, int, int]:
        self.calls += 1
        if self.reply is None:
            raise OSError(25, "Inappropriate ioctl for device")
        return self.reply


@pytest.fixture
def tty_device(tmp_path: Path) -> str:
    device = tmp_path / "tty"
    device.write_bytes(b"")
    return str(device)


@pytest.fixture
def winsize() -> FakeWinsize:
    return FakeWinsize()


@pytest.fixture
def tracker(tty_device: str, winsize: FakeWinsize) -> GeometryTracker:
    return GeometryTracker(device=tty_device, query=winsize)


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    def _make(
        name: str = "image.png",
        size: tuple[int, int] = (64, 48),
        mode: str = "RGB",
        color: object = (200, 40, 40),
        fmt: str | None = None,
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color).save(path, format=fmt)
        return path

    return _make
