"""Kitty graphics protocol sequences."""

from __future__ import annotations

from gridcat.types import EncodedPayload

_KITTY_PREFIX = "\x1b_G"
_STRING_TERMINATOR = "\x1b\\"

ROW_BREAK = "\n"

_CLEAR_SCREEN = "\x1b[2J\x1b[H"


def emit(payload: EncodedPayload, pixel_width: int, pixel_height: int) -> str:
    """Wrap a base64 PNG in a single direct-transmission graphics command.

    ``f=1`` marks the data format, ``t=d`` direct transmission; ``w``/``h``
    are the declared display size in pixels.
    """
    params = ",".join(["f=1", "t=d", f"w={pixel_width}", f"h={pixel_height}"])
    return f"{_KITTY_PREFIX}{params};x={payload}{_STRING_TERMINATOR}"


def delete_all_images() -> str:
    return f"{_KITTY_PREFIX}a=d,d=A{_STRING_TERMINATOR}"


def clear_screen() -> str:
    return _CLEAR_SCREEN


def cursor_forward(columns: int) -> str:
    """Move right by *columns* cells, standing in for an image that was skipped."""
    if columns <= 0:
        return ""
    return f"\x1b[{columns}C"

