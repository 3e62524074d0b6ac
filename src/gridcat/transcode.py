"""Decode, resize and re-encode a single image for the graphics protocol."""

from __future__ import annotations

import base64
import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from gridcat.errors import DecodeError, EncodeError, ReadError
from gridcat.types import EncodedPayload

RESAMPLE_FILTER = Image.Resampling.LANCZOS

# Modes Pillow can resample with a real filter and write straight to PNG.
_DIRECT_MODES = {"RGB", "RGBA", "L", "LA"}


def read_source(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e


def decode(path: str | Path, data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Image.DecompressionBombError as e:
        raise DecodeError(path, str(e)) from e
    except UnidentifiedImageError as e:
        raise DecodeError(path, "unrecognised image data") from e
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError(path, str(e)) from e

    if image.mode not in _DIRECT_MODES:
        image = image.convert("RGBA")
    return image


def resize(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale to exactly *width* x *height*; aspect ratio is not kept."""
    return image.resize((width, height), RESAMPLE_FILTER)


def encode_png(path: str | Path, image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(path, str(e)) from e
    return buffer.getvalue()


def transcode(path: str | Path, target_width: int, target_height: int) -> EncodedPayload:
    """Turn the image at *path* into a base64 PNG of the target size.

    Raises :class:`ReadError`, :class:`DecodeError` or :class:`EncodeError`
    depending on which step failed. Nothing is cached between calls.
    """
    if target_width < 1 or target_height < 1:
        raise EncodeError(path, f"invalid target size {target_width}x{target_height}")

    data = read_source(path)
    image = decode(path, data)
    try:
        resized = resize(image, target_width, target_height)
    except (OSError, ValueError) as e:
        raise EncodeError(path, str(e)) from e
    finally:
        image.close()

    png = encode_png(path, resized)
    return base64.b64encode(png).decode("ascii")
