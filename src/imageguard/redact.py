"""Redaction routines.

Provides utilities to paint opaque black rectangles over detected regions on a
fresh copy of the pristine source image, and to export the result as PNG.
Redaction is destructive: the fill replaces pixel values (alpha included), it
is never blended.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Iterable, Union

from PIL import Image

from imageguard.align import PixelRect
from imageguard.errors import EncodeFailed, SaveFailed
from imageguard.logging import get_logger

logger = get_logger(__name__)

# Opaque black per pixel mode.
_BLACK = {
    "1": 0,
    "L": 0,
    "LA": (0, 255),
    "I": 0,
    "F": 0.0,
    "RGB": (0, 0, 0),
    "RGBA": (0, 0, 0, 255),
    "CMYK": (0, 0, 0, 255),
}


def black_for_mode(mode: str):
    """Return the fully opaque black value for a PIL image mode."""
    try:
        return _BLACK[mode]
    except KeyError as exc:
        raise ValueError(f"Unsupported image mode for redaction: {mode}") from exc


def redact_image(img: Image.Image, rects: Iterable[PixelRect]) -> Image.Image:
    """Paint filled black rectangles over ``rects`` on a copy of ``img``.

    Parameters
    ----------
    img:
        Pristine source image. It is never modified.
    rects:
        Rectangles ``(x, y, w, h)`` in top-left pixel space. Zero-area
        rectangles are ignored; the rest are clipped to the image.

    Returns
    -------
    PIL.Image.Image
        New image with the same size and mode as ``img``.
    """
    fill = black_for_mode(img.mode)
    out = img.copy()
    W, H = out.size
    for x, y, w, h in rects:
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(W, x + w), min(H, y + h)
        if x1 <= x0 or y1 <= y0:
            continue
        out.paste(fill, (x0, y0, x1, y1))
    return out


def encode_png(img: Image.Image) -> bytes:
    """Serialize an image to PNG bytes."""
    buf = io.BytesIO()
    try:
        img.save(buf, format="PNG")
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeFailed(f"Cannot encode {img.mode} image as PNG: {exc}") from exc
    return buf.getvalue()


def save_png(img: Image.Image, out_path: Union[str, Path]) -> Path:
    """Encode ``img`` as PNG and write it to ``out_path``.

    Raises
    ------
    EncodeFailed
        The image cannot be serialized.
    SaveFailed
        The destination cannot be written.
    """
    data = encode_png(img)
    path = Path(out_path)
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise SaveFailed(f"Cannot write {path}: {exc}") from exc
    logger.info("Saved redacted image", extra={"extra": {"path": str(path), "bytes": len(data)}})
    return path


__all__ = ["black_for_mode", "redact_image", "encode_png", "save_png"]
