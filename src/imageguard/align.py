"""Map normalized detection boxes into pixel rectangles for redaction.

Recognizers report boxes as fractions of the image size with the origin at
the bottom-left and y growing upward; PIL draws in pixels with the origin at
the top-left. Rounding always grows the rectangle (floor the near edge, ceil
the far edge) so neighbouring boxes never leave an unredacted seam.
"""

from __future__ import annotations

import math
from typing import Iterable, List, NamedTuple

from imageguard.types import NormalizedBox, SensitiveItem


class PixelRect(NamedTuple):
    """Rectangle ``(x, y, w, h)`` in top-left-origin pixel space."""

    x: int
    y: int
    w: int
    h: int

    @property
    def area(self) -> int:
        return self.w * self.h


def to_pixel_rect(box: NormalizedBox, width: int, height: int) -> PixelRect:
    """Convert a normalized bottom-left box into a covering pixel rectangle.

    Parameters
    ----------
    box:
        Normalized rectangle, origin bottom-left.
    width, height:
        Image size in pixels.

    Returns
    -------
    PixelRect
        Rectangle clamped to the image bounds. It may be a pixel larger than
        the exact region but never smaller.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")
    x0 = math.floor(box.x * width)
    x1 = math.ceil((box.x + box.width) * width)
    y0 = math.floor((1.0 - box.y - box.height) * height)
    y1 = math.ceil((1.0 - box.y) * height)
    x0, x1 = max(0, x0), min(width, x1)
    y0, y1 = max(0, y0), min(height, y1)
    return PixelRect(x0, y0, max(0, x1 - x0), max(0, y1 - y0))


def inflate(rect: PixelRect, px: int, width: int, height: int) -> PixelRect:
    """Inflate a rectangle by ``px`` on all sides while clamping to the image."""
    if px <= 0:
        return rect
    x = max(0, rect.x - px)
    y = max(0, rect.y - px)
    x1 = min(width, rect.x + rect.w + px)
    y1 = min(height, rect.y + rect.h + px)
    return PixelRect(x, y, max(0, x1 - x), max(0, y1 - y))


def items_to_rects(
    items: Iterable[SensitiveItem], width: int, height: int, inflate_px: int = 0
) -> List[PixelRect]:
    """Pixel rectangles for ``items``, skipping zero-area results."""
    rects: List[PixelRect] = []
    for item in items:
        rect = inflate(to_pixel_rect(item.bounding_box, width, height), inflate_px, width, height)
        if rect.area > 0:
            rects.append(rect)
    return rects


__all__ = ["PixelRect", "to_pixel_rect", "inflate", "items_to_rects"]
