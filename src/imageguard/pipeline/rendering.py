"""Rendering helpers for applying the current selection to the source image."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List

from PIL import Image

from imageguard.align import PixelRect, items_to_rects
from imageguard.redact import redact_image
from imageguard.types import DetectorConfig, SensitiveItem

from .selection import SelectionStore


@dataclass
class RenderResult:
    redacted_image: Image.Image
    items: List[SensitiveItem]
    rects: List[PixelRect]
    redact_duration: float


def active_rects(
    store: SelectionStore,
    config: DetectorConfig,
    width: int,
    height: int,
    inflate_px: int = 0,
) -> List[PixelRect]:
    """Pixel rectangles of every active item."""
    return items_to_rects(store.active_items(config), width, height, inflate_px)


def render_image(
    original: Image.Image,
    store: SelectionStore,
    config: DetectorConfig,
    inflate_px: int = 0,
) -> RenderResult:
    """Redact the active items on a fresh copy of ``original``.

    Always starts from the pristine image, so rendering after a selection
    shrinks uncovers the regions that dropped out.
    """
    items = store.active_items(config)
    rects = items_to_rects(items, original.width, original.height, inflate_px)
    start = time.perf_counter()
    redacted = redact_image(original, rects)
    return RenderResult(
        redacted_image=redacted,
        items=items,
        rects=rects,
        redact_duration=time.perf_counter() - start,
    )


__all__ = ["RenderResult", "active_rects", "render_image"]
