"""High-level orchestration for imageguard redaction runs.

Two entry points:

* :class:`RedactionSession` is the interactive, single-owner state object. It
  is driven from one asyncio event loop; decoding and recognition run in a
  worker thread and their results are applied back on the loop only if no
  newer load or detection superseded them.
* :func:`process_path` is the one-shot form used by the CLI and batch runner:
  load, detect, deselect skipped items, redact, save.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from PIL import Image

from imageguard.errors import ImageGuardError, NoImageLoaded, RecognitionFailed, StaleResult
from imageguard.logging import get_logger
from imageguard.ocr import TesseractRecognizer, TextRecognizer, load_image
from imageguard.redact import encode_png, save_png
from imageguard.types import DataType, DetectorConfig, SensitiveItem

from .config import RunConfig, ScanResult
from .detection import DetectionPipeline
from .rendering import active_rects, render_image
from .selection import SelectionStore

logger = get_logger("imageguard")

ImageSource = Union[str, Path, bytes, Image.Image]


class SessionState(str, Enum):
    """Lifecycle of the currently loaded image."""

    EMPTY = "empty"
    LOADED = "loaded"
    DETECTING = "detecting"
    DETECTED = "detected"
    RENDERED = "rendered"


def build_recognizer(cfg: RunConfig) -> TesseractRecognizer:
    return TesseractRecognizer(
        lang=cfg.lang,
        psm=cfg.psm,
        preprocess=cfg.preprocess,
        binarize=cfg.binarize,
        auto_psm=cfg.auto_psm,
        tess_configs=cfg.tess_configs,
    )


class RedactionSession:
    """Owns the loaded image, detector flags, and item selection.

    All mutation happens on the event loop that awaits the session's
    coroutines. Every load and detection request takes a new generation
    number; a completion whose generation is no longer current raises
    :class:`StaleResult` instead of touching state.
    """

    def __init__(
        self,
        recognizer: Optional[TextRecognizer] = None,
        cfg: Optional[RunConfig] = None,
    ) -> None:
        self.cfg = cfg or RunConfig()
        self.pipeline = DetectionPipeline(recognizer or build_recognizer(self.cfg))
        self.detectors: DetectorConfig = replace(self.cfg.detectors)
        self.store = SelectionStore()
        self.state = SessionState.EMPTY
        self.source: Optional[str] = None
        self._original: Optional[Image.Image] = None
        self._rendered: Optional[Image.Image] = None
        self._generation = 0
        self._load_seq = 0
        self._pending: Optional[asyncio.Future] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def original(self) -> Optional[Image.Image]:
        return self._original

    @property
    def rendered(self) -> Optional[Image.Image]:
        return self._rendered

    @property
    def items(self) -> List[SensitiveItem]:
        return self.store.items

    def _require_image(self) -> Image.Image:
        if self._original is None:
            raise NoImageLoaded("Load an image first")
        return self._original

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def load(self, source: ImageSource) -> Image.Image:
        """Decode ``source`` and make it the current image.

        Cancels any detection still running for the previous image and clears
        its items. A decode failure leaves the session as it was.
        """
        self._load_seq += 1
        seq = self._load_seq
        img = await asyncio.to_thread(load_image, source)
        if seq != self._load_seq:
            logger.warning(
                "Discarding superseded image load",
                extra={"extra": {"load": seq, "latest": self._load_seq}},
            )
            raise StaleResult(seq, self._load_seq)
        self._generation += 1
        self._cancel_pending()
        self._original = img
        self._rendered = None
        self.source = str(source) if isinstance(source, (str, Path)) else None
        self.store.clear()
        self.state = SessionState.LOADED
        logger.info(
            "Image loaded",
            extra={"extra": {"width": img.width, "height": img.height, "mode": img.mode, "generation": self._generation}},
        )
        return img

    async def detect(self) -> List[SensitiveItem]:
        """Run detection on the current image and render the result.

        Raises
        ------
        NoImageLoaded
            No image has been loaded.
        RecognitionFailed
            The recognizer failed; existing items are kept.
        StaleResult
            A newer load or detection superseded this run; nothing applied.
        """
        img = self._require_image()
        self._generation += 1
        gen = self._generation
        self._cancel_pending()
        detectors = replace(self.detectors)
        self.state = SessionState.DETECTING
        pending = asyncio.ensure_future(asyncio.to_thread(self.pipeline.detect, img, detectors))
        self._pending = pending
        try:
            items = await pending
        except asyncio.CancelledError:
            if gen != self._generation:
                raise StaleResult(gen, self._generation) from None
            raise
        except Exception as exc:
            if gen != self._generation:
                raise StaleResult(gen, self._generation) from exc
            self._pending = None
            self.state = SessionState.RENDERED if self._rendered is not None else SessionState.LOADED
            logger.warning(
                "Detection failed; keeping previous items",
                extra={"extra": {"generation": gen, "items": len(self.store)}},
                exc_info=True,
            )
            if isinstance(exc, ImageGuardError):
                raise
            raise RecognitionFailed(f"Detection failed: {exc}") from exc
        if gen != self._generation:
            logger.warning(
                "Discarding stale detection result",
                extra={"extra": {"generation": gen, "current": self._generation}},
            )
            raise StaleResult(gen, self._generation)
        self._pending = None
        self.store.replace_all(items)
        self.state = SessionState.DETECTED
        self.render()
        return items

    async def load_and_detect(self, source: ImageSource) -> List[SensitiveItem]:
        await self.load(source)
        return await self.detect()

    def set_detector(self, data_type: DataType, enabled: bool) -> Optional[Image.Image]:
        """Enable or disable one category; re-renders when results exist."""
        self.detectors.set_allowed(data_type, enabled)
        return self._rerender()

    def set_config(
        self,
        *,
        detect_emails: Optional[bool] = None,
        detect_phone_numbers: Optional[bool] = None,
        detect_urls: Optional[bool] = None,
    ) -> Optional[Image.Image]:
        flags = {
            DataType.EMAIL: detect_emails,
            DataType.PHONE: detect_phone_numbers,
            DataType.URL: detect_urls,
        }
        for data_type, enabled in flags.items():
            if enabled is not None:
                self.detectors.set_allowed(data_type, enabled)
        return self._rerender()

    def _rerender(self) -> Optional[Image.Image]:
        if self.state not in (SessionState.DETECTED, SessionState.RENDERED):
            return self._rendered
        return self.render()

    def toggle_item(self, item_id: str) -> Optional[Image.Image]:
        """Flip one item's selection and re-render; unknown ids are ignored."""
        if not self.store.toggle_item(item_id):
            logger.debug("Toggle for unknown item ignored", extra={"extra": {"id": item_id}})
            return self._rendered
        return self.render()

    def active_rects(self):
        img = self._require_image()
        return active_rects(self.store, self.detectors, img.width, img.height, self.cfg.box_inflation_px)

    def render(self) -> Image.Image:
        """Redact the active items on a fresh copy of the original image."""
        img = self._require_image()
        result = render_image(img, self.store, self.detectors, self.cfg.box_inflation_px)
        self._rendered = result.redacted_image
        if self.state is not SessionState.DETECTING:
            self.state = SessionState.RENDERED
        return self._rendered

    def encode(self) -> bytes:
        return encode_png(self._rendered if self._rendered is not None else self.render())

    def save(self, out_path: Union[str, Path]) -> Path:
        """Write the current rendering as PNG; in-memory state is unaffected."""
        img = self._rendered if self._rendered is not None else self.render()
        return save_png(img, out_path)


def _apply_skips(store: SelectionStore, skip: Iterable[str]) -> int:
    wanted = {s for s in skip if s}
    changed = 0
    for item in store.items:
        if item.id in wanted or item.text in wanted:
            changed += int(store.set_selected(item.id, False))
    return changed


def process_image(
    img: Image.Image,
    cfg: RunConfig,
    *,
    recognizer: Optional[TextRecognizer] = None,
    skip: Iterable[str] = (),
):
    """Detect and redact ``img`` in one go.

    Returns the redacted image, the selection store, and timings.
    """
    t0 = time.perf_counter()
    pipeline = DetectionPipeline(recognizer or build_recognizer(cfg))
    store = SelectionStore(pipeline.detect(img, cfg.detectors))
    t_detect = time.perf_counter()
    _apply_skips(store, skip)
    result = render_image(img, store, cfg.detectors, cfg.box_inflation_px)
    timings = {
        "detect": t_detect - t0,
        "redact": result.redact_duration,
        "total": time.perf_counter() - t0,
    }
    return result, store, timings


def process_path(
    input_path: str,
    output_path: Optional[str],
    cfg: RunConfig,
    *,
    recognizer: Optional[TextRecognizer] = None,
    skip: Iterable[str] = (),
) -> Dict[str, Any]:
    """Redact one image file and write PNG output (unless ``output_path`` is None)."""
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {input_path}")
    img = load_image(path)
    result, store, timings = process_image(img, cfg, recognizer=recognizer, skip=skip)
    out: Optional[str] = None
    if output_path is not None:
        out = str(save_png(result.redacted_image, output_path))
    payload = ScanResult(
        source=str(path),
        width=img.width,
        height=img.height,
        items=[item.to_dict() for item in store.items],
        boxes_applied=len(result.rects),
        out=out,
        timings=timings if cfg.instrument else None,
    )
    return payload.model_dump()


__all__ = [
    "SessionState",
    "RedactionSession",
    "build_recognizer",
    "process_image",
    "process_path",
]
