"""Detection: recognized text lines to positioned sensitive items."""

from __future__ import annotations

import time
from typing import Iterable, List

from PIL import Image

from imageguard.errors import ImageGuardError, RecognitionFailed
from imageguard.logging import get_logger
from imageguard.ocr import RecognizedLine, TextRecognizer
from imageguard.types import DetectorConfig, SensitiveItem

from .classification import PatternClassifier

logger = get_logger(__name__)


def _reading_order(item: SensitiveItem):
    box = item.bounding_box
    # top edge first (y grows upward), then left edge
    return (-(box.y + box.height), box.x, item.type.value, item.text, box.height, box.width)


def detect_candidates(
    lines: Iterable[RecognizedLine], config: DetectorConfig
) -> List[SensitiveItem]:
    """Classify recognized lines and build one item per matching line.

    The result is sorted in reading order so the same set of lines always
    yields the same sequence, whatever order the recognizer reported them in.
    """
    classifier = PatternClassifier(config)
    if not classifier.enabled:
        return []
    items: List[SensitiveItem] = []
    for line in lines:
        match = classifier.classify(line.text)
        if match is None:
            continue
        data_type, text = match
        items.append(SensitiveItem(type=data_type, text=text, bounding_box=line.box))
    items.sort(key=_reading_order)
    return items


class DetectionPipeline:
    """Run the recognizer and classifier under a detector configuration."""

    def __init__(self, recognizer: TextRecognizer) -> None:
        self.recognizer = recognizer

    def detect(self, img: Image.Image, config: DetectorConfig) -> List[SensitiveItem]:
        """Return fresh, all-selected items for ``img``.

        With every detector disabled the recognizer is not invoked at all.
        Library errors from the recognizer propagate unchanged; anything
        else is reported as ``RecognitionFailed``.
        """
        if not config.any_enabled():
            logger.info("All detectors disabled; skipping recognition")
            return []
        t0 = time.perf_counter()
        try:
            lines = list(self.recognizer.recognize(img))
        except ImageGuardError:
            raise
        except Exception as exc:
            raise RecognitionFailed(f"Recognizer error: {exc}") from exc
        t_ocr = time.perf_counter()
        items = detect_candidates(lines, config)
        logger.info(
            "Detection finished",
            extra={
                "extra": {
                    "lines": len(lines),
                    "items": len(items),
                    "ocr_s": round(t_ocr - t0, 4),
                    "classify_s": round(time.perf_counter() - t_ocr, 4),
                }
            },
        )
        return items


__all__ = ["DetectionPipeline", "detect_candidates"]
