import threading
from typing import List, Sequence, Union

import pytest
from PIL import Image

from imageguard.ocr import RecognizedLine
from imageguard.types import NormalizedBox


def line(text: str, x: float, y: float, w: float, h: float) -> RecognizedLine:
    return RecognizedLine(text=text, box=NormalizedBox(x, y, w, h))


class FakeRecognizer:
    """Returns canned lines (or raises) and counts invocations."""

    def __init__(self, *responses: Union[Sequence[RecognizedLine], Exception]) -> None:
        self.responses = list(responses) or [[]]
        self.calls = 0

    def recognize(self, img) -> List[RecognizedLine]:
        idx = min(self.calls, len(self.responses) - 1)
        self.calls += 1
        resp = self.responses[idx]
        if isinstance(resp, Exception):
            raise resp
        return list(resp)


class GatedRecognizer:
    """Each call blocks until the test releases its gate."""

    def __init__(self, *responses: Sequence[RecognizedLine]) -> None:
        self.responses = [list(r) for r in responses]
        self.gates = [threading.Event() for _ in responses]
        self.started = [threading.Event() for _ in responses]
        self.calls = 0
        self._lock = threading.Lock()

    def recognize(self, img) -> List[RecognizedLine]:
        with self._lock:
            idx = self.calls
            self.calls += 1
        self.started[idx].set()
        self.gates[idx].wait(timeout=5)
        return list(self.responses[idx])

    def release_all(self) -> None:
        for gate in self.gates:
            gate.set()


# 200x100 white canvas; both boxes map to exact pixel edges.
EMAIL_LINE = line("Mail me: alice@example.com", 0.125, 0.75, 0.5, 0.125)
PHONE_LINE = line("Call 555-123-4567", 0.125, 0.25, 0.5, 0.125)
EMAIL_RECT = (25, 12, 100, 13)  # x, y, w, h
PHONE_RECT = (25, 62, 100, 13)


@pytest.fixture
def white_image() -> Image.Image:
    return Image.new("RGB", (200, 100), (255, 255, 255))


def region_is(img: Image.Image, rect, color) -> bool:
    x, y, w, h = rect
    crop = img.crop((x, y, x + w, y + h))
    return all(px == color for px in crop.getdata())
