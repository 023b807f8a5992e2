"""Core data model: categories, normalized boxes, sensitive items, detector flags."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple
from uuid import uuid4


class DataType(str, Enum):
    """Categories of sensitive text the pipeline can redact."""

    EMAIL = "email"
    PHONE = "phone"
    URL = "url"


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


@dataclass(frozen=True)
class NormalizedBox:
    """Rectangle in unit-square coordinates, origin bottom-left, y up."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name}={value!r} outside [0, 1]")
        if self.x + self.width > 1.0 + 1e-9 or self.y + self.height > 1.0 + 1e-9:
            raise ValueError("box extends past the unit square")

    @classmethod
    def clamped(cls, x: float, y: float, width: float, height: float) -> "NormalizedBox":
        """Build a box from raw recognizer output, clipping it to the unit square."""
        x0, y0 = _clamp01(x), _clamp01(y)
        x1 = _clamp01(max(x, x + width))
        y1 = _clamp01(max(y, y + height))
        return cls(x0, y0, max(0.0, x1 - x0), max(0.0, y1 - y0))

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass
class SensitiveItem:
    """One classified, positioned detection.

    ``type``, ``text`` and ``bounding_box`` are fixed at creation; only
    ``selected`` changes, and only through the owning selection store.
    """

    type: DataType
    text: str
    bounding_box: NormalizedBox
    selected: bool = True
    id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("SensitiveItem.text must be non-empty")

    def key(self) -> Tuple[str, str, Tuple[float, float, float, float]]:
        """Identity used for determinism checks: (type, text, box)."""
        return (self.type.value, self.text, self.bounding_box.as_tuple())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "text": self.text,
            "bounding_box": list(self.bounding_box.as_tuple()),
            "selected": self.selected,
        }


_FLAG_FOR_TYPE = {
    DataType.EMAIL: "detect_emails",
    DataType.PHONE: "detect_phone_numbers",
    DataType.URL: "detect_urls",
}


@dataclass
class DetectorConfig:
    """Which categories are detected and counted toward the mask."""

    detect_emails: bool = True
    detect_phone_numbers: bool = True
    detect_urls: bool = True

    def any_enabled(self) -> bool:
        return self.detect_emails or self.detect_phone_numbers or self.detect_urls

    @staticmethod
    def flag_for(data_type: DataType) -> str:
        """Name of the boolean field that governs ``data_type``."""
        return _FLAG_FOR_TYPE[data_type]

    def allows(self, data_type: DataType) -> bool:
        return getattr(self, self.flag_for(data_type))

    def set_allowed(self, data_type: DataType, enabled: bool) -> None:
        setattr(self, self.flag_for(data_type), bool(enabled))

    def wants_links(self) -> bool:
        """Emails and URLs both come out of the link matcher."""
        return self.detect_emails or self.detect_urls

    def wants_phones(self) -> bool:
        return self.detect_phone_numbers


__all__ = ["DataType", "NormalizedBox", "SensitiveItem", "DetectorConfig"]
