"""Configuration primitives for the imageguard pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from imageguard.types import DataType, DetectorConfig, NormalizedBox, SensitiveItem


@dataclass
class RunConfig:
    """Runtime configuration for OCR, detection, and redaction."""

    lang: str = "eng"
    psm: int = 3
    preprocess: bool = True
    binarize: bool = True
    auto_psm: bool = True
    tess_configs: Optional[Dict[str, Any]] = None
    detectors: DetectorConfig = field(default_factory=DetectorConfig)
    box_inflation_px: int = 0
    instrument: bool = True


class ScanResult(BaseModel):
    """Per-image output payload."""

    source: str
    width: int
    height: int
    items: List[Dict[str, Any]] = Field(default_factory=list)
    boxes_applied: int = 0
    out: Optional[str] = None
    timings: Optional[Dict[str, float]] = None


__all__ = [
    "DataType",
    "NormalizedBox",
    "SensitiveItem",
    "DetectorConfig",
    "RunConfig",
    "ScanResult",
]
