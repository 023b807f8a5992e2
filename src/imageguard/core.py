"""Public entry points for the imageguard pipeline.

The implementation lives in ``imageguard.pipeline`` modules split by
responsibility (classification, detection, selection, rendering,
orchestration). This module re-exports the surface most callers need.
"""

from __future__ import annotations

from .errors import (
    EncodeFailed,
    ImageDecodeFailed,
    ImageGuardError,
    NoImageLoaded,
    RecognitionFailed,
    SaveFailed,
    StaleResult,
)
from .pipeline import (
    DetectionPipeline,
    PatternClassifier,
    RedactionSession,
    RunConfig,
    ScanResult,
    SelectionStore,
    SessionState,
    process_image,
    process_path,
)
from .types import DataType, DetectorConfig, NormalizedBox, SensitiveItem

__all__ = [
    "DataType",
    "DetectorConfig",
    "NormalizedBox",
    "SensitiveItem",
    "RunConfig",
    "ScanResult",
    "PatternClassifier",
    "DetectionPipeline",
    "SelectionStore",
    "RedactionSession",
    "SessionState",
    "process_image",
    "process_path",
    "ImageGuardError",
    "ImageDecodeFailed",
    "RecognitionFailed",
    "EncodeFailed",
    "SaveFailed",
    "NoImageLoaded",
    "StaleResult",
]
