"""Composable building blocks for the imageguard redaction pipeline."""

from .classification import PatternClassifier, classify
from .config import RunConfig, ScanResult
from .detection import DetectionPipeline, detect_candidates
from .orchestration import (
    RedactionSession,
    SessionState,
    build_recognizer,
    process_image,
    process_path,
)
from .rendering import RenderResult, render_image
from .selection import SelectionStore

__all__ = [
    "PatternClassifier",
    "classify",
    "RunConfig",
    "ScanResult",
    "DetectionPipeline",
    "detect_candidates",
    "RedactionSession",
    "SessionState",
    "build_recognizer",
    "process_image",
    "process_path",
    "RenderResult",
    "render_image",
    "SelectionStore",
]
