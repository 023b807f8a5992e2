"""Readiness checks for the local OCR toolchain (used by ``imageguard check``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import cv2
import pytesseract

from .settings import Settings

# image_to_data line grouping relies on the LSTM engine's layout output.
MIN_TESSERACT_MAJOR = 4


@dataclass
class HealthCheckResult:
    name: str
    status: str  # "pass" | "fail" | "warn"
    detail: Optional[str] = None
    required: bool = True


def _check_tesseract_binary() -> HealthCheckResult:
    try:
        version = pytesseract.get_tesseract_version()
    except (pytesseract.TesseractNotFoundError, OSError) as exc:
        return HealthCheckResult(name="tesseract", status="fail", detail=str(exc))
    major = getattr(version, "major", None)
    if major is None:
        try:
            major = int(str(version).split(".")[0])
        except ValueError:
            major = None
    if major is not None and major < MIN_TESSERACT_MAJOR:
        return HealthCheckResult(
            name="tesseract",
            status="warn",
            detail=f"version {version} is older than {MIN_TESSERACT_MAJOR}.x; line boxes may be unreliable",
        )
    return HealthCheckResult(name="tesseract", status="pass", detail=f"version {version}")


def _check_language_packs(langs: List[str]) -> HealthCheckResult:
    try:
        available = set(pytesseract.get_languages(config=""))
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as exc:
        return HealthCheckResult(
            name="tesseract-langs",
            status="warn",
            detail=f"Could not enumerate language packs: {exc}",
        )
    missing = [lang for lang in langs if lang not in available]
    if missing:
        return HealthCheckResult(
            name="tesseract-langs",
            status="fail",
            detail=f"Missing language packs: {', '.join(missing)}",
        )
    return HealthCheckResult(name="tesseract-langs", status="pass", detail=", ".join(langs))


def _check_opencv() -> HealthCheckResult:
    return HealthCheckResult(
        name="opencv", status="pass", detail=f"version {cv2.__version__}", required=False
    )


def run_readiness_checks(settings: Settings) -> List[HealthCheckResult]:
    """Run every check; the language check is skipped when the binary is missing."""
    checks = [_check_tesseract_binary()]
    if checks[0].status != "fail":
        checks.append(_check_language_packs(settings.readiness_tesseract_langs))
    checks.append(_check_opencv())
    return checks


def is_ready(checks: List[HealthCheckResult]) -> bool:
    return not any(c.required and c.status == "fail" for c in checks)
