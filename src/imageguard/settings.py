"""Runtime configuration loaded from the environment.

This module centralises the ``IMAGEGUARD_*`` environment lookups used by the
CLI and batch runner. It is intentionally lightweight so it can be imported
anywhere without side effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import List
import os

from .pipeline.config import RunConfig
from .types import DetectorConfig


def _parse_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _split_csv(value: str | None) -> List[str]:
    if not value:
        return []
    parts = [p.strip() for p in value.split(",") if p.strip()]
    return parts


@dataclass
class Settings:
    """Process-wide defaults; CLI flags override them per run."""

    detect_emails: bool = True
    detect_phone_numbers: bool = True
    detect_urls: bool = True
    tesseract_lang: str = "eng"
    tesseract_psm: int = 3
    preprocess: bool = True
    binarize: bool = True
    box_inflation_px: int = 0
    log_level: str = "INFO"
    readiness_tesseract_langs: List[str] = field(default_factory=lambda: ["eng"])

    @staticmethod
    def from_env() -> "Settings":
        settings = Settings(
            detect_emails=_parse_bool(
                os.environ.get("IMAGEGUARD_DETECT_EMAILS"), default=True
            ),
            detect_phone_numbers=_parse_bool(
                os.environ.get("IMAGEGUARD_DETECT_PHONE_NUMBERS"), default=True
            ),
            detect_urls=_parse_bool(
                os.environ.get("IMAGEGUARD_DETECT_URLS"), default=True
            ),
            tesseract_lang=os.environ.get("IMAGEGUARD_TESS_LANG", "eng"),
            tesseract_psm=int(os.environ.get("IMAGEGUARD_TESS_PSM", "3")),
            preprocess=_parse_bool(
                os.environ.get("IMAGEGUARD_PREPROCESS"), default=True
            ),
            binarize=_parse_bool(os.environ.get("IMAGEGUARD_BINARIZE"), default=True),
            box_inflation_px=int(os.environ.get("IMAGEGUARD_BOX_INFLATE", "0")),
            log_level=os.environ.get("IMAGEGUARD_LOG_LEVEL", "INFO").upper(),
        )
        settings.readiness_tesseract_langs = _split_csv(
            os.environ.get("IMAGEGUARD_READY_TESS_LANGS")
        ) or _split_csv(settings.tesseract_lang.replace("+", ",")) or ["eng"]
        return settings

    def detector_config(self) -> DetectorConfig:
        return DetectorConfig(
            detect_emails=self.detect_emails,
            detect_phone_numbers=self.detect_phone_numbers,
            detect_urls=self.detect_urls,
        )

    def to_run_config(self) -> RunConfig:
        return RunConfig(
            lang=self.tesseract_lang,
            psm=self.tesseract_psm,
            preprocess=self.preprocess,
            binarize=self.binarize,
            detectors=self.detector_config(),
            box_inflation_px=self.box_inflation_px,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings."""
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Reset cached settings (useful in tests)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
