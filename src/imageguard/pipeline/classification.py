"""Line classification into email / phone / URL categories."""

from __future__ import annotations

from typing import Optional, Tuple

from imageguard.regex_detect import find_link, find_phone
from imageguard.types import DataType, DetectorConfig


class PatternClassifier:
    """Decide whether one recognized line carries a sensitive datum.

    First match wins: a link beats a phone number, and a ``mailto:`` link is
    an email rather than a URL. A line yields at most one classification even
    when it contains several matchable substrings.

    Only the matchers the detector config asks for run. Emails and URLs share
    the link matcher, so enabling either one can still produce an item of the
    other type; the selection query decides whether it is redacted.
    """

    def __init__(self, config: DetectorConfig) -> None:
        self.use_links = config.wants_links()
        self.use_phones = config.wants_phones()

    @property
    def enabled(self) -> bool:
        return self.use_links or self.use_phones

    def classify(self, line: str) -> Optional[Tuple[DataType, str]]:
        if self.use_links:
            link = find_link(line)
            if link is not None:
                if link.scheme == "mailto":
                    return DataType.EMAIL, link.uri
                return DataType.URL, link.uri
        if self.use_phones:
            phone = find_phone(line)
            if phone is not None:
                return DataType.PHONE, phone.number
        return None


def classify(line: str, config: Optional[DetectorConfig] = None) -> Optional[Tuple[DataType, str]]:
    """Classify ``line`` with a one-off classifier (all detectors by default)."""
    return PatternClassifier(config or DetectorConfig()).classify(line)


__all__ = ["PatternClassifier", "classify"]
