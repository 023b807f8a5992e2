"""Deterministic regex matchers for links and phone numbers.

This module uses the third-party ``regex`` package. Link matching covers
explicit URIs (``scheme://``, ``mailto:``), bare email addresses and bare
``www.``/domain links; every link is reported in absolute URI form so the
caller can tell emails from web addresses by scheme alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import regex as re


_TLDS = (
    "com|org|net|edu|gov|mil|int|io|co|dev|app|ai|me|info|biz|us|uk|de|fr|"
    "ca|au|eu|ly|gg|tv|xyz|pl|nl|jp|ch|se|es|it|in"
)

LINK_RE = re.compile(
    r"(?P<mailto>mailto:[^\s<>\"']+)"
    r"|(?P<scheme>\b[a-z][a-z0-9+.\-]*://[^\s<>\"']+)"
    r"|(?P<email>\b[A-Z0-9._%+\-]+@[A-Z0-9.\-]+\.[A-Z]{2,}\b)"
    r"|(?P<www>\bwww\.[^\s<>\"']+)"
    rf"|(?P<domain>\b[a-z0-9\-]+(?:\.[a-z0-9\-]+)*\.(?:{_TLDS})\b(?:/[^\s<>\"']*)?)",
    re.I,
)
PHONE_RE = re.compile(
    r"(?<!\w)"
    r"(?:\+\d{1,3}[\s\-.]?)?"
    r"(?:\(\d{2,4}\)[\s\-.]?|\d{2,4}[\s\-.]?)?"
    r"\d{3,4}[\s\-.]?\d{3,4}"
    r"(?!\w)"
)

_TRAILING = ".,;:!?)]}'\""
_MIN_PHONE_DIGITS = 7
_MAX_PHONE_DIGITS = 15


@dataclass(frozen=True)
class LinkMatch:
    uri: str
    start: int
    end: int

    @property
    def scheme(self) -> str:
        return self.uri.split(":", 1)[0].lower()


@dataclass(frozen=True)
class PhoneMatch:
    number: str
    start: int
    end: int


def _absolute(kind: str, raw: str) -> str:
    if kind == "email":
        return f"mailto:{raw}"
    if kind in {"www", "domain"}:
        return f"http://{raw}"
    return raw


def find_link(text: str) -> Optional[LinkMatch]:
    """Return the first link in ``text`` as an absolute URI, or None."""
    for m in LINK_RE.finditer(text):
        kind = m.lastgroup or "scheme"
        raw = m.group(kind).rstrip(_TRAILING)
        # "mailto:" or "http://" on its own carries nothing to redact
        if not raw or raw.endswith(":") or raw.endswith("//"):
            continue
        return LinkMatch(uri=_absolute(kind, raw), start=m.start(), end=m.start() + len(raw))
    return None


def find_phone(text: str) -> Optional[PhoneMatch]:
    """Return the first plausible phone number in ``text``, or None."""
    for m in PHONE_RE.finditer(text):
        digits = sum(ch.isdigit() for ch in m.group())
        if _MIN_PHONE_DIGITS <= digits <= _MAX_PHONE_DIGITS:
            return PhoneMatch(number=m.group(), start=m.start(), end=m.end())
    return None


__all__ = ["LinkMatch", "PhoneMatch", "LINK_RE", "PHONE_RE", "find_link", "find_phone"]
