"""Image Guard

Find email addresses, phone numbers and URLs in screenshots and photos with
OCR, choose which ones to hide, and export a copy with those regions blacked
out. See the ``imageguard.core`` module for the composable pipeline APIs and
``imageguard.cli`` for the command-line entrypoint.
"""

__all__ = [
    "core",
    "types",
    "errors",
    "ocr",
    "regex_detect",
    "align",
    "redact",
    "batch",
    "logging",
    "settings",
    "health",
]

__version__ = "0.1.0"
