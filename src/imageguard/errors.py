"""Exception types raised by the imageguard pipeline.

Every failure is recoverable by retrying the action that triggered it
(reload, re-detect, re-save); none of them leave the session in a
half-updated state.
"""

from __future__ import annotations


class ImageGuardError(Exception):
    """Base class for all imageguard failures."""


class ImageDecodeFailed(ImageGuardError):
    """Input bytes or file could not be decoded as a raster image."""


class RecognitionFailed(ImageGuardError):
    """The text recognizer reported an internal failure."""


class EncodeFailed(ImageGuardError):
    """The redacted image could not be serialized."""


class SaveFailed(ImageGuardError):
    """The encoded image could not be written to its destination."""


class NoImageLoaded(ImageGuardError):
    """An operation needs an image but the session is still empty."""


class StaleResult(ImageGuardError):
    """An image load or detection run finished after a newer one superseded it."""

    def __init__(self, generation: int, current: int) -> None:
        super().__init__(
            f"Result of generation {generation} superseded by {current}"
        )
        self.generation = generation
        self.current = current


__all__ = [
    "ImageGuardError",
    "ImageDecodeFailed",
    "RecognitionFailed",
    "EncodeFailed",
    "SaveFailed",
    "NoImageLoaded",
    "StaleResult",
]
