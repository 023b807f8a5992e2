"""Image decoding and OCR utilities.

Functions in this module decode raster inputs into PIL images and turn
Tesseract word-level TSV into recognized text lines with normalized,
bottom-left-origin bounding boxes.

Enhancements for difficult screenshots:
- Optional preprocessing (grayscale, adaptive binarization) using OpenCV;
  preprocessing never moves pixels, so boxes stay valid for the original
- Optional auto-PSM retry to maximize token recovery on sparse layouts
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

import cv2
import numpy as np
import pytesseract
from PIL import Image, UnidentifiedImageError

from imageguard.errors import ImageDecodeFailed, RecognitionFailed
from imageguard.logging import get_logger
from imageguard.types import NormalizedBox

logger = get_logger(__name__)

# Modes the redactor can fill in place; anything else is converted on load.
SUPPORTED_MODES = {"1", "L", "LA", "I", "F", "RGB", "RGBA", "CMYK"}


@dataclass(frozen=True)
class RecognizedLine:
    """Best-candidate string of one text line and where it sits."""

    text: str
    box: NormalizedBox


class TextRecognizer(Protocol):
    def recognize(self, img: Image.Image) -> List[RecognizedLine]:
        """Return the text lines found in ``img`` (possibly none)."""
        ...


def load_image(source: Union[str, Path, bytes, Image.Image]) -> Image.Image:
    """Decode a file path, raw bytes, or PIL image into a fully loaded image.

    Parameters
    ----------
    source:
        Path on disk, encoded image bytes (e.g. a drag-and-drop payload), or
        an already decoded image.

    Returns
    -------
    PIL.Image.Image
        A detached copy in a mode the redactor can fill (palette images are
        expanded to RGB/RGBA).

    Raises
    ------
    ImageDecodeFailed
        When the input is missing or is not a decodable image.
    """
    try:
        if isinstance(source, Image.Image):
            img = source.copy()
        elif isinstance(source, (bytes, bytearray)):
            with Image.open(io.BytesIO(source)) as im:
                im.load()
                img = im.copy()
        else:
            with Image.open(Path(source)) as im:
                im.load()
                img = im.copy()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeFailed(f"Cannot decode image: {exc}") from exc

    if img.mode not in SUPPORTED_MODES:
        has_alpha = img.mode in ("PA", "La") or "transparency" in img.info
        img = img.convert("RGBA" if has_alpha else "RGB")
    if img.width == 0 or img.height == 0:
        raise ImageDecodeFailed("Image has no pixels")
    return img


def _preprocess_image(img: Image.Image, *, binarize: bool = True) -> Image.Image:
    """Grayscale and optionally binarize with an adaptive threshold."""
    arr = np.array(img.convert("RGB"))
    gray = cv2.cvtColor(arr, cv2.COLOR_RGB2GRAY)
    if binarize:
        gray = cv2.adaptiveThreshold(
            gray, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY, 35, 15
        )
    return Image.fromarray(gray)


def _words(tsv):
    """Drop layout rows and blank tokens, keeping only real words."""
    tsv = tsv.dropna(subset=["text"])
    tsv = tsv[tsv["text"].astype(str).str.strip() != ""]
    return tsv.reset_index(drop=True)


def tsv_to_lines(tsv, width: int, height: int) -> List[RecognizedLine]:
    """Group word rows into lines and normalize their union boxes.

    Parameters
    ----------
    tsv:
        Pandas DataFrame from ``pytesseract.image_to_data`` with columns
        ``block_num,par_num,line_num,left,top,width,height,text``.
    width, height:
        Pixel size of the image the TSV was computed on.
    """
    words = _words(tsv)
    lines: List[RecognizedLine] = []
    if words.empty:
        return lines
    for _, group in words.groupby(["block_num", "par_num", "line_num"], sort=False):
        text = " ".join(str(t).strip() for t in group["text"].tolist())
        left = int(group["left"].min())
        top = int(group["top"].min())
        right = int((group["left"] + group["width"]).max())
        bottom = int((group["top"] + group["height"]).max())
        box = NormalizedBox.clamped(
            left / width,
            1.0 - bottom / height,
            (right - left) / width,
            (bottom - top) / height,
        )
        lines.append(RecognizedLine(text=text, box=box))
    return lines


class TesseractRecognizer:
    """Text recognizer backed by the Tesseract CLI through ``pytesseract``."""

    def __init__(
        self,
        lang: str = "eng",
        psm: int = 3,
        *,
        preprocess: bool = True,
        binarize: bool = True,
        auto_psm: bool = True,
        tess_configs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.lang = lang
        self.psm = psm
        self.preprocess = preprocess
        self.binarize = binarize
        self.auto_psm = auto_psm
        self.tess_configs = tess_configs or {}

    def _config_string(self, psm: int) -> str:
        # No dictionary correction: we want the glyphs as printed
        cfg: Dict[str, Any] = {
            "preserve_interword_spaces": 1,
            "load_system_dawg": 0,
            "load_freq_dawg": 0,
        }
        cfg.update(self.tess_configs)
        out = f"--oem 1 --psm {psm}"
        for k, v in cfg.items():
            out += f" -c {k}={v}"
        return out

    def _run(self, img: Image.Image, psm: int):
        # Keep tokens as strings: "5551234" must not come back as a float
        tsv = pytesseract.image_to_data(
            img,
            lang=self.lang,
            config=self._config_string(psm),
            output_type=pytesseract.Output.DATAFRAME,
            pandas_config={"dtype": {"text": str}, "keep_default_na": False},
        )
        return _words(tsv)

    def recognize(self, img: Image.Image) -> List[RecognizedLine]:
        try:
            work = _preprocess_image(img, binarize=self.binarize) if self.preprocess else img
            tsv = self._run(work, self.psm)
            if self.auto_psm and len(tsv) < 5:
                best, best_len = tsv, len(tsv)
                for alt in (11, 6):
                    if alt == self.psm:
                        continue
                    alt_df = self._run(work, alt)
                    if len(alt_df) > best_len:
                        best, best_len = alt_df, len(alt_df)
                tsv = best
        except (
            pytesseract.TesseractError,
            pytesseract.TesseractNotFoundError,
            cv2.error,
            RuntimeError,
            OSError,
        ) as exc:
            raise RecognitionFailed(f"Tesseract failed: {exc}") from exc
        lines = tsv_to_lines(tsv, img.width, img.height)
        logger.debug("Recognized text lines", extra={"extra": {"lines": len(lines)}})
        return lines


__all__ = [
    "RecognizedLine",
    "TextRecognizer",
    "TesseractRecognizer",
    "load_image",
    "tsv_to_lines",
    "SUPPORTED_MODES",
]
