"""Simple batch runner with multiprocessing concurrency.

Processes a directory or glob of images and writes redacted PNGs to an output
directory, preserving base filenames.
"""

from __future__ import annotations

from typing import Dict, List, Tuple
from pathlib import Path
from concurrent.futures import ProcessPoolExecutor, as_completed

from tqdm import tqdm

from .errors import ImageGuardError
from .logging import get_logger
from .pipeline import RunConfig, process_path

logger = get_logger(__name__)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp"}


def collect_inputs(input_dir: str) -> List[str]:
    """List image files in a directory, or expand a glob pattern."""
    from glob import glob

    p = Path(input_dir)
    if p.exists() and p.is_dir():
        return sorted(str(fp) for fp in p.iterdir() if fp.suffix.lower() in IMAGE_EXTS)
    return sorted(f for f in glob(input_dir) if Path(f).suffix.lower() in IMAGE_EXTS)


def _one(args: Tuple[str, str, RunConfig]) -> Tuple[str, str, int]:
    inp, out_dir, cfg = args
    p = Path(inp)
    out_path = str(Path(out_dir) / f"{p.stem}.redacted.png")
    res = process_path(inp, out_path, cfg)
    return inp, res.get("out") or out_path, int(res.get("boxes_applied", 0))


def run_batch(
    inputs: List[str], output_dir: str, cfg: RunConfig, workers: int = 2
) -> Tuple[List[Tuple[str, str]], Dict[str, str]]:
    """Process multiple inputs concurrently.

    Returns ``(completed, failed)``: a list of (input, output) pairs and a
    mapping of input path to error message.
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    results: List[Tuple[str, str]] = []
    failed: Dict[str, str] = {}
    with ProcessPoolExecutor(max_workers=max(1, int(workers))) as ex:
        futs = {ex.submit(_one, (i, output_dir, cfg)): i for i in inputs}
        for f in tqdm(as_completed(futs), total=len(futs), desc="OCR+Detect+Redact"):
            inp = futs[f]
            try:
                _, out, boxes = f.result()
            except (ImageGuardError, OSError) as exc:
                failed[inp] = str(exc)
                logger.warning(
                    "Batch item failed",
                    extra={"extra": {"input": inp, "error": str(exc)}},
                )
                continue
            results.append((inp, out))
            logger.info(
                "Batch item done",
                extra={"extra": {"input": inp, "output": out, "boxes": boxes}},
            )
    return results, failed
