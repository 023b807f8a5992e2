"""Command-line interface for Image Guard.

Provides:
- `run`: Detect sensitive text in an image and write a redacted PNG.
- `scan`: List detections as JSON without writing an image.
- `batch`: Redact a directory (or glob) of images concurrently.
- `check`: Verify the Tesseract installation and language packs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import orjson
import typer
from rich import print

from .batch import collect_inputs, run_batch
from .core import ImageGuardError, RunConfig, process_path
from .health import is_ready, run_readiness_checks
from .settings import get_settings

app = typer.Typer(add_completion=False, help="Image Guard: hide emails, phone numbers and URLs in images")


def _build_config(
    emails: Optional[bool],
    phones: Optional[bool],
    urls: Optional[bool],
    lang: Optional[str],
    psm: Optional[int],
    box_inflate: Optional[int],
    preprocess: Optional[bool],
) -> RunConfig:
    settings = get_settings()
    logging.getLogger("imageguard").setLevel(settings.log_level)
    cfg = settings.to_run_config()
    if emails is not None:
        cfg.detectors.detect_emails = emails
    if phones is not None:
        cfg.detectors.detect_phone_numbers = phones
    if urls is not None:
        cfg.detectors.detect_urls = urls
    if lang is not None:
        cfg.lang = lang
    if psm is not None:
        cfg.psm = psm
    if box_inflate is not None:
        cfg.box_inflation_px = box_inflate
    if preprocess is not None:
        cfg.preprocess = preprocess
    return cfg


def _dump(payload) -> None:
    typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))


@app.command()
def run(
    input: str = typer.Option(..., "--input", "-i", help="Input image path"),
    output: str = typer.Option(..., "--output", "-o", help="Output PNG path"),
    emails: Optional[bool] = typer.Option(None, "--emails/--no-emails", help="Redact email addresses"),
    phones: Optional[bool] = typer.Option(None, "--phones/--no-phones", help="Redact phone numbers"),
    urls: Optional[bool] = typer.Option(None, "--urls/--no-urls", help="Redact URLs"),
    skip: List[str] = typer.Option([], "--skip", "-s", help="Item id or exact text to leave visible (repeatable)"),
    lang: Optional[str] = typer.Option(None, help="Tesseract language"),
    psm: Optional[int] = typer.Option(None, help="Tesseract PSM"),
    box_inflate: Optional[int] = typer.Option(None, help="Inflate redaction boxes (px)"),
    preprocess: Optional[bool] = typer.Option(
        None, "--preprocess/--no-preprocess", help="Binarize before OCR"
    ),
):
    """Redact sensitive text in one image and write a PNG.

    Parameters
    ----------
    input:
        Image file (PNG, JPEG, ...).
    output:
        Destination for the redacted PNG.
    skip:
        Detections to leave unredacted, by id (from ``scan``) or exact text.
    """
    cfg = _build_config(emails, phones, urls, lang, psm, box_inflate, preprocess)
    try:
        res = process_path(input, output, cfg, skip=skip)
    except (ImageGuardError, FileNotFoundError) as exc:
        print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1)
    print(f"[green]Redacted image:[/green] {res['out']} ({res['boxes_applied']} regions)")
    _dump(res)


@app.command()
def scan(
    input: str = typer.Option(..., "--input", "-i", help="Input image path"),
    emails: Optional[bool] = typer.Option(None, "--emails/--no-emails", help="Detect email addresses"),
    phones: Optional[bool] = typer.Option(None, "--phones/--no-phones", help="Detect phone numbers"),
    urls: Optional[bool] = typer.Option(None, "--urls/--no-urls", help="Detect URLs"),
    lang: Optional[str] = typer.Option(None, help="Tesseract language"),
    psm: Optional[int] = typer.Option(None, help="Tesseract PSM"),
):
    """Print detected items as JSON without writing an image."""
    cfg = _build_config(emails, phones, urls, lang, psm, None, None)
    try:
        res = process_path(input, None, cfg)
    except (ImageGuardError, FileNotFoundError) as exc:
        print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1)
    _dump(res)


@app.command()
def batch(
    input_dir: str = typer.Option(..., help="Input directory or glob pattern"),
    output_dir: str = typer.Option(..., help="Output directory for PNGs"),
    workers: int = typer.Option(2, help="Concurrent workers"),
    emails: Optional[bool] = typer.Option(None, "--emails/--no-emails", help="Redact email addresses"),
    phones: Optional[bool] = typer.Option(None, "--phones/--no-phones", help="Redact phone numbers"),
    urls: Optional[bool] = typer.Option(None, "--urls/--no-urls", help="Redact URLs"),
    lang: Optional[str] = typer.Option(None, help="Tesseract language"),
    psm: Optional[int] = typer.Option(None, help="Tesseract PSM"),
    box_inflate: Optional[int] = typer.Option(None, help="Inflate redaction boxes (px)"),
):
    """Batch process multiple images concurrently."""
    files = collect_inputs(input_dir)
    if not files:
        print("[red]No inputs found[/red]")
        raise typer.Exit(code=1)
    cfg = _build_config(emails, phones, urls, lang, psm, box_inflate, None)
    pairs, failed = run_batch(files, output_dir, cfg, workers=workers)
    print(f"[green]Completed {len(pairs)} files[/green]")
    for inp, err in sorted(failed.items()):
        print(f"[red]Failed:[/red] {inp}: {err}")
    if failed:
        raise typer.Exit(code=1)


@app.command()
def check():
    """Check that Tesseract and its language packs are available."""
    checks = run_readiness_checks(get_settings())
    colors = {"pass": "green", "warn": "yellow", "fail": "red"}
    for c in checks:
        color = colors.get(c.status, "white")
        print(f"[{color}]{c.status.upper()}[/{color}] {c.name}: {c.detail or ''}")
    if not is_ready(checks):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
