import json

import pytest
from PIL import Image
from typer.testing import CliRunner

import imageguard.settings as settings
from imageguard import cli
from imageguard.health import HealthCheckResult
from imageguard.pipeline import orchestration

from conftest import EMAIL_LINE, EMAIL_RECT, PHONE_LINE, PHONE_RECT, FakeRecognizer, region_is

runner = CliRunner()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for key in ("IMAGEGUARD_DETECT_EMAILS", "IMAGEGUARD_DETECT_PHONE_NUMBERS", "IMAGEGUARD_DETECT_URLS"):
        monkeypatch.delenv(key, raising=False)
    settings.reset_settings_cache()
    yield
    settings.reset_settings_cache()


@pytest.fixture
def fake_ocr(monkeypatch: pytest.MonkeyPatch):
    rec = FakeRecognizer([EMAIL_LINE, PHONE_LINE])
    monkeypatch.setattr(orchestration, "build_recognizer", lambda cfg: rec)
    return rec


@pytest.fixture
def input_png(tmp_path):
    path = tmp_path / "in.png"
    Image.new("RGB", (200, 100), (255, 255, 255)).save(path)
    return path


def _json_tail(output: str):
    return json.loads(output[output.index("{"):])


def test_run_writes_redacted_png(fake_ocr, input_png, tmp_path):
    out = tmp_path / "out.png"
    result = runner.invoke(cli.app, ["run", "-i", str(input_png), "-o", str(out)])
    assert result.exit_code == 0, result.output
    img = Image.open(out)
    assert region_is(img, EMAIL_RECT, (0, 0, 0))
    assert region_is(img, PHONE_RECT, (0, 0, 0))
    payload = _json_tail(result.output)
    assert payload["boxes_applied"] == 2


def test_run_respects_flags_and_skips(fake_ocr, input_png, tmp_path):
    out = tmp_path / "out.png"
    result = runner.invoke(
        cli.app,
        ["run", "-i", str(input_png), "-o", str(out), "--no-phones", "--skip", "mailto:alice@example.com"],
    )
    assert result.exit_code == 0, result.output
    img = Image.open(out)
    assert region_is(img, EMAIL_RECT, (255, 255, 255))
    assert region_is(img, PHONE_RECT, (255, 255, 255))


def test_env_settings_disable_category(fake_ocr, input_png, tmp_path, monkeypatch):
    monkeypatch.setenv("IMAGEGUARD_DETECT_EMAILS", "false")
    settings.reset_settings_cache()
    out = tmp_path / "out.png"
    result = runner.invoke(cli.app, ["run", "-i", str(input_png), "-o", str(out)])
    assert result.exit_code == 0, result.output
    img = Image.open(out)
    assert region_is(img, EMAIL_RECT, (255, 255, 255))
    assert region_is(img, PHONE_RECT, (0, 0, 0))


def test_scan_lists_items(fake_ocr, input_png):
    result = runner.invoke(cli.app, ["scan", "-i", str(input_png)])
    assert result.exit_code == 0, result.output
    payload = _json_tail(result.output)
    assert [i["type"] for i in payload["items"]] == ["email", "phone"]
    assert payload["out"] is None


def test_run_reports_bad_input(fake_ocr, tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not really a png")
    result = runner.invoke(cli.app, ["run", "-i", str(bad), "-o", str(tmp_path / "o.png")])
    assert result.exit_code == 1
    missing = runner.invoke(cli.app, ["run", "-i", str(tmp_path / "nope.png"), "-o", str(tmp_path / "o.png")])
    assert missing.exit_code == 1


def test_check_fails_when_tesseract_missing(monkeypatch):
    monkeypatch.setattr(
        cli,
        "run_readiness_checks",
        lambda _s: [HealthCheckResult(name="tesseract", status="fail", detail="missing")],
    )
    result = runner.invoke(cli.app, ["check"])
    assert result.exit_code == 1
    assert "tesseract" in result.output
