import pytest

from imageguard.errors import RecognitionFailed
from imageguard.pipeline import DetectionPipeline, detect_candidates
from imageguard.types import DataType, DetectorConfig

from conftest import EMAIL_LINE, PHONE_LINE, FakeRecognizer, line


def test_call_scenario(white_image):
    rec = FakeRecognizer([line("Call 555-123-4567", 0.1, 0.1, 0.5, 0.1)])
    items = DetectionPipeline(rec).detect(white_image, DetectorConfig())
    assert len(items) == 1
    item = items[0]
    assert item.type is DataType.PHONE
    assert item.text == "555-123-4567"
    assert item.selected is True


def test_phone_line_ignored_when_phones_disabled(white_image):
    rec = FakeRecognizer([line("Call 555-123-4567", 0.1, 0.1, 0.5, 0.1)])
    items = DetectionPipeline(rec).detect(white_image, DetectorConfig(detect_phone_numbers=False))
    assert items == []


def test_all_flags_off_skips_recognizer(white_image):
    rec = FakeRecognizer([EMAIL_LINE, PHONE_LINE])
    items = DetectionPipeline(rec).detect(white_image, DetectorConfig(False, False, False))
    assert items == []
    assert rec.calls == 0


def test_mailto_line_yields_single_email(white_image):
    rec = FakeRecognizer([line("mailto:a@b.com", 0.0, 0.0, 0.5, 0.1)])
    items = DetectionPipeline(rec).detect(white_image, DetectorConfig())
    assert [(i.type, i.text) for i in items] == [(DataType.EMAIL, "mailto:a@b.com")]


def test_one_item_per_line():
    lines = [line("a@b.com or 555-123-4567 or https://x.io", 0.0, 0.5, 1.0, 0.1)]
    items = detect_candidates(lines, DetectorConfig())
    assert len(items) == 1
    assert items[0].type is DataType.EMAIL


def test_deterministic_regardless_of_line_order(white_image):
    lines = [
        EMAIL_LINE,
        PHONE_LINE,
        line("https://example.com/a", 0.5, 0.5, 0.25, 0.125),
        line("no data here", 0.0, 0.0, 0.5, 0.1),
    ]
    first = DetectionPipeline(FakeRecognizer(lines)).detect(white_image, DetectorConfig())
    second = DetectionPipeline(FakeRecognizer(list(reversed(lines)))).detect(
        white_image, DetectorConfig()
    )
    assert [i.key() for i in first] == [i.key() for i in second]
    assert {i.id for i in first}.isdisjoint({i.id for i in second})
    assert all(i.selected for i in first + second)


def test_boxes_within_unit_square(white_image):
    rec = FakeRecognizer([EMAIL_LINE, PHONE_LINE])
    for item in DetectionPipeline(rec).detect(white_image, DetectorConfig()):
        x, y, w, h = item.bounding_box.as_tuple()
        assert all(0.0 <= v <= 1.0 for v in (x, y, w, h))
        assert w >= 0 and h >= 0


def test_empty_recognition(white_image):
    assert DetectionPipeline(FakeRecognizer([])).detect(white_image, DetectorConfig()) == []


def test_recognition_failure_propagates(white_image):
    rec = FakeRecognizer(RecognitionFailed("engine crashed"))
    with pytest.raises(RecognitionFailed):
        DetectionPipeline(rec).detect(white_image, DetectorConfig())


def test_unexpected_recognizer_error_becomes_recognition_failed(white_image):
    rec = FakeRecognizer(RuntimeError("engine segfault"))
    with pytest.raises(RecognitionFailed) as info:
        DetectionPipeline(rec).detect(white_image, DetectorConfig())
    assert isinstance(info.value.__cause__, RuntimeError)
