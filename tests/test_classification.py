import pytest

from imageguard.pipeline import classification
from imageguard.pipeline.classification import PatternClassifier, classify
from imageguard.regex_detect import find_link, find_phone
from imageguard.types import DataType, DetectorConfig


# ── Link matcher ─────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "text, uri",
    [
        ("mailto:a@b.com", "mailto:a@b.com"),
        ("Email: john.doe@example.com", "mailto:john.doe@example.com"),
        ("Visit https://example.com/path.", "https://example.com/path"),
        ("docs at www.example.org/shared/plan", "http://www.example.org/shared/plan"),
        ("LinkedIn: linkedin.com/in/priyasharma", "http://linkedin.com/in/priyasharma"),
    ],
)
def test_find_link_returns_absolute_uri(text, uri):
    match = find_link(text)
    assert match is not None
    assert match.uri == uri


def test_find_link_ignores_plain_text():
    assert find_link("The weather is nice today in Melbourne") is None
    assert find_link("mailto:") is None


# ── Phone matcher ────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "text, number",
    [
        ("Call 555-123-4567", "555-123-4567"),
        ("Phone: (415) 555-0123", "(415) 555-0123"),
        ("Alt Phone: +44 20 7946 0958", "+44 20 7946 0958"),
        ("Phone: 650.555.0007", "650.555.0007"),
        ("Call 5551234567", "5551234567"),
    ],
)
def test_find_phone(text, number):
    match = find_phone(text)
    assert match is not None
    assert match.number == number


@pytest.mark.parametrize(
    "text",
    ["Date: 2024-06-06", "Amount Due: $1,245.77", "Invoice #INV-10023", "Room 42"],
)
def test_find_phone_rejects_non_numbers(text):
    assert find_phone(text) is None


# ── Precedence ───────────────────────────────────────────────────────

def test_mailto_is_email_never_url():
    result = classify("mailto:a@b.com", DetectorConfig())
    assert result == (DataType.EMAIL, "mailto:a@b.com")


def test_link_beats_phone_on_same_line():
    result = classify("Call 555-123-4567 or visit https://example.com")
    assert result == (DataType.URL, "https://example.com")


def test_phone_text_is_the_matched_substring():
    assert classify("Call 555-123-4567") == (DataType.PHONE, "555-123-4567")


def test_unseparated_ten_digit_number_is_a_phone():
    assert classify("Call 5551234567") == (DataType.PHONE, "5551234567")


def test_no_match_yields_none():
    assert classify("Nothing sensitive here") is None


def test_phone_branch_skipped_when_disabled(monkeypatch):
    def boom(text):
        raise AssertionError("phone matcher must not run")

    monkeypatch.setattr(classification, "find_phone", boom)
    clf = PatternClassifier(DetectorConfig(detect_phone_numbers=False))
    assert clf.classify("Call 555-123-4567") is None


def test_link_matcher_skipped_when_emails_and_urls_disabled():
    clf = PatternClassifier(DetectorConfig(detect_emails=False, detect_urls=False))
    # the phone still wins because links are not requested at all
    assert clf.classify("https://example.com 555-123-4567") == (DataType.PHONE, "555-123-4567")


def test_email_only_config_still_runs_link_matcher():
    clf = PatternClassifier(DetectorConfig(detect_phone_numbers=False, detect_urls=False))
    assert clf.classify("https://example.com") == (DataType.URL, "https://example.com")


def test_classifier_disabled_with_all_flags_off():
    clf = PatternClassifier(DetectorConfig(False, False, False))
    assert not clf.enabled
    assert clf.classify("mailto:a@b.com") is None
