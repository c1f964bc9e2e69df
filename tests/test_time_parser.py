import pytest

from unitime import InvalidInputError, TimeParser


@pytest.fixture
def parser(clock):
    return TimeParser(clock=clock)


@pytest.mark.parametrize(
    "text, offset_ms",
    [
        ("now", 0),
        ("45 seconds ago", 45_000),
        ("1 minute ago", 60_000),
        ("20 minutes ago", 1_200_000),
        ("2 hours ago", 7_200_000),
        ("1 day ago", 86_400_000),
        ("1 week ago", 604_800_000),
        ("30s ago", 30_000),
        ("5m ago", 300_000),
        ("3h ago", 10_800_000),
        ("2d ago", 172_800_000),
        ("  20 Minutes Ago ", 1_200_000),
    ],
)
def test_relative_expressions(parser, base_ms, text, offset_ms):
    assert parser.parse(text) == base_ms - offset_ms


def test_explicit_reference_overrides_clock(parser):
    assert parser.parse("1 minute ago", reference_ms=120_000) == 60_000


def test_absolute_iso_with_zone(parser):
    assert parser.parse("2023-08-31T08:32:48.154Z") == 1693470768154


def test_naive_absolute_is_utc(parser):
    assert parser.parse("2023-08-31 08:32:48") == 1693470768000


def test_bare_number_is_epoch_millis(parser):
    assert parser.parse("1693470768154") == 1693470768154
    assert parser.parse("1000.9") == 1000


@pytest.mark.parametrize("text", ["", "   ", "not a time", "1969-12-31T23:59:59Z"])
def test_rejects_bad_input(parser, text):
    with pytest.raises(InvalidInputError):
        parser.parse(text)


def test_rejects_relative_before_epoch(parser):
    with pytest.raises(InvalidInputError):
        parser.parse("5 seconds ago", reference_ms=1_000)


def test_rejects_non_string(parser):
    with pytest.raises(InvalidInputError):
        parser.parse(12345)
