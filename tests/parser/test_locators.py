import pytest

from ableton_inspector.parser import extract_locators, parse_xml
from ableton_inspector.parser.locators import format_duration


def _locators(*items):
    body = "".join(items)
    return f"<Locators><Locators>{body}</Locators></Locators>"


def _locator(locator_id, time, name):
    return (
        f'<Locator Id="{locator_id}">'
        f'<Time Value="{time}" /><Name Value="{name}" />'
        '</Locator>'
    )


def test_extract_locators_from_sample_set(sample_set_xml):
    data = extract_locators(parse_xml(sample_set_xml))

    assert data.total_locators == 2
    intro, drop = data.locators

    assert (intro.id, intro.time, intro.name) == (0, 0.0, "Intro")
    assert intro.annotation == "start here"
    assert intro.is_song_start is True
    assert intro.duration == 32.0
    assert intro.duration_text == "8 bars"

    assert (drop.id, drop.time, drop.name) == (1, 32.0, "Drop")
    assert drop.is_song_start is False
    assert drop.duration is None
    assert drop.duration_text is None


def test_extract_locators_single_locator(live_set):
    data = extract_locators(live_set(_locators(_locator(5, 16, "Verse"))))

    assert data.total_locators == 1
    assert data.locators[0].id == 5
    assert data.locators[0].duration is None


def test_extract_locators_sorts_by_time(live_set):
    root = live_set(_locators(
        _locator(1, 48, "C"),
        _locator(2, 8, "A"),
        _locator(3, 20, "B"),
    ))

    data = extract_locators(root)

    assert [loc.name for loc in data.locators] == ["A", "B", "C"]
    assert [loc.duration for loc in data.locators] == [12.0, 28.0, None]
    assert [loc.duration_text for loc in data.locators] == ["3 bars", "7 bars", None]


def test_extract_locators_skips_incomplete_entries(live_set):
    root = live_set(_locators(
        '<Locator><Time Value="0" /><Name Value="No id" /></Locator>',
        '<Locator Id="1"><Name Value="No time" /></Locator>',
        '<Locator Id="2"><Time Value="4" /></Locator>',
        _locator(3, 8, "Kept"),
    ))

    data = extract_locators(root)

    assert [loc.name for loc in data.locators] == ["Kept"]


def test_extract_locators_none(live_set):
    assert extract_locators(live_set("")).locators == []
    assert extract_locators(live_set("<Locators><Locators /></Locators>")).total_locators == 0


@pytest.mark.parametrize("duration,expected", [
    (4, "1 bar"),
    (16, "4 bars"),
    (0, "0 bars"),
    (6, "1.2 bars"),
    (2, "0.2 bars"),
    (17.5, "4.1.5 bars"),
])
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected


def test_extract_locators_keeps_name_text(live_set):
    root = live_set(_locators(_locator(1, 0, "false"), _locator(2, 8, "0")))

    assert [loc.name for loc in extract_locators(root).locators] == ["false", "0"]
