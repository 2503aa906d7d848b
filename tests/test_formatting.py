"""Tests for pattern formatting and string parsing."""

from datetime import datetime, timezone

import pytest

from momentkit import INVALID_DATE, Calendar, Moment, format_instant, resolve_instant

CHICAGO = Calendar("America/Chicago")
UTC = Calendar()

# Sunday, Nov 4, 2012, 20:09:00 CST
SAMPLE = datetime(2012, 11, 5, 2, 9, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("M/d/y", "11/4/2012"),
        ("MM/dd/yy", "11/04/12"),
        ("MMM d, ''yy", "Nov 4, '12"),
        ("MMMM", "November"),
        ("E", "Sun"),
        ("EEEE", "Sunday"),
        ("'Day' D 'of 365'", "Day 309 of 365"),
        ("QQQ", "Q4"),
        ("QQQQ", "4th quarter"),
        ("m 'minutes past' h", "9 minutes past 8"),
        ("h:mm a", "8:09 PM"),
        ("HH:mm:ss's'", "20:09:00s"),
        ("HH:mm:ss:SS", "20:09:00:00"),
        ("h:mm a zz", "8:09 PM CST"),
        ("yyyy-MM-dd HH:mm:ss Z", "2012-11-04 20:09:00 -0600"),
    ],
)
def test_documented_format_samples(pattern, expected):
    """Test the documented pattern table."""
    assert format_instant(SAMPLE, CHICAGO, "en", pattern) == expected


def test_default_pattern_is_iso8601():
    """Test the default ISO 8601 template."""
    assert format_instant(SAMPLE, CHICAGO, "en") == "2012-11-04T20:09:00-0600"
    assert format_instant(SAMPLE, UTC, "en") == "2012-11-05T02:09:00+0000"


def test_offset_and_zone_symbols():
    """Test the long offset and zone forms."""
    assert format_instant(SAMPLE, CHICAGO, "en", "ZZZZZ") == "-06:00"
    assert format_instant(SAMPLE, CHICAGO, "en", "ZZZZ") == "GMT-06:00"
    assert format_instant(SAMPLE, UTC, "en", "ZZZZZ") == "Z"
    assert format_instant(SAMPLE, CHICAGO, "en", "zzzz") == "Central Standard Time"


def test_long_zone_name_for_zone_alias():
    """Test that legacy zone names render their CLDR long name."""
    moment = Moment(SAMPLE, calendar=Calendar("US/Central"))

    assert moment.format("h:mm a zzzz") == "8:09 PM Central Standard Time"
    assert moment.format("h:mm a zz") == "8:09 PM CST"


def test_week_of_year_follows_calendar():
    """Test that week numbers use the calendar's convention."""
    us_weeks = Calendar(
        "America/Chicago", first_weekday=6, minimal_days_in_first_week=1
    )

    assert format_instant(SAMPLE, us_weeks, "en", "'Week' w 'of 52'") == "Week 45 of 52"
    assert format_instant(SAMPLE, CHICAGO, "en", "w") == "44"


def test_clock_variants():
    """Test 12-hour, 24-hour and fractional second symbols."""
    midnight = datetime(2013, 1, 1, 0, 5, 7, 123456, tzinfo=timezone.utc)

    assert format_instant(midnight, UTC, "en", "h:mm a") == "12:05 AM"
    assert format_instant(midnight, UTC, "en", "K:mm") == "0:05"
    assert format_instant(midnight, UTC, "en", "kk:mm") == "24:05"
    assert format_instant(midnight, UTC, "en", "ss.SSS") == "07.123"
    assert format_instant(midnight, UTC, "en", "DDD") == "001"


def test_quoted_literals():
    """Test quoted text and escaped quotes."""
    assert format_instant(SAMPLE, CHICAGO, "en", "h 'o''clock'") == "8 o'clock"
    assert format_instant(SAMPLE, CHICAGO, "en", "'yyyy' yyyy") == "yyyy 2012"


def test_localized_names():
    """Test that names come from the requested locale."""
    assert (
        format_instant(SAMPLE, CHICAGO, "fr", "EEEE d MMMM yyyy")
        == "dimanche 4 novembre 2012"
    )
    assert format_instant(SAMPLE, CHICAGO, "es", "EEE, d MMM") == "dom, 4 nov"


def test_parse_with_pattern():
    """Test strict pattern parsing in the calendar zone."""
    parsed = resolve_instant("2013-01-31 14:30", "yyyy-MM-dd HH:mm", calendar=UTC)
    assert parsed == datetime(2013, 1, 31, 14, 30, tzinfo=timezone.utc)

    parsed = resolve_instant(
        "2013-01-31 14:30", "yyyy-MM-dd HH:mm", calendar=CHICAGO
    )
    assert parsed == datetime(2013, 1, 31, 20, 30, tzinfo=timezone.utc)


def test_parse_iso8601_with_offset():
    """Test that an explicit offset overrides the calendar zone."""
    parsed = resolve_instant(
        "2012-11-04T20:09:00-0600", "yyyy-MM-dd'T'HH:mm:ssZ", calendar=UTC
    )
    assert parsed == SAMPLE

    parsed = resolve_instant("2013-01-01T00:00:00Z", "yyyy-MM-dd'T'HH:mm:ssZ")
    assert parsed == datetime(2013, 1, 1, tzinfo=timezone.utc)


def test_parse_two_digit_years():
    """Test the two-digit year pivot."""
    assert resolve_instant("04/11/12", "dd/MM/yy") == datetime(
        2012, 11, 4, tzinfo=timezone.utc
    )
    assert resolve_instant("04/11/69", "dd/MM/yy") == datetime(
        1969, 11, 4, tzinfo=timezone.utc
    )


def test_parse_names_and_meridians():
    """Test month names, weekday names and AM/PM markers."""
    assert resolve_instant("Sunday, November 4, 2012", "EEEE, MMMM d, yyyy") == (
        datetime(2012, 11, 4, tzinfo=timezone.utc)
    )
    assert resolve_instant("nov 4 2012 8:09 pm", "MMM d yyyy h:mm a") == datetime(
        2012, 11, 4, 20, 9, tzinfo=timezone.utc
    )
    assert resolve_instant("12:30 AM", "hh:mm a") == datetime(
        1970, 1, 1, 0, 30, tzinfo=timezone.utc
    )
    assert resolve_instant("4 novembre 2012", "d MMMM yyyy", locale="fr") == (
        datetime(2012, 11, 4, tzinfo=timezone.utc)
    )


def test_parse_fraction():
    """Test fractional seconds."""
    parsed = resolve_instant("10:00:01.25", "HH:mm:ss.SS")
    assert parsed == datetime(1970, 1, 1, 10, 0, 1, 250000, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "text, pattern",
    [
        ("", "yyyy-MM-dd"),
        ("garbage", "yyyy-MM-dd"),
        ("2013-13-01", "yyyy-MM-dd"),
        ("2013-02-30", "yyyy-MM-dd"),
        ("13:00 PM", "h:mm a"),
        ("Q4 2012", "QQQ yyyy"),
    ],
)
def test_parse_with_pattern_failures(text, pattern):
    """Test that mismatches, out-of-range fields and unsupported symbols fail."""
    assert resolve_instant(text, pattern) is None


def test_free_form_parsing():
    """Test best-effort date detection without a pattern."""
    assert resolve_instant("2013-01-31", calendar=UTC) == datetime(
        2013, 1, 31, tzinfo=timezone.utc
    )
    assert resolve_instant("March 5, 2014 3pm") == datetime(
        2014, 3, 5, 15, tzinfo=timezone.utc
    )
    assert resolve_instant("2013-01-31T10:00:00+02:00") == datetime(
        2013, 1, 31, 8, tzinfo=timezone.utc
    )
    assert resolve_instant("2013-01-31 10:00", calendar=CHICAGO) == datetime(
        2013, 1, 31, 16, tzinfo=timezone.utc
    )


def test_free_form_date_inside_sentence():
    """Test that a date is picked out of surrounding text."""
    instant = resolve_instant("The meeting is on March 5, 2014", calendar=UTC)

    assert instant is not None
    assert format_instant(instant, UTC, "en", "yyyy-MM-dd") == "2014-03-05"


REFERENCE = datetime(2013, 1, 31, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("tomorrow", datetime(2013, 2, 1, 12, tzinfo=timezone.utc)),
        ("yesterday", datetime(2013, 1, 30, 12, tzinfo=timezone.utc)),
        ("in 3 days", datetime(2013, 2, 3, 12, tzinfo=timezone.utc)),
        ("3 days ago", datetime(2013, 1, 28, 12, tzinfo=timezone.utc)),
        ("2 hours ago", datetime(2013, 1, 31, 10, tzinfo=timezone.utc)),
    ],
)
def test_free_form_relative_phrases(text, expected):
    """Test that relative phrases count from the reference instant."""
    assert resolve_instant(text, calendar=UTC, now=REFERENCE) == expected


def test_free_form_relative_phrases_in_locale_language():
    """Test that relative phrases are read in the locale's language."""
    assert resolve_instant("il y a 3 jours", locale="fr", now=REFERENCE) == (
        datetime(2013, 1, 28, 12, tzinfo=timezone.utc)
    )


def test_moment_parse_relative_phrase():
    """Test that Moment.parse counts relative phrases from now."""
    moment = Moment.parse("in 3 days")

    assert moment.is_valid()
    assert moment.relative_to(Moment.now(), suffixed=False) == "3 days"
    assert Moment.parse("tomorrow").relative_to(Moment.now()) == "in a day"


@pytest.mark.parametrize("text", ["", "   ", "nonsense"])
def test_free_form_failures(text):
    """Test that strings without a date are unresolvable."""
    assert resolve_instant(text) is None


def test_invalid_moment_formats_as_sentinel():
    """Test that formatting an invalid moment gives the sentinel."""
    moment = Moment.parse("nonsense")

    assert moment.format() == INVALID_DATE
    assert moment.format("yyyy") == INVALID_DATE
