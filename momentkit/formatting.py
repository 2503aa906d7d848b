"""Pattern formatting and parsing for moments.

Patterns use the Unicode (LDML) date field symbols and are rendered by
Babel, so the default ISO 8601 template is ``yyyy-MM-dd'T'HH:mm:ssZ``. Text
between single quotes is literal and ``''`` is a literal quote. The week of
year (``w``) follows the moment's calendar rather than the locale.

Format String         | Output String
--------------------- | --------------
M/d/y                 | 11/4/2012
MM/dd/yy              | 11/04/12
MMM d, ''yy           | Nov 4, '12
MMMM                  | November
E                     | Sun
EEEE                  | Sunday
'Week' w 'of 52'      | Week 45 of 52
'Day' D 'of 365'      | Day 309 of 365
QQQ                   | Q4
QQQQ                  | 4th quarter
m 'minutes past' h    | 9 minutes past 8
h:mm a                | 8:09 PM
HH:mm:ss's'           | 20:09:00s
h:mm a zz             | 8:09 PM CST
h:mm a zzzz           | 8:09 PM Central Standard Time
yyyy-MM-dd HH:mm:ss Z | 2012-11-04 20:09:00 -0600

Parsing against a pattern matches the text field by field, reading month,
weekday and period names from the locale's CLDR data. Parsing without a
pattern hands the text to ``dateparser``, which understands absolute dates
as well as relative phrases ("tomorrow", "in 3 days") and can pick a date
out of a longer sentence.
"""

import logging
import re
from datetime import datetime, timedelta, timezone

import dateparser
from babel.dates import (
    format_datetime,
    get_day_names,
    get_month_names,
    get_period_names,
    tokenize_pattern,
    untokenize_pattern,
)
from dateparser.search import search_dates

from momentkit.calendars import Calendar, Instant, ensure_instant
from momentkit.locales import Locale, cldr_locale

logger = logging.getLogger(__name__)

ISO8601_FORMAT = "yyyy-MM-dd'T'HH:mm:ssZ"
INVALID_DATE = "Invalid date"

_OFFSET_RE = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$")

_PARSABLE_SYMBOLS = "y M L d E a H h m s S Z"


def format_instant(
    instant: Instant,
    calendar: Calendar,
    locale: "str | Locale",
    pattern: str = ISO8601_FORMAT,
) -> str:
    """Render an instant in the calendar's zone against an LDML pattern."""
    local = instant.astimezone(calendar.zone)

    tokens = []
    for kind, value in tokenize_pattern(pattern):
        if kind == "field" and value[0] == "w":
            week = calendar.week_of_year(local.date())
            tokens.append(("chars", f"{week:0{value[1]}d}"))
        else:
            tokens.append((kind, value))

    return format_datetime(
        local,
        untokenize_pattern(tokens),
        tzinfo=calendar.zone,
        locale=cldr_locale(locale),
    )


class DateTimeParser:
    """Strict parser for LDML patterns.

    Supports numeric year, month, day, hour, minute, second and fraction
    fields, month names of the locale, weekday names (matched and ignored),
    AM/PM markers and numeric offsets. Fields missing from the pattern
    default to 1970-01-01 00:00:00.
    """

    def __init__(self, locale: "str | Locale" = "en"):
        cldr = cldr_locale(locale)

        self.month_names = _name_table(get_month_names, "wide", cldr)
        self.month_abbreviations = _name_table(get_month_names, "abbreviated", cldr)
        self.day_names = list(
            _name_table(get_day_names, "wide", cldr)
            | _name_table(get_day_names, "abbreviated", cldr)
        )

        periods = get_period_names(
            width="abbreviated", context="format", locale=cldr
        )
        self.meridians = {periods["am"].lower(): "am", periods["pm"].lower(): "pm"}

    def parse(self, text: str, pattern: str) -> dict[str, str]:
        """Match ``text`` against ``pattern`` and return the raw field values.

        Raises:
            ValueError: If the pattern uses an unsupported symbol or the text
                does not match
        """
        regex = self._compile(pattern)
        match = regex.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"{text!r} does not match pattern {pattern!r}")
        return {k: v for k, v in match.groupdict().items() if v is not None}

    def _compile(self, pattern: str) -> re.Pattern[str]:
        parts: list[str] = []
        seen: set[str] = set()

        for kind, value in tokenize_pattern(pattern):
            if kind == "chars":
                parts.append(re.escape(value))
                continue

            name, expression = self._field_expression(*value)
            if name is None or name in seen:
                parts.append(f"(?:{expression})")
            else:
                seen.add(name)
                parts.append(f"(?P<{name}>{expression})")

        return re.compile("".join(parts), re.IGNORECASE)

    def _field_expression(self, letter: str, count: int) -> tuple[str | None, str]:
        if letter == "y":
            if count == 2:
                return "short_year", r"\d{2}"
            return "year", r"\d{4}" if count == 4 else r"\d{1,4}"
        if letter in "ML":
            if count >= 4:
                return "month_name", _choice(self.month_names)
            if count == 3:
                return "month_abbreviation", _choice(self.month_abbreviations)
            return "month", _digits(count)
        if letter == "E":
            return None, _choice(self.day_names)
        if letter == "a":
            return "meridian", _choice(self.meridians)
        if letter == "Z":
            return "offset", r"Z|GMT[+-]\d{2}:\d{2}|[+-]\d{2}:?\d{2}"
        if letter == "S":
            return "fraction", rf"\d{{{count}}}"

        fields = {
            "d": "day",
            "H": "hour",
            "h": "hour12",
            "m": "minute",
            "s": "second",
        }
        if letter in fields:
            return fields[letter], _digits(count)

        raise ValueError(
            f"Unsupported pattern symbol {letter * count!r} for parsing.\n"
            f"Parsable symbols: {_PARSABLE_SYMBOLS}"
        )

    def build(self, fields: dict[str, str], calendar: Calendar) -> Instant:
        """Turn matched fields into an instant.

        Raises:
            ValueError: If a field is out of range (e.g., month 13)
        """
        year = 1970
        if "year" in fields:
            year = int(fields["year"])
        elif "short_year" in fields:
            short = int(fields["short_year"])
            year = 1900 + short if short >= 69 else 2000 + short

        month = 1
        if "month" in fields:
            month = int(fields["month"])
        elif "month_name" in fields:
            month = self.month_names[fields["month_name"].lower()]
        elif "month_abbreviation" in fields:
            month = self.month_abbreviations[fields["month_abbreviation"].lower()]

        hour = int(fields.get("hour", 0))
        if "hour12" in fields:
            hour = int(fields["hour12"])
            if not (1 <= hour <= 12):
                raise ValueError(f"12-hour clock value out of range: {hour}")
            hour %= 12
            if self.meridians.get(fields.get("meridian", "").lower()) == "pm":
                hour += 12

        microsecond = 0
        if "fraction" in fields:
            microsecond = int(fields["fraction"][:6].ljust(6, "0"))

        local = datetime(
            year,
            month,
            int(fields.get("day", 1)),
            hour,
            int(fields.get("minute", 0)),
            int(fields.get("second", 0)),
            microsecond,
        )

        if "offset" in fields:
            local = local.replace(tzinfo=_parse_offset(fields["offset"]))
        return ensure_instant(local, calendar)


def _name_table(lookup, width: str, cldr) -> dict[str, int]:
    """Map lowercased names to their numbers, across both CLDR contexts."""
    table: dict[str, int] = {}
    for context in ("format", "stand-alone"):
        for number, name in lookup(width, context=context, locale=cldr).items():
            table.setdefault(name.lower(), number)
    return table


def _digits(count: int) -> str:
    return r"\d{1,2}" if count == 1 else rf"\d{{{count}}}"


def _choice(names) -> str:
    # Longest first so "June" is not cut short by "Jun"
    ordered = sorted(set(names), key=len, reverse=True)
    return "|".join(re.escape(name) for name in ordered)


def _parse_offset(value: str) -> timezone:
    if value.upper() == "Z":
        return timezone.utc
    if value.upper().startswith("GMT"):
        value = value[3:]
    match = _OFFSET_RE.match(value)
    if match is None:
        raise ValueError(f"Invalid UTC offset: {value!r}")
    delta = timedelta(hours=int(match["hours"]), minutes=int(match["minutes"]))
    return timezone(-delta if match["sign"] == "-" else delta)


def _detect_instant(
    text: str, locale: "str | Locale", calendar: Calendar, now: Instant | None
) -> Instant | None:
    if not text.strip():
        return None

    base = (now or datetime.now(timezone.utc)).astimezone(calendar.zone)
    languages = [cldr_locale(locale).language]
    settings = {
        "TIMEZONE": calendar.tz,
        "RETURN_AS_TIMEZONE_AWARE": True,
        # Relative phrases count from the wall clock of the calendar zone
        "RELATIVE_BASE": base.replace(tzinfo=None),
    }

    parsed = dateparser.parse(text, languages=languages, settings=settings)
    if parsed is None:
        found = search_dates(text, languages=languages, settings=settings)
        if not found:
            return None
        parsed = found[0][1]
    return ensure_instant(parsed, calendar)


def resolve_instant(
    text: str,
    format: str | None = None,
    locale: "str | Locale" = "en",
    calendar: Calendar | None = None,
    now: Instant | None = None,
) -> Instant | None:
    """Parse a date string into an instant.

    Args:
        text: The string to parse
        format: LDML pattern the text must match exactly; when omitted the
            date is detected in free-form text
        locale: Locale whose month and day names (and language) are accepted
        calendar: Calendar whose zone applies to strings without an offset
        now: Reference instant for relative phrases such as "tomorrow"
            (defaults to the current time)

    Returns:
        The instant, or None if the string cannot be resolved
    """
    calendar = calendar or Calendar()

    if format is not None:
        try:
            date_parser = DateTimeParser(locale)
            return date_parser.build(date_parser.parse(text, format), calendar)
        except (ValueError, OverflowError) as e:
            logger.debug("Could not parse %r with pattern %r: %s", text, format, e)
            return None

    try:
        return _detect_instant(text, locale, calendar, now)
    except (ValueError, OverflowError) as e:
        logger.debug("Could not detect a date in %r: %s", text, e)
        return None


__all__ = [
    "INVALID_DATE",
    "ISO8601_FORMAT",
    "DateTimeParser",
    "format_instant",
    "resolve_instant",
]
