"""Calendar decomposition and unit-aware arithmetic.

A ``Calendar`` pairs the Gregorian rules of ``datetime`` with an IANA zone
and a week-numbering convention. Instants are always timezone-aware UTC
datetimes; the calendar turns them into civil components and back.

``compose_instant`` normalizes out-of-range components by carrying the
excess into the next larger unit, which is what gives moment setters their
overflow bubbling (minute 75 becomes hour + 1, minute 15).
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta

from momentkit.units import CalendarUnit

Instant = datetime

_UTC = timezone.utc


@dataclass(frozen=True)
class Calendar:
    """Gregorian calendar bound to a time zone.

    Attributes:
        tz: IANA timezone name (e.g., "UTC", "US/Pacific")
        first_weekday: First day of the week, Monday=0 ... Sunday=6
        minimal_days_in_first_week: Days of the new year the first week must
            contain to count as week 1 (4 gives ISO 8601 numbering)
    """

    tz: str = "UTC"
    first_weekday: int = 0
    minimal_days_in_first_week: int = 4

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(
                f"Unknown timezone {self.tz!r}.\n"
                f"Use an IANA timezone name, e.g. 'UTC', 'US/Pacific', "
                f"'Europe/Paris'"
            ) from e
        if not (0 <= self.first_weekday <= 6):
            raise ValueError(
                f"first_weekday must be 0-6 (Monday=0), got {self.first_weekday}"
            )
        if not (1 <= self.minimal_days_in_first_week <= 7):
            raise ValueError(
                f"minimal_days_in_first_week must be 1-7, "
                f"got {self.minimal_days_in_first_week}"
            )

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.tz)

    def week_of_year(self, day: date) -> int:
        """Return the week number of ``day`` under this calendar's convention.

        Week 1 is the first week holding at least
        ``minimal_days_in_first_week`` days of the year. Days before it belong
        to the last week of the previous year, and the closing days of
        December may already belong to week 1 of the next year.
        """
        next_start = self._first_week_start(day.year + 1)
        if day >= next_start:
            return 1

        start = self._first_week_start(day.year)
        if day < start:
            start = self._first_week_start(day.year - 1)
        return (day - start).days // 7 + 1

    def _first_week_start(self, year: int) -> date:
        jan1 = date(year, 1, 1)
        offset = (jan1.weekday() - self.first_weekday) % 7
        week_start = jan1 - timedelta(days=offset)
        if 7 - offset < self.minimal_days_in_first_week:
            week_start += timedelta(days=7)
        return week_start


@dataclass(frozen=True, kw_only=True)
class Components:
    """Civil components of an instant in a calendar zone.

    Values produced by ``decompose_instant`` are always in range. Values
    handed to ``compose_instant`` may overflow or underflow; they are
    normalized there. ``fold`` disambiguates repeated wall-clock times at
    the end of daylight saving time.
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0
    fold: int = 0


def decompose_instant(instant: Instant, calendar: Calendar) -> Components:
    """Split an instant into civil components in the calendar's zone."""
    local = instant.astimezone(calendar.zone)
    return Components(
        year=local.year,
        month=local.month,
        day=local.day,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
        microsecond=local.microsecond,
        fold=local.fold,
    )


def compose_instant(components: Components, calendar: Calendar) -> Instant:
    """Build an instant from civil components, carrying any overflow.

    Month overflow carries into the year. Every smaller unit is added as an
    offset from the first of the resulting month, so day 31 in February
    rolls into March and minute 75 becomes the next hour.

    Raises:
        ValueError: If the normalized date falls outside years 1-9999
    """
    years, month_index = divmod(components.month - 1, 12)
    try:
        first_of_month = datetime(components.year + years, month_index + 1, 1)
        wall = first_of_month + timedelta(
            days=components.day - 1,
            hours=components.hour,
            minutes=components.minute,
            seconds=components.second,
            microseconds=components.microsecond,
        )
    except (OverflowError, ValueError) as e:
        raise ValueError(
            f"Components fall outside the supported range (years 1-9999).\n"
            f"Got: {components}"
        ) from e

    local = wall.replace(tzinfo=calendar.zone, fold=components.fold)
    return local.astimezone(_UTC)


def add_unit_to_instant(
    instant: Instant, amount: int, unit: CalendarUnit, calendar: Calendar
) -> Instant:
    """Add ``amount`` of ``unit`` to an instant.

    Years, months, weeks and days move the wall clock of the calendar zone,
    with month-end clamping (Jan 31 + 1 month = Feb 28) and DST handled by
    the zone. Hours, minutes and seconds are exact offsets.
    """
    if unit.is_calendar_based:
        local = instant.astimezone(calendar.zone)
        shifted = local + relativedelta(**{unit.key: amount})
        # The zone offset is resolved again for the new wall-clock time
        return shifted.astimezone(_UTC)

    return instant + timedelta(**{unit.key: amount})


def add_duration_to_instant(instant: Instant, seconds: float) -> Instant:
    """Add a raw interval to an instant, ignoring calendar units."""
    if not math.isfinite(seconds):
        raise ValueError(
            f"Cannot add a non-finite duration: {seconds!r}\n"
            f"Pass a number of seconds or a timedelta."
        )
    return instant + timedelta(seconds=seconds)


def ensure_instant(value: datetime, calendar: Calendar) -> Instant:
    """Convert a datetime to a UTC instant; naive values use the calendar zone."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=calendar.zone)
    return value.astimezone(_UTC)


__all__ = [
    "Calendar",
    "Components",
    "Instant",
    "add_duration_to_instant",
    "add_unit_to_instant",
    "compose_instant",
    "decompose_instant",
    "ensure_instant",
]
