"""The ``Moment`` value object.

A moment is an instant paired with a calendar and a locale. It exposes the
civil components of the instant, calendar-aware arithmetic, pattern
formatting and relative-time phrases.

Construction never raises for bad input data: an unparsable string or an
out-of-range component tuple produces an invalid moment, reported by
``is_valid()``. Formatting an invalid moment yields ``"Invalid date"``;
reading its components raises ``InvalidMomentError``.
"""

from collections.abc import Sequence
from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from momentkit.calendars import (
    Calendar,
    Components,
    Instant,
    add_duration_to_instant,
    add_unit_to_instant,
    compose_instant,
    decompose_instant,
    ensure_instant,
)
from momentkit.config import MomentConfig, default_config
from momentkit.formatting import (
    INVALID_DATE,
    ISO8601_FORMAT,
    format_instant,
    resolve_instant,
)
from momentkit.humanize import humanize
from momentkit.units import CalendarUnit, parse_unit

# Defaults for omitted trailing entries of a component tuple:
# month, day, hour, minute, second
_COMPONENT_DEFAULTS = (1, 1, 0, 0, 0)

_SETTABLE = ("year", "month", "day", "hour", "minute", "second")


class InvalidMomentError(ValueError):
    """Raised when a derived value is read from an invalid moment."""


def _check_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{name} must be an int, got {type(value).__name__!r}: {value!r}"
        )
    return value


class Moment:
    """A point in time with a calendar and a locale.

    Moments are mutable: ``add``, ``subtract``, ``add_duration``, ``set`` and
    the component setters change the moment in place and return it for
    chaining. Use ``copy()`` or ``shift()`` for a derived value that leaves
    the original untouched. Moments have no internal locking; sharing one
    between threads that mutate it is the caller's responsibility.

    Example:
        >>> m = Moment.from_components([2013, 1, 31])
        >>> m.add(1, "M").format("yyyy-MM-dd")
        '2013-02-28'
        >>> m.minute = 75
        >>> m.format("HH:mm")
        '01:15'
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        value: datetime | date | None = None,
        *,
        calendar: Calendar | None = None,
        locale: str | None = None,
        config: MomentConfig | None = None,
    ):
        """
        Initialize a moment.

        Args:
            value: Instant to wrap; None for the current time. Naive
                datetimes and dates are read in the calendar's zone (dates
                at midnight).
            calendar: Calendar for components and arithmetic
            locale: Locale identifier for names and relative phrases
            config: Source of the calendar and locale when not given
                (defaults to the process-wide configuration)
        """
        self.calendar: Calendar
        self.locale: str
        self.calendar, self.locale = _resolve_context(calendar, locale, config)
        self._invalid_reason: str | None = None

        if value is None:
            self._instant: Instant | None = datetime.now(timezone.utc)
        elif isinstance(value, datetime):
            self._instant = ensure_instant(value, self.calendar)
        elif isinstance(value, date):
            self._instant = ensure_instant(
                datetime.combine(value, time.min), self.calendar
            )
        else:
            raise TypeError(
                f"Moment value must be a datetime, date, or None.\n"
                f"Got {type(value).__name__!r}: {value!r}\n"
                f"Hint: Use Moment.parse(text) for strings, "
                f"Moment.from_timestamp(seconds) for Unix timestamps, "
                f"or Moment.from_components([y, M, d, h, m, s]) for components"
            )

    # Construction

    @classmethod
    def now(
        cls,
        *,
        calendar: Calendar | None = None,
        locale: str | None = None,
        config: MomentConfig | None = None,
    ) -> "Moment":
        """Return a moment set to the current time."""
        return cls(None, calendar=calendar, locale=locale, config=config)

    @classmethod
    def from_timestamp(
        cls,
        seconds: float,
        *,
        calendar: Calendar | None = None,
        locale: str | None = None,
        config: MomentConfig | None = None,
    ) -> "Moment":
        """Return a moment for a Unix timestamp in seconds."""
        instant = datetime.fromtimestamp(seconds, tz=timezone.utc)
        return cls(instant, calendar=calendar, locale=locale, config=config)

    @classmethod
    def from_components(
        cls,
        components: Sequence[int],
        *,
        calendar: Calendar | None = None,
        locale: str | None = None,
        config: MomentConfig | None = None,
    ) -> "Moment":
        """Return a moment from ``[year, month, day, hour, minute, second]``.

        The year is required. Omitted trailing components default to
        month=1, day=1 and zero for the time fields. Values are read in
        the calendar's zone and must be in range (months are 1-12); anything
        else yields an invalid moment.
        """
        calendar, locale = _resolve_context(calendar, locale, config)
        values = list(components)

        if not 1 <= len(values) <= 6:
            return cls._invalid(
                f"expected 1 to 6 components, got {len(values)}", calendar, locale
            )
        if any(isinstance(v, bool) or not isinstance(v, int) for v in values):
            return cls._invalid(f"components must be ints: {values!r}", calendar, locale)

        padded = values + list(_COMPONENT_DEFAULTS[len(values) - 1 :])
        try:
            local = datetime(*padded)
        except (OverflowError, ValueError) as e:
            return cls._invalid(f"{values!r}: {e}", calendar, locale)
        return cls(local, calendar=calendar, locale=locale)

    @classmethod
    def parse(
        cls,
        text: str,
        format: str | None = None,
        *,
        calendar: Calendar | None = None,
        locale: str | None = None,
        config: MomentConfig | None = None,
    ) -> "Moment":
        """Return a moment for a date string.

        Args:
            text: The string to parse
            format: LDML pattern (e.g., "dd/MM/yyyy HH:mm") the text must
                match; when omitted a date is detected in free-form text
            calendar: Calendar whose zone applies to strings without an offset
            locale: Locale of month and day names in the text; also becomes
                the moment's locale
            config: Source of the calendar and locale when not given

        Returns:
            The parsed moment, invalid if the text cannot be resolved
        """
        if not isinstance(text, str):
            raise TypeError(
                f"Moment.parse() expects a string, got {type(text).__name__!r}.\n"
                f"Hint: Use Moment(dt) for datetime objects"
            )

        calendar, locale = _resolve_context(calendar, locale, config)
        instant = resolve_instant(text, format, locale, calendar)
        if instant is None:
            reason = f"cannot parse {text!r}"
            if format is not None:
                reason += f" with pattern {format!r}"
            return cls._invalid(reason, calendar, locale)
        return cls(instant, calendar=calendar, locale=locale)

    @classmethod
    def _from_state(
        cls,
        instant: Instant | None,
        calendar: Calendar,
        locale: str,
        reason: str | None = None,
    ) -> "Moment":
        moment = cls.__new__(cls)
        moment.calendar = calendar
        moment.locale = locale
        moment._instant = instant
        moment._invalid_reason = reason
        return moment

    @classmethod
    def _invalid(cls, reason: str, calendar: Calendar, locale: str) -> "Moment":
        return cls._from_state(None, calendar, locale, reason)

    # Validation and conversion

    def is_valid(self) -> bool:
        """True when the moment holds a resolved instant."""
        return self._instant is not None

    @property
    def invalid_reason(self) -> str | None:
        """Why construction failed, or None for a valid moment."""
        return self._invalid_reason

    def _require_instant(self) -> Instant:
        if self._instant is None:
            raise InvalidMomentError(
                f"Cannot read values from an invalid moment ({self._invalid_reason}).\n"
                f"Hint: Check moment.is_valid() before using it"
            )
        return self._instant

    def to_datetime(self) -> datetime:
        """Return the instant as an aware datetime in the calendar's zone."""
        return self._require_instant().astimezone(self.calendar.zone)

    def timestamp(self) -> float:
        """Return the instant as Unix seconds."""
        return self._require_instant().timestamp()

    def copy(self) -> "Moment":
        """Return an independent moment with the same instant and context."""
        return self._from_state(
            self._instant, self.calendar, self.locale, self._invalid_reason
        )

    # Components

    def components(self) -> Components:
        """Return the civil components in the calendar's zone."""
        return decompose_instant(self._require_instant(), self.calendar)

    def set(self, **components: int) -> "Moment":
        """Assign several components at once, carrying any overflow.

        Example:
            >>> m = Moment.from_components([2013, 12, 31, 23])
            >>> m.set(minute=59, second=60).format("yyyy-MM-dd HH:mm:ss")
            '2014-01-01 00:00:00'
        """
        unknown = set(components) - set(_SETTABLE)
        if unknown:
            raise TypeError(
                f"Unknown components: {', '.join(sorted(unknown))}\n"
                f"Valid components: {', '.join(_SETTABLE)}"
            )
        for name, value in components.items():
            _check_int(name, value)

        current = self.components()
        self._instant = compose_instant(replace(current, **components), self.calendar)
        return self

    @property
    def year(self) -> int:
        return self.components().year

    @year.setter
    def year(self, value: int) -> None:
        self.set(year=value)

    @property
    def month(self) -> int:
        """Month 1-12. Values past 12 or below 1 bubble into the year."""
        return self.components().month

    @month.setter
    def month(self, value: int) -> None:
        self.set(month=value)

    @property
    def day(self) -> int:
        """Day of month. Values past the month's length bubble into the month."""
        return self.components().day

    @day.setter
    def day(self, value: int) -> None:
        self.set(day=value)

    @property
    def hour(self) -> int:
        """Hour 0-23. Values out of range bubble into the day."""
        return self.components().hour

    @hour.setter
    def hour(self, value: int) -> None:
        self.set(hour=value)

    @property
    def minute(self) -> int:
        """Minute 0-59. Values out of range bubble into the hour."""
        return self.components().minute

    @minute.setter
    def minute(self, value: int) -> None:
        self.set(minute=value)

    @property
    def second(self) -> int:
        """Second 0-59. Values out of range bubble into the minute."""
        return self.components().second

    @second.setter
    def second(self, value: int) -> None:
        self.set(second=value)

    @property
    def weekday(self) -> int:
        """Day of the week, Monday=0 ... Sunday=6."""
        return self.to_datetime().weekday()

    # Arithmetic

    def add(self, amount: int, unit: CalendarUnit | str) -> "Moment":
        """Add an amount of a calendar unit in place and return the moment.

        Args:
            amount: Signed number of units
            unit: ``CalendarUnit`` or key ("years", "M", "day", ...)

        Raises:
            InvalidUnit: If ``unit`` does not name a calendar unit

        Years, months, weeks and days follow the wall clock (Jan 31 + 1 month
        is Feb 28). Hours, minutes and seconds are exact offsets. An invalid
        moment stays invalid.
        """
        resolved = parse_unit(unit)
        _check_int("amount", amount)
        if self._instant is not None:
            self._instant = add_unit_to_instant(
                self._instant, amount, resolved, self.calendar
            )
        return self

    def subtract(self, amount: int, unit: CalendarUnit | str) -> "Moment":
        """Subtract an amount of a calendar unit in place and return the moment."""
        return self.add(-_check_int("amount", amount), unit)

    def add_duration(self, duration: float | timedelta) -> "Moment":
        """Add a raw interval (seconds or timedelta) in place and return the moment."""
        seconds = (
            duration.total_seconds() if isinstance(duration, timedelta) else duration
        )
        if self._instant is not None:
            self._instant = add_duration_to_instant(self._instant, seconds)
        return self

    def shift(self, amount: int, unit: CalendarUnit | str) -> "Moment":
        """Return a new moment moved by an amount of a unit; self is unchanged."""
        return self.copy().add(amount, unit)

    # Formatting and relative time

    def format(self, pattern: str | None = None) -> str:
        """Format the moment against an LDML pattern (ISO 8601 by default).

        Returns ``"Invalid date"`` for an invalid moment.
        """
        if self._instant is None:
            return INVALID_DATE
        return format_instant(
            self._instant, self.calendar, self.locale, pattern or ISO8601_FORMAT
        )

    def relative_to(
        self, other: "Moment | datetime", suffixed: bool = True
    ) -> str:
        """Describe this moment relative to another one.

        Example:
            >>> a = Moment.from_components([2013, 1, 1])
            >>> b = Moment.from_components([2013, 1, 4])
            >>> a.relative_to(b)
            '3 days ago'
        """
        if isinstance(other, datetime):
            other = Moment(other, calendar=self.calendar, locale=self.locale)
        if self._instant is None or other._instant is None:
            return INVALID_DATE

        delta = (self._instant - other._instant).total_seconds()
        return humanize(delta, suffixed, self.locale)

    def from_now(self, suffixed: bool = True) -> str:
        """Describe this moment relative to the current time.

        ``suffixed=False`` drops the direction: "4 years" instead of
        "4 years ago".
        """
        return self.relative_to(datetime.now(timezone.utc), suffixed)

    # Comparison and display

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Moment):
            return NotImplemented
        if self._instant is None or other._instant is None:
            return False
        return self._instant == other._instant

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        if self._instant is None:
            return f"<Moment [{INVALID_DATE}: {self._invalid_reason}]>"
        return f"<Moment [{self.format()}] tz={self.calendar.tz} locale={self.locale}>"


def _resolve_context(
    calendar: Calendar | None, locale: str | None, config: MomentConfig | None
) -> tuple[Calendar, str]:
    config = config or default_config()
    calendar = calendar or config.calendar
    if not isinstance(calendar, Calendar):
        raise TypeError(
            f"calendar must be a Calendar, got {type(calendar).__name__!r}.\n"
            f"Hint: Moment.now(calendar=Calendar('US/Pacific'))"
        )
    return calendar, locale or config.locale


__all__ = ["InvalidMomentError", "Moment"]
