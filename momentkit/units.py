"""Calendar units used by moment arithmetic.

Units form a closed set. Every string key resolves through ``parse_unit``,
which rejects anything it does not know instead of silently ignoring it.
"""

from enum import Enum

from momentkit.util import DAY, HOUR, MINUTE, SECOND, WEEK


class InvalidUnit(ValueError):
    """Raised when a unit key or shorthand does not name a calendar unit."""


class CalendarUnit(Enum):
    """A calendar granularity with its canonical key and shorthand."""

    YEAR = ("years", "y")
    MONTH = ("months", "M")
    WEEK = ("weeks", "w")
    DAY = ("days", "d")
    HOUR = ("hours", "h")
    MINUTE = ("minutes", "m")
    SECOND = ("seconds", "s")

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def shorthand(self) -> str:
        return self.value[1]

    @property
    def seconds(self) -> int | None:
        """Fixed length of the unit in seconds, or None for months and years."""
        return _FIXED_SECONDS.get(self)

    @property
    def is_calendar_based(self) -> bool:
        """True for units added on the wall clock rather than as an offset."""
        return self in (
            CalendarUnit.YEAR,
            CalendarUnit.MONTH,
            CalendarUnit.WEEK,
            CalendarUnit.DAY,
        )

    def __str__(self) -> str:
        return self.key


_FIXED_SECONDS: dict[CalendarUnit, int] = {
    CalendarUnit.WEEK: WEEK,
    CalendarUnit.DAY: DAY,
    CalendarUnit.HOUR: HOUR,
    CalendarUnit.MINUTE: MINUTE,
    CalendarUnit.SECOND: SECOND,
}

# Shorthands are case-sensitive ("M" is months, "m" is minutes)
_SHORTHAND_MAP: dict[str, CalendarUnit] = {
    unit.shorthand: unit for unit in CalendarUnit
}

# Long keys are matched case-insensitively, plural or singular
_KEY_MAP: dict[str, CalendarUnit] = {}
for _unit in CalendarUnit:
    _KEY_MAP[_unit.key] = _unit
    _KEY_MAP[_unit.key[:-1]] = _unit
del _unit


def parse_unit(key: "CalendarUnit | str") -> CalendarUnit:
    """Resolve a unit key, singular key or shorthand to a ``CalendarUnit``.

    Args:
        key: A ``CalendarUnit`` (returned as-is), a key such as ``"years"``
            or ``"year"``, or a shorthand such as ``"y"``

    Returns:
        The matching calendar unit

    Raises:
        InvalidUnit: If the key does not name a unit

    Example:
        >>> parse_unit("M")
        <CalendarUnit.MONTH: ('months', 'M')>
        >>> parse_unit("Minutes")
        <CalendarUnit.MINUTE: ('minutes', 'm')>
    """
    if isinstance(key, CalendarUnit):
        return key
    if not isinstance(key, str):
        raise InvalidUnit(
            f"Unit must be a CalendarUnit or a string key.\n"
            f"Got {type(key).__name__!r}: {key!r}"
        )

    if key in _SHORTHAND_MAP:
        return _SHORTHAND_MAP[key]

    unit = _KEY_MAP.get(key.strip().lower())
    if unit is None:
        keys = ", ".join(u.key for u in CalendarUnit)
        shorthands = ", ".join(u.shorthand for u in CalendarUnit)
        raise InvalidUnit(
            f"Invalid unit '{key}'.\n"
            f"Valid keys: {keys}\n"
            f"Valid shorthands: {shorthands}"
        )
    return unit


__all__ = ["CalendarUnit", "InvalidUnit", "parse_unit"]
