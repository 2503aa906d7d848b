from .calendars import (
    Calendar,
    Components,
    add_unit_to_instant,
    compose_instant,
    decompose_instant,
)
from .config import (
    MomentConfig,
    default_config,
    override_config,
    reset_default_config,
    set_default_config,
)
from .formatting import INVALID_DATE, ISO8601_FORMAT, format_instant, resolve_instant
from .humanize import RANGES, RelativeTimeRange, humanize
from .locales import Locale, available_locales, cldr_locale, get_locale
from .moment import InvalidMomentError, Moment
from .units import CalendarUnit, InvalidUnit, parse_unit
from .util import DAY, HOUR, MINUTE, MONTH, SECOND, WEEK, YEAR

__all__ = [
    "Moment",
    "MomentConfig",
    "Calendar",
    "Components",
    "CalendarUnit",
    "Locale",
    "RelativeTimeRange",
    "InvalidUnit",
    "InvalidMomentError",
    "parse_unit",
    "humanize",
    "get_locale",
    "cldr_locale",
    "available_locales",
    "decompose_instant",
    "compose_instant",
    "add_unit_to_instant",
    "format_instant",
    "resolve_instant",
    "default_config",
    "set_default_config",
    "reset_default_config",
    "override_config",
    "RANGES",
    "INVALID_DATE",
    "ISO8601_FORMAT",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "MONTH",
    "YEAR",
]
