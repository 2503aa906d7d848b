"""Moment configuration.

Every moment carries its own calendar and locale, taken from an explicit
``MomentConfig`` or from the process-wide default at construction time.
Changing the default afterwards does not touch existing moments.

The default is a single immutable object swapped as a whole, so readers
always see a complete configuration. It is meant for convenience defaults
only; pass ``config=`` explicitly when the calendar or locale matters.

Example:
    >>> from momentkit import Calendar, Moment, override_config
    >>> with override_config(calendar=Calendar("US/Pacific"), locale="fr"):
    ...     m = Moment.now()
    >>> m.calendar.tz
    'US/Pacific'
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any

from momentkit.calendars import Calendar
from momentkit.locales import DEFAULT_LOCALE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MomentConfig:
    """Calendar and locale used by a moment.

    Attributes:
        calendar: Calendar for decomposition and arithmetic (default UTC)
        locale: Locale identifier for names and relative phrases
    """

    calendar: Calendar = field(default_factory=Calendar)
    locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        if not isinstance(self.calendar, Calendar):
            raise TypeError(
                f"MomentConfig.calendar must be a Calendar.\n"
                f"Got {type(self.calendar).__name__!r}: {self.calendar!r}\n"
                f"Hint: MomentConfig(calendar=Calendar('US/Pacific'))"
            )
        if not isinstance(self.locale, str) or not self.locale:
            raise TypeError(
                f"MomentConfig.locale must be a non-empty string, got {self.locale!r}"
            )


_default_config = MomentConfig()


def default_config() -> MomentConfig:
    """Return the process-wide default configuration."""
    return _default_config


def set_default_config(
    config: MomentConfig | None = None, **changes: Any
) -> MomentConfig:
    """Replace the process-wide default configuration.

    Args:
        config: New configuration; defaults to the current one
        **changes: Fields to change on top of ``config`` (calendar, locale)

    Returns:
        The previous default, so callers can restore it
    """
    global _default_config

    previous = _default_config
    _default_config = replace(config or previous, **changes)
    logger.debug("Default moment configuration set to %r", _default_config)
    return previous


def reset_default_config() -> MomentConfig:
    """Restore the built-in default (UTC, English) and return the previous one."""
    return set_default_config(MomentConfig())


@contextmanager
def override_config(**changes: Any) -> Iterator[MomentConfig]:
    """Temporarily change the default configuration inside a ``with`` block."""
    previous = set_default_config(**changes)
    try:
        yield _default_config
    finally:
        set_default_config(previous)


__all__ = [
    "MomentConfig",
    "default_config",
    "override_config",
    "reset_default_config",
    "set_default_config",
]
