"""Relative-time humanization.

Maps a signed delta in seconds to a graded phrase such as "2 hours ago".
The thresholds live in ``RANGES``, an ordered table that covers every
non-negative delta exactly once; the words come from the locale.

Range                       | Key | Sample Output
--------------------------- | --- | -------------
0 to 45 seconds             | s   | a few seconds ago
45 to 90 seconds            | m   | a minute ago
90 seconds to 45 minutes    | mm  | 2 minutes ago ... 45 minutes ago
45 to 90 minutes            | h   | an hour ago
90 minutes to 22 hours      | hh  | 2 hours ago ... 22 hours ago
22 to 36 hours              | d   | a day ago
36 hours to 25 days         | dd  | 2 days ago ... 25 days ago
25 to 45 days               | M   | a month ago
45 to 345 days              | MM  | 2 months ago ... 11 months ago
345 to 548 days             | y   | a year ago
548 days+                   | yy  | 2 years ago ... 20 years ago
"""

import math
from dataclasses import dataclass

from momentkit.locales import Locale, get_locale
from momentkit.util import DAY, HOUR, MINUTE, MONTH, YEAR, round_half_up


@dataclass(frozen=True, kw_only=True)
class RelativeTimeRange:
    """One row of the relative-time table, covering ``[lower, upper)`` seconds.

    Attributes:
        lower: Inclusive lower bound in seconds
        upper: Exclusive upper bound in seconds (``math.inf`` for the last row)
        key: Locale timeframe key for the phrase
        divisor: Seconds per counted unit for plural phrases, None for
            fixed singular phrases
    """

    lower: float
    upper: float
    key: str
    divisor: int | None = None

    def __post_init__(self) -> None:
        if self.lower >= self.upper:
            raise ValueError(
                f"RelativeTimeRange lower ({self.lower}) must be < upper ({self.upper})"
            )

    def contains(self, seconds: float) -> bool:
        return self.lower <= seconds < self.upper

    def magnitude(self, seconds: float) -> int | None:
        if self.divisor is None:
            return None
        return round_half_up(seconds / self.divisor)

    def __str__(self) -> str:
        return f"RelativeTimeRange({self.key}: {self.lower}→{self.upper})"


RANGES: tuple[RelativeTimeRange, ...] = (
    RelativeTimeRange(lower=0, upper=45, key="s"),
    RelativeTimeRange(lower=45, upper=90, key="m"),
    RelativeTimeRange(lower=90, upper=45 * MINUTE, key="mm", divisor=MINUTE),
    RelativeTimeRange(lower=45 * MINUTE, upper=90 * MINUTE, key="h"),
    RelativeTimeRange(lower=90 * MINUTE, upper=22 * HOUR, key="hh", divisor=HOUR),
    RelativeTimeRange(lower=22 * HOUR, upper=36 * HOUR, key="d"),
    RelativeTimeRange(lower=36 * HOUR, upper=25 * DAY, key="dd", divisor=DAY),
    RelativeTimeRange(lower=25 * DAY, upper=45 * DAY, key="M"),
    RelativeTimeRange(lower=45 * DAY, upper=345 * DAY, key="MM", divisor=MONTH),
    RelativeTimeRange(lower=345 * DAY, upper=548 * DAY, key="y"),
    RelativeTimeRange(lower=548 * DAY, upper=math.inf, key="yy", divisor=YEAR),
)


def select_range(seconds: float) -> RelativeTimeRange:
    """Return the table row containing a non-negative delta."""
    for entry in RANGES:
        if entry.contains(seconds):
            return entry
    raise ValueError(f"Delta must be a finite, non-negative number, got {seconds}")


def humanize(
    delta_seconds: float, suffixed: bool = True, locale: "str | Locale" = "en"
) -> str:
    """Render a signed delta as a relative-time phrase.

    Args:
        delta_seconds: Moment minus reference time; positive is the future
        suffixed: Add the direction ("in ..." / "... ago")
        locale: Locale identifier or ``Locale`` used for the wording

    Returns:
        The phrase, e.g. "a minute ago", "in 3 days", "11 months"

    Raises:
        ValueError: If the delta is NaN or infinite

    Example:
        >>> humanize(-120)
        '2 minutes ago'
        >>> humanize(3600, suffixed=False)
        'an hour'
    """
    if not math.isfinite(delta_seconds):
        raise ValueError(
            f"Cannot humanize a non-finite delta: {delta_seconds!r}\n"
            f"Pass the difference between two instants in seconds."
        )

    absolute = abs(delta_seconds)
    entry = select_range(absolute)
    return get_locale(locale).describe(
        entry.key,
        entry.magnitude(absolute),
        suffixed=suffixed,
        # A zero delta is past, so "now" reads "a few seconds ago"
        future=delta_seconds > 0,
    )


__all__ = ["RANGES", "RelativeTimeRange", "humanize", "select_range"]
