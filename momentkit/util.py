"""Utility constants and helpers for momentkit.

Time unit constants represent fixed durations in seconds. Months and years
use the 30-day and 365-day approximations of the relative-time table; they
are never used for calendar arithmetic.
"""

import math

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2592000
YEAR = 31536000


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves going up.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    which would break the documented relative-time samples.
    """
    return math.floor(value + 0.5)
