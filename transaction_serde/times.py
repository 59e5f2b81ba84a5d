"""
Batch time parsing and conversions.

Times are represented as integer milliseconds since midnight. Like dates, a
batch of time strings must parse under one shared layout.
"""

import logging
from typing import NamedTuple

from .errors import TimeParseError
from .layouts import compile_layout

logger = logging.getLogger(__name__)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

DEFAULT_TIME_FORMATS = (
    # 24-hour
    'HH:mm:ss',
    'HH:mm:ss.SSS',
    'HH:mm',
    'HHmmss',
    'HHmm',
    'HH.mm.ss',
    'HH.mm',
    # 12-hour with am/pm
    'hh:mm:ss a',
    'hh:mm a',
    'h:mm:ss a',
    'h:mm a',
    'hh:mm:ssa',
    'hh:mma',
    'h:mm:ssa',
    'h:mma',
    'hh.mm.ss a',
    'hh.mm a',
    'h.mm a',
)


class TimeComponents(NamedTuple):
    hours: int
    minutes: int
    seconds: int
    milliseconds: int


def to_ms(hours=0, minutes=0, seconds=0, milliseconds=0) -> int:
    """Convert clock components to milliseconds since midnight."""
    return (
        hours * MS_PER_HOUR
        + minutes * MS_PER_MINUTE
        + seconds * MS_PER_SECOND
        + milliseconds
    )


def to_time_components(ms) -> TimeComponents:
    """Split milliseconds since midnight into clock components."""
    hours, remainder = divmod(int(ms), MS_PER_HOUR)
    minutes, remainder = divmod(remainder, MS_PER_MINUTE)
    seconds, milliseconds = divmod(remainder, MS_PER_SECOND)
    return TimeComponents(hours, minutes, seconds, milliseconds)


def format_time_string(ms) -> str:
    """Format milliseconds since midnight as HH:mm:ss."""
    components = to_time_components(ms)
    return f"{components.hours:02d}:{components.minutes:02d}:{components.seconds:02d}"


def _parse_time(text, layout):
    values = layout.match(text)
    if values is None:
        return None

    if 'hour12' in values:
        hour = values['hour12']
        if not 1 <= hour <= 12:
            return None
        hours = hour % 12 + values.get('meridiem', 0)
    else:
        hours = values.get('hour', 0)
        if 'meridiem' in values and hours < 12:
            hours += values['meridiem']

    minutes = values.get('minute', 0)
    seconds = values.get('second', 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return to_ms(hours, minutes, seconds, values.get('millisecond', 0))


def parse_time_strings(times, formats=None):
    """
    Parse a batch of time strings using one shared layout.

    Args:
        times (list[str]): Time strings such as '14:30:00' or '2:30 PM'
        formats (list[str], optional): Layouts to try, in order of preference.
            Defaults to DEFAULT_TIME_FORMATS.

    Returns:
        list[int]: Milliseconds since midnight, in input order

    Raises:
        TimeParseError: If no single layout parses every string in the batch

    Examples:
        >>> parse_time_strings(['14:30:00'])
        [52200000]
        >>> parse_time_strings(['14h30m'], ["HH'h'mm'm'"])
        [52200000]
    """
    times = list(times)
    for pattern in DEFAULT_TIME_FORMATS if formats is None else formats:
        layout = compile_layout(pattern)
        parsed = []
        for time_str in times:
            result = _parse_time(time_str, layout)
            if result is None:
                break
            parsed.append(result)
        if len(parsed) == len(times):
            logger.debug(f"Parsed {len(times)} times with layout {pattern!r}")
            return parsed

    logger.debug(f"No time layout fits batch of {len(times)}: {times[:3]}")
    raise TimeParseError("Could not parse times")
