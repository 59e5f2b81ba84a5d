"""
Batch date parsing.

A batch of date strings is parsed with the first layout under which every
string in the batch parses. Mixed-format batches are rejected as a whole
rather than producing a mix of day-first and month-first dates.
"""

import datetime
import logging

from .errors import DateParseError
from .layouts import compile_layout

logger = logging.getLogger(__name__)

_BASE_DATE_FORMATS = (
    'yyyy/MM/dd',
    'yyyy/M/d',
    'dd/MM/yyyy',
    'd/M/yyyy',
    'MM/dd/yyyy',
    'M/d/yyyy',
    'd MMMM yyyy',
    'dd MMM yyyy',
    'MMMM d yyyy',
    'MMM dd yyyy',
)

# Each base pattern with '/', '-' and no separator, then ISO date-times
DEFAULT_DATE_FORMATS = tuple(
    variant
    for pattern in _BASE_DATE_FORMATS
    for variant in (pattern, pattern.replace('/', '-'), pattern.replace('/', ''))
) + (
    'yyyy-MM-dd HH:mm:ss',
    "yyyy-MM-dd'T'HH:mm:ss",
)


def _parse_date(text, layout):
    values = layout.match(text)
    if values is None:
        return None
    try:
        return datetime.date(values['year'], values['month'], values['day'])
    except (KeyError, ValueError):
        return None


def parse_date_strings(dates, formats=None):
    """
    Parse a batch of date strings using one shared layout.

    Args:
        dates (list[str]): Date strings to parse
        formats (list[str], optional): Layouts to try, in order of preference.
            Defaults to DEFAULT_DATE_FORMATS.

    Returns:
        list[datetime.date]: Calendar dates in the same order as the input

    Raises:
        DateParseError: If no single layout parses every string in the batch

    Examples:
        >>> parse_date_strings(['2024-04-01', '2024-04-02'])
        [datetime.date(2024, 4, 1), datetime.date(2024, 4, 2)]
    """
    dates = list(dates)
    for pattern in DEFAULT_DATE_FORMATS if formats is None else formats:
        layout = compile_layout(pattern)
        parsed = []
        for date_str in dates:
            result = _parse_date(date_str, layout)
            if result is None:
                break
            parsed.append(result)
        if len(parsed) == len(dates):
            logger.debug(f"Parsed {len(dates)} dates with layout {pattern!r}")
            return parsed

    logger.debug(f"No date layout fits batch of {len(dates)}: {dates[:3]}")
    raise DateParseError("Could not parse dates")


def try_parse_date(value):
    """
    Parse a single date string into ISO format.

    Args:
        value (str): Candidate date string

    Returns:
        str or None: Date as YYYY-MM-DD, or None if the value is not a date
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return parse_date_strings([value])[0].isoformat()
    except DateParseError:
        return None
