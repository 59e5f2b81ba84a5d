"""
Numeric parsing and formatting helpers.

Amounts arrive in many shapes:
- Plain: 100, -25.00, .5
- Currency prefixed: $100, £50.25
- Currency suffixed: 100 USD, 50.25 EUR

The extractor reads the leading literal only, so "1,234.56" is 1 and "1e3"
is 1. Date-shaped strings (2024-01-15, 2024.01.15) must not be read as
numbers.
"""

import logging
import math
import re
from enum import Enum
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)

# Characters that can start a numeric literal
_NUMBER_START = re.compile(r'[-.\d]')

# Sign, digits, optional decimal point, digits
_NUMBER_LITERAL = re.compile(r'-?(?:\d+\.?\d*|\.\d+)')


class NumberMatch(NamedTuple):
    """A numeric literal located inside a larger string."""

    value: float
    start: int
    end: int


def find_number(text) -> Optional[NumberMatch]:
    """
    Locate and parse the first numeric literal in a string.

    Args:
        text (str): Raw text that may carry currency symbols or codes

    Returns:
        NumberMatch or None: Parsed value with the literal's offsets, or None
        when the text holds no literal, the literal is not finite, or numeric
        characters continue right after it (e.g. dates)
    """
    if not isinstance(text, str):
        return None

    start_match = _NUMBER_START.search(text)
    if start_match is None:
        return None

    start = start_match.start()
    literal_match = _NUMBER_LITERAL.match(text, start)
    if literal_match is None:
        return None

    # A long enough run of digits overflows to inf
    value = float(literal_match.group(0))
    if not math.isfinite(value):
        return None

    # "2024-01-15" stops after "2024"; the rest is still numeric
    end = literal_match.end()
    if end < len(text) and _NUMBER_START.match(text[end]):
        return None

    return NumberMatch(value, start, end)


def try_parse_number(text) -> Optional[float]:
    """
    Parse a number out of a noisy string.

    Args:
        text (str): Value such as "$100", "100 USD" or " 100 "

    Returns:
        float or None: The parsed number, or None if the text is not numeric

    Examples:
        >>> try_parse_number("$100")
        100.0
        >>> try_parse_number("2024-01-15") is None
        True
    """
    match = find_number(text)
    return match.value if match is not None else None


class NumberStyle(Enum):
    """Thousands and decimal separators used when rendering amounts."""

    US = (',', '.')  # 1,234.56
    EUROPEAN = ('.', ',')  # 1.234,56
    SPACED = (' ', ',')  # 1 234,56


_LOCALE_STYLES = {
    'en': NumberStyle.US,
    'ja': NumberStyle.US,
    'ko': NumberStyle.US,
    'zh': NumberStyle.US,
    'he': NumberStyle.US,
    'th': NumberStyle.US,
    'de': NumberStyle.EUROPEAN,
    'es': NumberStyle.EUROPEAN,
    'it': NumberStyle.EUROPEAN,
    'nl': NumberStyle.EUROPEAN,
    'pt': NumberStyle.EUROPEAN,
    'da': NumberStyle.EUROPEAN,
    'id': NumberStyle.EUROPEAN,
    'tr': NumberStyle.EUROPEAN,
    'fr': NumberStyle.SPACED,
    'sv': NumberStyle.SPACED,
    'nb': NumberStyle.SPACED,
    'fi': NumberStyle.SPACED,
    'cs': NumberStyle.SPACED,
    'pl': NumberStyle.SPACED,
    'ru': NumberStyle.SPACED,
    'uk': NumberStyle.SPACED,
}


def _style_for_locale(locale) -> NumberStyle:
    if isinstance(locale, (list, tuple)):
        locale = locale[0] if locale else 'en-US'
    language = str(locale).replace('_', '-').split('-')[0].lower()
    style = _LOCALE_STYLES.get(language)
    if style is None:
        logger.debug(f"No number style for locale {locale!r}, using US style")
        return NumberStyle.US
    return style


def format_amount(value, locale='en-US') -> str:
    """
    Format an amount with grouping for human-facing output.

    Args:
        value (float): Amount to format
        locale (str or list[str]): Locale tag such as 'en-US' or 'de-DE'

    Returns:
        str: Amount with at most three fraction digits, e.g. '1,234.5'
    """
    thousands, decimal = _style_for_locale(locale).value

    text = f"{abs(float(value)):,.3f}"
    integer_part, fraction = text.split('.')
    fraction = fraction.rstrip('0')

    result = integer_part.replace(',', thousands)
    if fraction:
        result += decimal + fraction
    if value < 0 and result.strip('0' + thousands + decimal):
        result = '-' + result
    return result
