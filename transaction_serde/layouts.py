"""
Date and time layout patterns.

A layout is a plain string such as 'dd/MM/yyyy' or "HH'h'mm". Letters are
field tokens, text in single quotes is literal, anything else must appear
verbatim. Layouts compile to a regular expression that captures each field.

Tokens:
- yyyy: four digit year
- MMMM / MMM: English month name / three letter abbreviation
- MM / M: month number (exactly two digits / one or two digits)
- dd / d: day of month
- HH / H: hour of day (0-23)
- hh / h: hour of a 12-hour clock (1-12)
- mm / m: minutes
- ss / s: seconds
- SSS: milliseconds
- a: am/pm marker
"""

import functools
import logging
import re
from typing import Dict, Optional

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

_FIELD_TOKENS = {
    'yyyy': ('year', r'\d{4}'),
    'MMMM': ('month_name', '|'.join(MONTH_NAMES)),
    'MMM': ('month_abbr', '|'.join(MONTH_ABBREVIATIONS)),
    'MM': ('month', r'\d{2}'),
    'M': ('month', r'\d{1,2}'),
    'dd': ('day', r'\d{2}'),
    'd': ('day', r'\d{1,2}'),
    'HH': ('hour', r'\d{2}'),
    'H': ('hour', r'\d{1,2}'),
    'hh': ('hour12', r'\d{2}'),
    'h': ('hour12', r'\d{1,2}'),
    'mm': ('minute', r'\d{2}'),
    'm': ('minute', r'\d{1,2}'),
    'ss': ('second', r'\d{2}'),
    's': ('second', r'\d{1,2}'),
    'SSS': ('millisecond', r'\d{3}'),
    'a': ('meridiem', r'[ap]\.?m\.?'),
}

# Escaped quote, quoted literal, run of one letter, or any single character
_TOKENIZER = re.compile(r"''|'(?:''|[^'])*'?|([A-Za-z])\1*|.", re.DOTALL)


class Layout:
    """A compiled layout that extracts named fields from a string."""

    def __init__(self, pattern):
        self.pattern = pattern
        self._regex = re.compile(_to_regex(pattern), re.IGNORECASE)

    def __repr__(self):
        return f"Layout({self.pattern!r})"

    def match(self, text) -> Optional[Dict[str, int]]:
        """
        Extract numeric field values from text.

        Args:
            text (str): Candidate string, surrounding whitespace ignored

        Returns:
            dict or None: Field name to integer value (month names become
            month numbers, am/pm becomes 0/12), or None when the text does
            not fit the layout
        """
        if not isinstance(text, str):
            return None
        found = self._regex.fullmatch(text.strip())
        if found is None:
            return None

        values = {}
        for name, raw in found.groupdict().items():
            if name == 'month_name':
                values['month'] = MONTH_NAMES.index(raw.lower()) + 1
            elif name == 'month_abbr':
                values['month'] = MONTH_ABBREVIATIONS.index(raw.lower()) + 1
            elif name == 'meridiem':
                values['meridiem'] = 12 if raw.lower().startswith('p') else 0
            else:
                values[name] = int(raw)
        return values


def _to_regex(pattern) -> str:
    parts = []
    seen = set()
    for token_match in _TOKENIZER.finditer(pattern):
        token = token_match.group(0)
        if token == "''":
            parts.append("'")
        elif token.startswith("'"):
            literal = token[1:-1] if token.endswith("'") and len(token) > 1 else token[1:]
            parts.append(re.escape(literal.replace("''", "'")))
        elif token_match.group(1):
            if token not in _FIELD_TOKENS:
                raise ValueError(f"Unsupported token {token!r} in layout {pattern!r}")
            name, expression = _FIELD_TOKENS[token]
            if name in seen:
                raise ValueError(f"Field {name!r} appears twice in layout {pattern!r}")
            seen.add(name)
            parts.append(f"(?P<{name}>{expression})")
        else:
            parts.append(re.escape(token))
    return ''.join(parts)


@functools.lru_cache(maxsize=256)
def compile_layout(pattern) -> Layout:
    """Compile a layout pattern, caching the result."""
    logger.debug(f"Compiling layout {pattern!r}")
    return Layout(pattern)
