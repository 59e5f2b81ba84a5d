"""
Field mapping guesses for unknown tabular schemas.

Source column names are matched against ordered name patterns for each
transaction key. Each pattern carries a base confidence; a medium confidence
match can be raised to high when sample values look like the target type.

Confidence levels:
- high: exact or well-known column names ("Date", "Amount", "Merchant")
- medium: plausible but ambiguous names ("Debit", "Name", "Type")
"""

import logging
import re
from numbers import Number

import numpy as np

from .amounts import find_number
from .dates import parse_date_strings
from .errors import DateParseError
from .models import CONFIDENCE_LEVELS, FieldGuess, GuessResult
from .options import merge_options

logger = logging.getLogger(__name__)

DEFAULT_GUESS_OPTIONS = {
    'min_confidence': 'medium',
    'sample': [],
}


def _patterns(*entries):
    return tuple((re.compile(pattern, re.IGNORECASE), confidence) for pattern, confidence in entries)


# Most specific first. 'metadata' is never guessed: it is for data the
# caller chooses to keep.
FIELD_PATTERNS = (
    ('date', _patterns(
        (r'^date$', 'high'),
        (r'^transaction[_\s-]?date$', 'high'),
        (r'^trans[_\s-]?date$', 'high'),
        (r'^posting[_\s-]?date$', 'high'),
        (r'^value[_\s-]?date$', 'high'),
        (r'^effective[_\s-]?date$', 'high'),
        (r'^settlement[_\s-]?date$', 'medium'),
        (r'date$', 'medium'),
        (r'^when$', 'medium'),
        (r'^timestamp$', 'medium'),
    )),
    ('time', _patterns(
        (r'^time$', 'high'),
        (r'^transaction[_\s-]?time$', 'high'),
        (r'^trans[_\s-]?time$', 'high'),
        (r'^posting[_\s-]?time$', 'high'),
        (r'^time[_\s-]?of[_\s-]?day$', 'medium'),
        (r'^clock$', 'medium'),
        (r'^hour$', 'medium'),
        (r'time$', 'medium'),
    )),
    ('amount', _patterns(
        (r'^amount$', 'high'),
        (r'^value$', 'high'),
        (r'^transaction[_\s-]?amount$', 'high'),
        (r'^trans[_\s-]?amount$', 'high'),
        (r'^debit$', 'medium'),
        (r'^credit$', 'medium'),
        (r'^sum$', 'medium'),
        (r'^total$', 'medium'),
        (r'^price$', 'medium'),
        (r'^cost$', 'medium'),
        (r'amount$', 'medium'),
    )),
    ('payee', _patterns(
        (r'^payee$', 'high'),
        (r'^merchant$', 'high'),
        (r'^vendor$', 'high'),
        (r'^recipient$', 'high'),
        (r'^beneficiary$', 'high'),
        (r'^merchant[_\s-]?name$', 'high'),
        (r'^payee[_\s-]?name$', 'high'),
        (r'^name$', 'medium'),
        (r'^counterparty$', 'medium'),
        (r'^store$', 'medium'),
        (r'^shop$', 'medium'),
    )),
    ('description', _patterns(
        (r'^description$', 'high'),
        (r'^memo$', 'high'),
        (r'^note$', 'high'),
        (r'^notes$', 'high'),
        (r'^narrative$', 'high'),
        (r'^transaction[_\s-]?description$', 'high'),
        (r'^details$', 'medium'),
        (r'^reference$', 'medium'),
        (r'^particulars$', 'medium'),
        (r'^comment$', 'medium'),
        (r'^remarks$', 'medium'),
    )),
    ('category', _patterns(
        (r'^category$', 'high'),
        (r'^classification$', 'high'),
        (r'^transaction[_\s-]?type$', 'medium'),
        (r'^trans[_\s-]?type$', 'medium'),
        (r'^type$', 'medium'),
        (r'^class$', 'medium'),
        (r'^group$', 'medium'),
        (r'^tag$', 'medium'),
        (r'^label$', 'medium'),
    )),
)

DATE_SHAPES = (
    re.compile(r'^\d{4}-\d{2}-\d{2}$'),  # ISO
    re.compile(r'^\d{4}/\d{2}/\d{2}$'),  # YYYY/MM/DD
    re.compile(r'^\d{1,2}[/-]\d{1,2}[/-]\d{4}$'),  # DD/MM/YYYY or MM/DD/YYYY
    re.compile(r'^\d{8}$'),  # YYYYMMDD
    re.compile(r'^\d{1,2}\s+[A-Za-z]+\s+\d{4}$'),  # D Month YYYY
    re.compile(r'^[A-Za-z]+\s+\d{1,2}\s+\d{4}$'),  # Month D YYYY
)

TIME_SHAPE = re.compile(r'^\d{1,2}[:.]\d{2}([:.]\d{2}(\.\d{3})?)?\s*([AaPp]\.?[Mm]\.?)?$')

CURRENCY_SYMBOLS = re.compile(r'[$£€¥]')
AMOUNT_SHAPE = re.compile(r'^[-+]?[\d,]*\.?\d+(\s*[A-Za-z]{3})?$')

# Share of the trimmed string a numeric literal must cover
SIGNIFICANCE_ISOLATED = 0.10
SIGNIFICANCE_ONE_SIDE = 0.25
SIGNIFICANCE_EMBEDDED = 0.50


def _rank(confidence):
    return CONFIDENCE_LEVELS.index(confidence)


def looks_like_date(value):
    """Check whether a string has one of the common date shapes."""
    return isinstance(value, str) and any(shape.match(value.strip()) for shape in DATE_SHAPES)


def is_significant_number(text):
    """
    Check whether the number in a string is more than an incidental digit.

    The numeric literal must cover at least 10% of the trimmed string when no
    letter touches it, 25% when a letter touches one side and 50% when letters
    touch both sides ("TH3" inside "CAFE*TH3 BREWHOUSE" is not an amount).
    """
    stripped = text.strip()
    match = find_number(stripped)
    if match is None or not stripped:
        return False

    letter_before = match.start > 0 and stripped[match.start - 1].isalpha()
    letter_after = match.end < len(stripped) and stripped[match.end].isalpha()
    if letter_before and letter_after:
        required = SIGNIFICANCE_EMBEDDED
    elif letter_before or letter_after:
        required = SIGNIFICANCE_ONE_SIDE
    else:
        required = SIGNIFICANCE_ISOLATED

    return (match.end - match.start) / len(stripped) >= required


def _is_finite_number(value):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, Number):
        return False
    return bool(np.isfinite(value))


def looks_like_amount(value):
    """Check whether a value is a number or an amount-shaped string ("$1,200.50", "100 USD")."""
    if _is_finite_number(value):
        return True
    if find_number(value) is None:
        return False
    cleaned = CURRENCY_SYMBOLS.sub('', value).strip()
    return bool(AMOUNT_SHAPE.match(cleaned)) and is_significant_number(value)


def _values_support(target, values):
    """Check whether sample values confirm a target field type."""
    strings = [v for v in values if isinstance(v, str) and len(v) > 0]

    if target == 'date':
        if not strings or not all(looks_like_date(v) for v in strings):
            return False
        try:
            parse_date_strings(strings)
        except DateParseError:
            return False
        return True

    if target == 'time':
        return bool(strings) and all(TIME_SHAPE.match(v.strip()) for v in strings)

    if target == 'amount':
        meaningful = strings + [v for v in values if _is_finite_number(v)]
        return bool(meaningful) and all(looks_like_amount(v) for v in meaningful)

    return False


def guess(fields, options=None, **overrides):
    """
    Guess how source fields map onto transaction keys.

    Args:
        fields (list[str]): Source field names, e.g. CSV headers
        options (dict, optional): Guess options
            - min_confidence: 'medium' (default) or 'high'
            - sample: list of source records used to confirm guesses
        **overrides: Options given as keyword arguments

    Returns:
        GuessResult: Guesses in field order, fields that could not be mapped,
        and a mapping of transaction key to source field ready for
        create_field_mapper

    Examples:
        >>> guess(['Transaction Date', 'Value', 'Merchant']).mapping
        {'date': 'Transaction Date', 'amount': 'Value', 'payee': 'Merchant'}
    """
    opts = merge_options(DEFAULT_GUESS_OPTIONS, options, overrides)
    min_confidence = opts['min_confidence']
    if min_confidence not in CONFIDENCE_LEVELS:
        logger.warning(f"Unknown min_confidence {min_confidence!r}, "
                       f"using {DEFAULT_GUESS_OPTIONS['min_confidence']!r}")
        min_confidence = DEFAULT_GUESS_OPTIONS['min_confidence']
    min_rank = _rank(min_confidence)
    sample = list(opts['sample'])

    guesses = []
    unmapped_fields = []
    used_targets = set()

    for field_name in fields:
        best_match = None

        for target, patterns in FIELD_PATTERNS:
            # Each target maps to at most one source field
            if target in used_targets:
                continue

            for pattern, confidence in patterns:
                if not pattern.search(field_name):
                    continue

                final_confidence = confidence
                reason = f'Field name "{field_name}" matches pattern for {target}'

                if sample and confidence == 'medium':
                    values = [record.get(field_name) for record in sample if hasattr(record, 'get')]
                    if _values_support(target, values):
                        final_confidence = 'high'
                        reason += ' (boosted by value analysis)'

                if _rank(final_confidence) < min_rank:
                    continue

                if best_match is None or _rank(final_confidence) > _rank(best_match.confidence):
                    best_match = FieldGuess(field_name, target, final_confidence, reason)
                break

        if best_match is not None:
            logger.debug(f"Guessed {best_match.target_field} <- {field_name!r} ({best_match.confidence})")
            guesses.append(best_match)
            used_targets.add(best_match.target_field)
        else:
            unmapped_fields.append(field_name)

    mapping = {g.target_field: g.source_field for g in guesses}

    return GuessResult(guesses=guesses, unmapped_fields=unmapped_fields, mapping=mapping)
