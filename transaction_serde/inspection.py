"""
Preview of unknown CSV or JSON input.

Reports the detected format, the field names, a small sample of records and
the record count, optionally with sample values converted to numbers or ISO
dates for a readable first look.
"""

import logging

from .amounts import try_parse_number
from .dates import try_parse_date
from .guess import looks_like_amount
from .models import InspectResult
from .options import merge_options
from .parse import detect_format, parse_csv, parse_json

logger = logging.getLogger(__name__)

DEFAULT_INSPECT_OPTIONS = {
    'sample_size': 3,
    'skip_rows': 0,
    'attempt_parsing': False,
}


def _preview_value(value):
    if not isinstance(value, str):
        return value

    # Only amount-shaped values are numbers: "15/01/2024" is not 15 and
    # "CAFE*TH3 BREWHOUSE" is not 3
    if looks_like_amount(value):
        number = try_parse_number(value)
        if number is not None:
            return number

    parsed_date = try_parse_date(value)
    return parsed_date if parsed_date is not None else value


def inspect(input_text, options=None, **overrides):
    """
    Inspect CSV or JSON text.

    Args:
        input_text (str): Raw CSV or JSON text
        options (dict, optional): Inspect options
            - sample_size: number of sample records (default 3)
            - skip_rows: lines to skip before the CSV header (default 0)
            - attempt_parsing: convert sample strings to numbers or ISO dates
              where possible (default False)
        **overrides: Options given as keyword arguments

    Returns:
        InspectResult: Format, field names, sample records and record count

    Examples:
        >>> report = inspect('Date,Amount,Merchant\\n2024-01-15,100,Store\\n2024-01-16,50,Shop')
        >>> report.format, report.fields, report.record_count
        ('csv', ['Date', 'Amount', 'Merchant'], 2)
    """
    opts = merge_options(DEFAULT_INSPECT_OPTIONS, options, overrides)
    input_format = detect_format(input_text)

    if input_format == 'json':
        records, fields = parse_json(input_text)
    else:
        records, fields, errors = parse_csv(input_text, True, opts['skip_rows'])
        if errors:
            logger.warning(f"Inspected CSV has {len(errors)} unreadable rows")

    sample = [dict(record) for record in records[:opts['sample_size']]]
    if opts['attempt_parsing']:
        sample = [
            {key: _preview_value(value) for key, value in record.items()}
            for record in sample
        ]

    logger.debug(f"Inspected {input_format} input: {len(records)} records, fields {fields}")

    return InspectResult(
        format=input_format,
        fields=fields,
        sample=sample,
        record_count=len(records),
    )
