"""
Deserialisers: CSV, JSON and QIF text to normalized transactions.

All three follow the same policy:
- Records without a date or an amount are skipped
- Unparseable optional values (metadata) are dropped from the record
- An amount that cannot be read as a finite number stops the whole run
- Dates (and times) are collected first and parsed once for the batch, so
  every record in a file is read with the same layout
"""

import json
import logging
import math
import re
from numbers import Number

from .amounts import try_parse_number
from .dates import parse_date_strings
from .errors import AmountParseError, MalformedInputError
from .field_mapper import default_field_mapper
from .models import Transaction
from .options import merge_options
from .parse import parse_csv, parse_metadata
from .qif import ENTRY_END, FIELD_INDICATORS, is_valid_header
from .times import parse_time_strings

logger = logging.getLogger(__name__)

DEFAULT_CSV_OPTIONS = {
    'headers': True,
    'skip_rows': 0,
    'map': default_field_mapper,
}

# Comma between a digit and a group of exactly three digits ("1,234.56")
_THOUSANDS_SEPARATOR = re.compile(r'(?<=\d),(?=\d{3}(?!\d))')


def parse_amount(value):
    """
    Convert a raw amount to a float.

    Args:
        value (str or number): Amount such as '-34.99', '$1,200.50' or 134.99

    Returns:
        float: The amount

    Raises:
        AmountParseError: If the amount is not a finite number
    """
    if isinstance(value, Number) and not isinstance(value, bool):
        amount = float(value)
    elif isinstance(value, str):
        amount = try_parse_number(_THOUSANDS_SEPARATOR.sub('', value))
    else:
        amount = None

    if amount is None or not math.isfinite(amount):
        raise AmountParseError(f"Could not parse amount: {value!r}")
    return amount


def _assign_dates_and_times(pending_dates, pending_times):
    """Batch parse collected date/time strings onto their transactions."""
    if pending_dates:
        parsed_dates = parse_date_strings([raw for raw, _ in pending_dates])
        for (_, transaction), parsed in zip(pending_dates, parsed_dates):
            transaction.date = parsed

    if pending_times:
        parsed_times = parse_time_strings([raw for raw, _ in pending_times])
        for (_, transaction), parsed in zip(pending_times, parsed_times):
            transaction.time = parsed


def deserialise_csv(input_text, options=None, **overrides):
    """
    Deserialise CSV text to transactions.

    Args:
        input_text (str): CSV text
        options (dict, optional): Deserialiser options
            - headers: whether the CSV has a header row (default True)
            - skip_rows: lines to skip before the header (default 0)
            - map: function turning a row into a transaction-like dict of
              strings, e.g. from create_field_mapper (default maps columns
              named after the transaction keys)
        **overrides: Options given as keyword arguments

    Returns:
        list[Transaction]: Parsed transactions in file order

    Raises:
        MalformedInputError: If the CSV could not be read at all
        DateParseError: If the dates do not share a supported layout
        TimeParseError: If the times do not share a supported layout
        AmountParseError: If an amount is not a number

    Examples:
        >>> deserialise_csv('date,amount,payee\\n2024-01-15,100,Store')
        [Transaction(date=datetime.date(2024, 1, 15), time=None, amount=100.0, payee='Store', description=None, category=None, metadata=None)]
    """
    opts = merge_options(DEFAULT_CSV_OPTIONS, options, overrides)
    map_row = opts['map']

    rows, fields, errors = parse_csv(input_text, opts['headers'], opts['skip_rows'])
    if errors:
        if not rows:
            raise MalformedInputError("Invalid CSV data")
        logger.warning(f"CSV contained {len(errors)} unreadable rows, continuing with {len(rows)} rows")

    transactions = []
    pending_dates = []
    pending_times = []

    for index, row in enumerate(rows):
        transaction_like = map_row(row)
        if transaction_like is None:
            logger.debug(f"Skipping row {index}: mapper returned None")
            continue
        if not transaction_like.get('date') or not transaction_like.get('amount'):
            logger.debug(f"Skipping row {index}: missing date or amount")
            continue

        transaction = Transaction(amount=parse_amount(transaction_like['amount']))
        pending_dates.append((transaction_like['date'], transaction))

        if transaction_like.get('time'):
            pending_times.append((transaction_like['time'], transaction))

        for key in ('payee', 'description', 'category'):
            if isinstance(transaction_like.get(key), str):
                setattr(transaction, key, transaction_like[key])

        if 'metadata' in transaction_like:
            transaction.metadata = parse_metadata(transaction_like['metadata'])

        transactions.append(transaction)

    _assign_dates_and_times(pending_dates, pending_times)
    logger.debug(f"Deserialised {len(transactions)} of {len(rows)} CSV rows")
    return transactions


def deserialise_json(input_text):
    """
    Deserialise a JSON array of transaction objects.

    Args:
        input_text (str): JSON text holding an array of objects with keys
            named after the transaction keys

    Returns:
        list[Transaction]: Parsed transactions in array order

    Raises:
        MalformedInputError: If the input is not valid JSON or not an array
        DateParseError: If the dates do not share a supported layout
        AmountParseError: If an amount is not a number
    """
    try:
        objects = json.loads(input_text)
    except ValueError:
        raise MalformedInputError("Input is not valid JSON")
    if not isinstance(objects, list):
        raise MalformedInputError("Input is not an array")

    transactions = []
    pending_dates = []
    pending_times = []

    for index, obj in enumerate(objects):
        if not isinstance(obj, dict):
            continue
        date_value = obj.get('date')
        amount_value = obj.get('amount')
        if not isinstance(date_value, str) or not date_value:
            logger.debug(f"Skipping object {index}: missing date")
            continue
        if isinstance(amount_value, bool) or not isinstance(amount_value, (Number, str)) or amount_value == '':
            logger.debug(f"Skipping object {index}: missing amount")
            continue

        transaction = Transaction(amount=parse_amount(amount_value))
        pending_dates.append((date_value, transaction))

        if isinstance(obj.get('time'), str) and obj['time']:
            pending_times.append((obj['time'], transaction))

        for key in ('payee', 'description', 'category'):
            if isinstance(obj.get(key), str):
                setattr(transaction, key, obj[key])

        if 'metadata' in obj:
            transaction.metadata = parse_metadata(obj['metadata'])

        transactions.append(transaction)

    _assign_dates_and_times(pending_dates, pending_times)
    logger.debug(f"Deserialised {len(transactions)} of {len(objects)} JSON objects")
    return transactions


def deserialise_qif(input_text):
    """
    Deserialise Quicken Interchange Format text.

    Supported field indicators: D (date), T (amount), P (payee),
    M (description/memo) and L (category). Other indicators are ignored.

    Args:
        input_text (str): QIF text starting with an account type header

    Returns:
        list[Transaction]: Parsed transactions in file order

    Raises:
        MalformedInputError: If the header is missing or unknown
        DateParseError: If the dates do not share a supported layout
        AmountParseError: If an amount is not a number
    """
    lines = input_text.strip().splitlines()
    header = lines[0].strip() if lines else ''
    if not is_valid_header(header):
        raise MalformedInputError(f"Unknown header: {header}")

    entries = []
    current = {}
    for line in lines[1:]:
        line = line.rstrip()
        if not line:
            continue
        indicator, value = line[0], line[1:]
        if indicator == ENTRY_END:
            entries.append(current)
            current = {}
        elif indicator in FIELD_INDICATORS:
            current[FIELD_INDICATORS[indicator]] = value
    if current:
        entries.append(current)

    transactions = []
    pending_dates = []
    for index, entry in enumerate(entries):
        if not entry.get('date') or not entry.get('amount'):
            logger.debug(f"Skipping QIF entry {index}: missing date or amount")
            continue

        transaction = Transaction(
            amount=parse_amount(entry['amount']),
            payee=entry.get('payee'),
            description=entry.get('description'),
            category=entry.get('category'),
        )
        pending_dates.append((entry['date'], transaction))
        transactions.append(transaction)

    _assign_dates_and_times(pending_dates, [])
    logger.debug(f"Deserialised {len(transactions)} QIF entries")
    return transactions
