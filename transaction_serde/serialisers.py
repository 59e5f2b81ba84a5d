"""
Serialisers: normalized transactions to CSV, JSON and QIF text.

Transactions without a calendar date are left out of every output format.
Plain dicts with transaction keys are accepted wherever a Transaction is.
"""

import csv
import datetime
import json
import logging
from collections.abc import Mapping

import pandas as pd

from .amounts import format_amount
from .errors import TransactionSerdeError
from .models import TRANSACTION_KEYS, Transaction, transactions_to_frame
from .options import merge_options
from .qif import ENTRY_END, HEADERS, INDICATORS_BY_FIELD, is_valid_header
from .times import format_time_string

logger = logging.getLogger(__name__)

DEFAULT_QIF_OPTIONS = {
    'header': HEADERS['BANK'],
    'locale': 'en-US',
}

# Text fields written after date and amount, in output order
_TEXT_FIELDS = ('payee', 'description', 'category')

# CSV columns in output order, each written only when some row has a value
CSV_COLUMNS = ('date', 'amount') + _TEXT_FIELDS + ('time', 'metadata')


def _as_transaction(item):
    if isinstance(item, Transaction):
        return item
    if isinstance(item, Mapping):
        return Transaction(**{key: item.get(key) for key in TRANSACTION_KEYS})
    raise TypeError(f"Expected a Transaction or mapping, got {type(item).__name__}")


def _format_date(value):
    """Return YYYY-MM-DD, or None when the value is not a date."""
    if isinstance(value, datetime.datetime):
        value = value.date()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return None


def _dated(transactions):
    """Yield (transaction, ISO date) pairs, skipping undated transactions."""
    for index, item in enumerate(transactions):
        transaction = _as_transaction(item)
        date = _format_date(transaction.date)
        if date is None:
            logger.debug(f"Skipping transaction {index}: no valid date")
            continue
        yield transaction, date


def _plain_number(value):
    """Whole amounts as int so they render as -100, not -100.0."""
    if value is None:
        return None
    value = float(value)
    return int(value) if value.is_integer() else value


def serialise_csv(transactions):
    """
    Serialise transactions to CSV with a header row.

    Amounts are written unquoted and every other value quoted. The time
    column is only written when at least one transaction has a time;
    metadata is written as JSON.

    Args:
        transactions (list[Transaction]): Transactions to write

    Returns:
        str: CSV text with '\\n' line endings and no trailing newline

    Examples:
        >>> serialise_csv([Transaction(date=datetime.date(2024, 1, 15), amount=100, payee='Store')])
        '"date","amount","payee"\\n"2024-01-15",100,"Store"'
    """
    df = transactions_to_frame([_as_transaction(item) for item in transactions])
    df['date'] = df['date'].map(_format_date)

    dated = df['date'].notna()
    if not dated.all():
        logger.debug(f"Skipping {int((~dated).sum())} transactions without a valid date")
    df = df.loc[dated].copy()
    if df.empty:
        return ''

    # Built as object columns so whole amounts stay int and missing values stay None
    df['amount'] = pd.Series([_plain_number(v) for v in df['amount']], index=df.index, dtype=object)
    df['time'] = pd.Series(
        [None if ms is None else format_time_string(ms) for ms in df['time']],
        index=df.index, dtype=object,
    )
    df['metadata'] = pd.Series(
        [None if m is None else json.dumps(m, ensure_ascii=False) for m in df['metadata']],
        index=df.index, dtype=object,
    )

    columns = [key for key in CSV_COLUMNS if df[key].notna().any()]
    output = df.to_csv(
        columns=columns,
        index=False,
        na_rep='',
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator='\n',
    )

    logger.debug(f"Serialised {len(df)} transactions to CSV")
    return output.rstrip('\n')


def serialise_json(transactions):
    """
    Serialise transactions to a compact JSON array.

    Args:
        transactions (list[Transaction]): Transactions to write

    Returns:
        str: JSON text; dates as YYYY-MM-DD, times as HH:mm:ss and
        whole amounts without a fraction (-100, not -100.0)
    """
    output = []
    for transaction, date in _dated(transactions):
        record = {'date': date}
        for key, value in transaction.to_dict().items():
            if key == 'date':
                continue
            if key == 'time':
                value = format_time_string(value)
            elif key == 'amount':
                value = _plain_number(value)
            record[key] = value
        output.append(record)

    logger.debug(f"Serialised {len(output)} transactions to JSON")
    return json.dumps(output, separators=(',', ':'), ensure_ascii=False)


def serialise_qif(transactions, options=None, **overrides):
    """
    Serialise transactions to Quicken Interchange Format.

    Args:
        transactions (list[Transaction]): Transactions to write
        options (dict, optional): Serialiser options
            - header: account type header (default '!Type:Bank')
            - locale: locale used to format amounts (default 'en-US')
        **overrides: Options given as keyword arguments

    Returns:
        str: QIF text, one field per line and '^' after each entry

    Raises:
        TransactionSerdeError: If the header is not a QIF account type

    Examples:
        >>> print(serialise_qif([Transaction(date=datetime.date(2024, 4, 2), amount=-1234.5, payee='Energy')]))
        !Type:Bank
        D2024-04-02
        T-1,234.5
        PEnergy
        ^
    """
    opts = merge_options(DEFAULT_QIF_OPTIONS, options, overrides)
    header = opts['header']
    if not is_valid_header(header):
        raise TransactionSerdeError(f"Unknown QIF header: {header}")

    output = [header]
    count = 0
    for transaction, date in _dated(transactions):
        output.append(INDICATORS_BY_FIELD['date'] + date)
        if transaction.amount is not None:
            output.append(INDICATORS_BY_FIELD['amount'] + format_amount(transaction.amount, opts['locale']))
        for key in _TEXT_FIELDS:
            value = getattr(transaction, key)
            if isinstance(value, str):
                output.append(INDICATORS_BY_FIELD[key] + value)
        output.append(ENTRY_END)
        count += 1

    logger.debug(f"Serialised {count} transactions to QIF")
    return '\n'.join(output)
