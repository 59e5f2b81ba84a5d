"""
Field mapping from arbitrary source records to transaction-like records.

A transaction-like record is a dict of non-empty strings keyed by transaction
key; typing (dates, amounts, metadata) happens later in the deserialisers.
"""

import json
import logging
from collections.abc import Mapping

from .models import TRANSACTION_KEYS

logger = logging.getLogger(__name__)


def _to_text(value):
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def create_field_mapper(mapping):
    """
    Create a function mapping source records to transaction-like records.

    Args:
        mapping (dict): Transaction key to either a source column name or a
            callable taking the source row and returning a string

    Returns:
        callable: Function of one row returning a dict of string values, or
        None when the row is not a mapping

    Examples:
        >>> mapper = create_field_mapper({'date': 'Transaction Date', 'amount': 'Value'})
        >>> mapper({'Transaction Date': '2024-01-15', 'Value': '100', 'Other': 'x'})
        {'date': '2024-01-15', 'amount': '100'}

        >>> mapper = create_field_mapper({
        ...     'date': 'Date',
        ...     'amount': lambda row: str(float(row['Credit']) - float(row['Debit'])),
        ... })
    """

    def _map(row):
        if not isinstance(row, Mapping):
            return None

        transaction = {}
        for key in TRANSACTION_KEYS:
            source = mapping.get(key)
            if source is None:
                continue

            if callable(source):
                try:
                    value = source(row)
                except Exception as e:
                    # A failing transform only drops this field
                    logger.debug(f"Transform for {key} failed: {str(e)}")
                    continue
            else:
                value = row.get(source)

            value = _to_text(value)
            if value:
                transaction[key] = value

        return transaction

    return _map


default_field_mapper = create_field_mapper({key: key for key in TRANSACTION_KEYS})
