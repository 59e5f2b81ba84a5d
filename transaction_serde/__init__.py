"""
Transaction Serde - convert financial transactions between CSV, JSON and QIF.

This package provides functionality to:
- Read transactions from CSV, JSON and QIF text into a normalized form
- Write normalized transactions back out as CSV, JSON or QIF
- Guess how the columns of an unknown CSV or JSON export map onto transactions
- Inspect unknown input before choosing a mapping

The normalized format includes:
- date: Calendar date of the transaction
- time: Milliseconds since midnight
- amount: Signed amount (negative for debits)
- payee, description, category: Free text
- metadata: Arbitrary mapping kept alongside the transaction
"""

from .amounts import format_amount, try_parse_number
from .dates import parse_date_strings, try_parse_date
from .deserialisers import deserialise_csv, deserialise_json, deserialise_qif
from .errors import (
    AmountParseError,
    DateParseError,
    MalformedInputError,
    TimeParseError,
    TransactionSerdeError,
)
from .field_mapper import create_field_mapper, default_field_mapper
from .guess import guess
from .inspection import inspect
from .models import (
    TRANSACTION_KEYS,
    FieldGuess,
    GuessResult,
    InspectResult,
    Transaction,
    transactions_to_frame,
)
from .options import merge_options
from .parse import parse_csv, parse_json, parse_metadata
from .serialisers import serialise_csv, serialise_json, serialise_qif
from .times import format_time_string, parse_time_strings, to_ms, to_time_components

DESERIALISERS = {
    'csv': deserialise_csv,
    'json': deserialise_json,
    'qif': deserialise_qif,
}

SERIALISERS = {
    'csv': serialise_csv,
    'json': serialise_json,
    'qif': serialise_qif,
}

__all__ = [
    'AmountParseError',
    'DateParseError',
    'FieldGuess',
    'GuessResult',
    'InspectResult',
    'MalformedInputError',
    'TRANSACTION_KEYS',
    'TimeParseError',
    'Transaction',
    'TransactionSerdeError',
    'create_field_mapper',
    'default_field_mapper',
    'deserialise_csv',
    'deserialise_json',
    'deserialise_qif',
    'DESERIALISERS',
    'format_amount',
    'format_time_string',
    'guess',
    'inspect',
    'merge_options',
    'parse_csv',
    'parse_date_strings',
    'parse_json',
    'parse_metadata',
    'parse_time_strings',
    'serialise_csv',
    'serialise_json',
    'serialise_qif',
    'SERIALISERS',
    'to_ms',
    'to_time_components',
    'transactions_to_frame',
    'try_parse_date',
    'try_parse_number',
]
