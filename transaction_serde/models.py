"""
Data models for normalized transactions and the guessing/inspection reports.

The normalized Transaction holds:
- date: calendar date of the transaction (no time-of-day)
- time: milliseconds since midnight (0 - 86399999)
- amount: signed amount (negative for debits)
- payee, description, category: free text
- metadata: arbitrary mapping passed through untouched
"""

import datetime
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import pandas as pd

# Order matters: it drives mapper iteration and column order in tabular output
TRANSACTION_KEYS = (
    'date',
    'time',
    'amount',
    'payee',
    'description',
    'category',
    'metadata',
)

CONFIDENCE_LEVELS = ('medium', 'high')


@dataclass
class Transaction:
    """A single normalized transaction. Every field is optional."""

    date: Optional[datetime.date] = None
    time: Optional[int] = None
    amount: Optional[float] = None
    payee: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the populated fields in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class FieldGuess:
    """A candidate mapping of one source column onto a transaction key."""

    source_field: str
    target_field: str
    confidence: str
    reason: str


@dataclass
class GuessResult:
    guesses: List[FieldGuess] = field(default_factory=list)
    unmapped_fields: List[str] = field(default_factory=list)
    mapping: Dict[str, str] = field(default_factory=dict)


@dataclass
class InspectResult:
    format: str
    fields: List[str]
    sample: List[Dict[str, Any]]
    record_count: int


def transactions_to_frame(transactions):
    """
    Build a DataFrame with one column per transaction key.

    Args:
        transactions (list[Transaction]): Transactions to tabulate

    Returns:
        pd.DataFrame: One row per transaction, missing values as None
    """
    rows = [[getattr(t, key) for key in TRANSACTION_KEYS] for t in transactions]
    # object dtype keeps None (not NaN) for missing values and dates as date objects
    return pd.DataFrame(rows, columns=list(TRANSACTION_KEYS), dtype=object)
