"""
Exception types raised by transaction_serde.

Every error subclasses ValueError so callers that already guard conversions
with ``except ValueError`` keep working.
"""


class TransactionSerdeError(ValueError):
    """Base class for all transaction_serde errors."""


class DateParseError(TransactionSerdeError):
    """No single date layout could parse every string in a batch."""


class TimeParseError(TransactionSerdeError):
    """No single time layout could parse every string in a batch."""


class MalformedInputError(TransactionSerdeError):
    """Input text could not be read as the requested format."""


class AmountParseError(TransactionSerdeError):
    """A transaction amount could not be interpreted as a finite number."""
