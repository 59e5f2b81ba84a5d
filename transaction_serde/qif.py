"""
Quicken Interchange Format (QIF) constants.

Each QIF file starts with an account type header, followed by entries made of
one field per line (a one-letter indicator then the value) and terminated by
a line holding '^'.
"""

# Account type headers
HEADERS = {
    'BANK': '!Type:Bank',
    'CASH': '!Type:Cash',
    'CREDIT_CARD': '!Type:CCard',
    'ASSETS': '!Type:Oth A',
    'LIABILITIES': '!Type:Oth L',
}

HEADER_VALUES = tuple(HEADERS.values())

ENTRY_END = '^'

# Field indicator to transaction key
FIELD_INDICATORS = {
    'D': 'date',
    'T': 'amount',
    'P': 'payee',
    'M': 'description',
    'L': 'category',
}

INDICATORS_BY_FIELD = {key: indicator for indicator, key in FIELD_INDICATORS.items()}


def is_valid_header(header):
    """Check whether a line is a supported QIF account type header."""
    return header in HEADER_VALUES
