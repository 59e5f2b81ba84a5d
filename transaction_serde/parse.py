"""
Parsing wrappers for delimited (CSV) and structured (JSON) text.

Both return generic records (dicts keyed by column or property name) along
with the field names found, ready for inspection or field mapping.
"""

import io
import json
import logging
from typing import Any, Dict, List, NamedTuple

import pandas as pd

from .errors import MalformedInputError

logger = logging.getLogger(__name__)


class CsvParseResult(NamedTuple):
    data: List[Dict[str, Any]]
    fields: List[str]
    errors: List[str]


class JsonParseResult(NamedTuple):
    data: List[Dict[str, Any]]
    fields: List[str]


def parse_csv(input_text, headers=True, skip_rows=0) -> CsvParseResult:
    """
    Parse CSV text into records.

    Args:
        input_text (str): CSV text, surrounding whitespace is ignored
        headers (bool): Whether the first (non-skipped) row holds column names
        skip_rows (int): Number of lines to skip before the header row

    Returns:
        CsvParseResult: Records with string values, the column names, and
        messages for rows that could not be read (those rows are dropped)

    Notes:
        - Without headers, columns are named '0', '1', ...
        - Missing and blank cells become empty strings
        - Rows with more cells than the first row are malformed
    """
    text = input_text.strip()
    errors = []

    def _on_bad_line(bad_line):
        errors.append(f"Malformed row with {len(bad_line)} fields: {bad_line}")
        return None

    if text.count('"') % 2:
        errors.append("Unterminated quoted field")

    try:
        # The header is read as a data row so the first row sets the width
        # and wider rows go through _on_bad_line instead of being truncated
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,  # Keep raw strings; typing is up to the caller
            keep_default_na=False,
            skiprows=skip_rows,
            engine='python',
            on_bad_lines=_on_bad_line,
        )
    except pd.errors.EmptyDataError:
        logger.debug("CSV input is empty")
        return CsvParseResult([], [], errors)
    except pd.errors.ParserError as e:
        logger.debug(f"CSV tokenizer failed: {str(e)}")
        return CsvParseResult([], [], errors + [str(e)])

    rows = df.fillna('').values.tolist()
    if headers:
        fields = [str(name) for name in rows.pop(0)] if rows else []
    else:
        fields = [str(col) for col in df.columns]
    data = [dict(zip(fields, row)) for row in rows]

    data_lines = [line for line in text.splitlines()[skip_rows:] if line.strip()]
    if headers:
        data_lines = data_lines[1:]
    if data_lines and not data and not errors:
        errors.append(f"None of {len(data_lines)} data lines could be read")

    logger.debug(f"CSV shape: {df.shape}, columns: {fields}")
    if errors:
        logger.debug(f"CSV parsed with {len(errors)} errors: {errors}")

    return CsvParseResult(data, fields, errors)


def parse_json(input_text) -> JsonParseResult:
    """
    Parse JSON text into records.

    Args:
        input_text (str): A JSON array of objects or a single object

    Returns:
        JsonParseResult: Object records (other array items are dropped) and
        the union of their keys in first-seen order

    Raises:
        MalformedInputError: If the input is not valid JSON
    """
    try:
        parsed = json.loads(input_text.strip())
    except ValueError:
        raise MalformedInputError("Input is not valid JSON")

    items = parsed if isinstance(parsed, list) else [parsed]
    data = [item for item in items if isinstance(item, dict)]

    fields = []
    for record in data:
        for key in record:
            if key not in fields:
                fields.append(key)

    return JsonParseResult(data, fields)


def detect_format(input_text) -> str:
    """
    Detect whether text is JSON or CSV.

    Returns:
        str: 'json' if the text starts with '[' or '{' and parses as JSON,
        'csv' otherwise
    """
    trimmed = input_text.strip()
    if trimmed.startswith(('[', '{')):
        try:
            json.loads(trimmed)
            return 'json'
        except ValueError:
            logger.debug("Input looks like JSON but does not parse, treating as CSV")
    return 'csv'


def parse_metadata(value):
    """
    Interpret a metadata value.

    Args:
        value (str or dict): A JSON object string or an already decoded dict

    Returns:
        dict or None: The metadata mapping, or None if the value is not one
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if isinstance(value, dict):
        return value
    return None
