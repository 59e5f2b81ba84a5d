"""
Command line front-end.

    transaction-serde convert bank.csv --from csv --to qif --guess
    transaction-serde inspect export.json --parse
    transaction-serde guess statement.csv --min-confidence high
"""

import argparse
import logging
import sys

import pandas as pd

from .deserialisers import deserialise_csv, deserialise_json, deserialise_qif
from .errors import TransactionSerdeError
from .field_mapper import create_field_mapper
from .guess import guess
from .inspection import inspect
from .models import TRANSACTION_KEYS
from .parse import detect_format, parse_csv, parse_json
from .qif import HEADER_VALUES
from .serialisers import serialise_csv, serialise_json, serialise_qif
from .utils import read_text, setup_logging, write_text

logger = logging.getLogger(__name__)

FORMATS = ('csv', 'json', 'qif')


def _parse_map_pairs(pairs):
    """Turn ['date=Transaction Date', ...] into a mapping dict."""
    mapping = {}
    for pair in pairs or []:
        target, sep, source = pair.partition('=')
        target, source = target.strip(), source.strip()
        if not sep or target not in TRANSACTION_KEYS or not source:
            raise argparse.ArgumentTypeError(f"Invalid mapping {pair!r}, expected TARGET=COLUMN")
        mapping[target] = source
    return mapping


def _read_records(text, skip_rows=0, headers=True):
    """Return (fields, records) for CSV or JSON input."""
    if detect_format(text) == 'json':
        records, fields = parse_json(text)
    else:
        records, fields, errors = parse_csv(text, headers, skip_rows)
        if errors:
            logger.warning(f"Ignoring {len(errors)} unreadable CSV rows")
    return fields, records


def _deserialise(text, args):
    if args.input_format == 'json':
        return deserialise_json(text)
    if args.input_format == 'qif':
        return deserialise_qif(text)

    options = {'headers': not args.no_headers, 'skip_rows': args.skip_rows}
    mapping = _parse_map_pairs(args.map)
    if args.guess:
        fields, records = _read_records(text, args.skip_rows, not args.no_headers)
        result = guess(fields, sample=records[:args.sample_size])
        logger.info(f"Guessed mapping: {result.mapping}")
        # Explicit --map entries win over guesses
        mapping = {**result.mapping, **mapping}
    if mapping:
        options['map'] = create_field_mapper(mapping)
    return deserialise_csv(text, options)


def _serialise(transactions, args):
    if args.output_format == 'json':
        return serialise_json(transactions)
    if args.output_format == 'qif':
        return serialise_qif(transactions, header=args.qif_header, locale=args.locale)
    return serialise_csv(transactions)


def run_convert(args):
    text = read_text(args.input)
    transactions = _deserialise(text, args)
    logger.info(f"Read {len(transactions)} transactions from {args.input}")

    output = _serialise(transactions, args)
    if args.output:
        write_text(args.output, output)
    else:
        print(output)
    return 0


def run_inspect(args):
    report = inspect(
        read_text(args.input),
        sample_size=args.sample_size,
        skip_rows=args.skip_rows,
        attempt_parsing=args.parse,
    )

    print(f"Format: {report.format}")
    print(f"Records: {report.record_count}")
    print(f"Fields: {', '.join(report.fields)}")
    if report.sample:
        sample_df = pd.DataFrame(report.sample, columns=report.fields)
        print(sample_df.to_string(index=False))
    return 0


def run_guess(args):
    fields, records = _read_records(read_text(args.input), args.skip_rows)
    result = guess(
        fields,
        min_confidence=args.min_confidence,
        sample=records[:args.sample_size],
    )

    for field_guess in result.guesses:
        print(f"{field_guess.source_field} -> {field_guess.target_field} "
              f"({field_guess.confidence}): {field_guess.reason}")
    if result.unmapped_fields:
        print(f"Unmapped: {', '.join(result.unmapped_fields)}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='transaction-serde',
        description='Convert financial transactions between CSV, JSON and QIF',
    )
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Log level (default from TRANSACTION_SERDE_LOG_LEVEL, else warning)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    convert_parser = subparsers.add_parser('convert', help='Convert between formats')
    convert_parser.add_argument('input', help="Input file, or '-' for standard input")
    convert_parser.add_argument('--from', dest='input_format', choices=FORMATS, required=True)
    convert_parser.add_argument('--to', dest='output_format', choices=FORMATS, required=True)
    convert_parser.add_argument('--output', '-o', type=str, default=None,
                                help='Output file (default: standard output)')
    convert_parser.add_argument('--skip-rows', type=int, default=0,
                                help='CSV lines to skip before the header')
    convert_parser.add_argument('--no-headers', action='store_true',
                                help='CSV input has no header row (columns are 0, 1, ...)')
    convert_parser.add_argument('--map', action='append', metavar='TARGET=COLUMN',
                                help='Map a CSV column onto a transaction field')
    convert_parser.add_argument('--guess', action='store_true',
                                help='Guess the CSV column mapping from headers and values')
    convert_parser.add_argument('--sample-size', type=int, default=10,
                                help='Rows used to confirm guesses')
    convert_parser.add_argument('--qif-header', choices=HEADER_VALUES, default=None)
    convert_parser.add_argument('--locale', type=str, default=None,
                                help='Locale for QIF amounts (default en-US)')
    convert_parser.set_defaults(handler=run_convert)

    inspect_parser = subparsers.add_parser('inspect', help='Preview CSV or JSON input')
    inspect_parser.add_argument('input', help="Input file, or '-' for standard input")
    inspect_parser.add_argument('--sample-size', type=int, default=3)
    inspect_parser.add_argument('--skip-rows', type=int, default=0)
    inspect_parser.add_argument('--parse', action='store_true',
                                help='Convert sample values to numbers and ISO dates')
    inspect_parser.set_defaults(handler=run_inspect)

    guess_parser = subparsers.add_parser('guess', help='Guess the field mapping of CSV or JSON input')
    guess_parser.add_argument('input', help="Input file, or '-' for standard input")
    guess_parser.add_argument('--min-confidence', choices=('high', 'medium'), default='medium')
    guess_parser.add_argument('--sample-size', type=int, default=10)
    guess_parser.add_argument('--skip-rows', type=int, default=0)
    guess_parser.set_defaults(handler=run_guess)

    return parser


def main(argv=None):
    """Main execution function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, log_level=args.log_level)
    logger.debug(f"Running {args.command} with {vars(args)}")

    try:
        return args.handler(args)
    except (TransactionSerdeError, argparse.ArgumentTypeError, OSError) as e:
        logger.error(f"Error during {args.command}: {str(e)}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
