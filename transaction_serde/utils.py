"""
Utility functions for the command line front-end.

Library modules only create loggers; handlers are configured here, once, by
the application entry point.
"""

import os
import logging
import pathlib
import sys

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug=False, log_level=None):
    """Configure logging for the application.

    Args:
        debug (bool): Force DEBUG level
        log_level (str, optional): Level name such as 'info' or 'warning'.
            Defaults to TRANSACTION_SERDE_LOG_LEVEL, then 'warning'.

    Returns:
        str or None: Path of the log file when LOG_FILE is set
    """
    # Determine log level
    if debug:
        level = logging.DEBUG
    else:
        log_level = log_level or os.getenv('TRANSACTION_SERDE_LOG_LEVEL', 'warning')
        level = getattr(logging, log_level.upper(), logging.WARNING)

    handlers = [logging.StreamHandler()]

    # Optional log file from the environment
    log_file = os.getenv('LOG_FILE')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    return log_file


def read_text(path):
    """Read an input file, or standard input when path is '-'."""
    if str(path) == '-':
        return sys.stdin.read()
    return pathlib.Path(path).read_text(encoding='utf-8-sig')


def write_text(path, text):
    """Write output to a file, creating parent directories as needed."""
    output_path = pathlib.Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding='utf-8')
    logger.info(f"Wrote {output_path}")
    return output_path
