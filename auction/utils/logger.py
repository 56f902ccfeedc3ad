"""
Logging configuration for the discrete auction.

This module provides logging setup with a console handler and an
optional rotating file handler. Console output goes to stderr so that
standard output only carries auction results.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional, TextIO


# console lines are short; the file keeps the call site
CONSOLE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
CONSOLE_DATE_FORMAT = '%H:%M:%S'
FILE_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(funcName)s:%(lineno)d %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5

# third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ('werkzeug',)


def _console_handler(stream: Optional[TextIO], level: int) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    return handler


def _file_handler(log_file: str, level: int, max_file_size: int, backup_count: int) -> logging.Handler:
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=max_file_size, backupCount=backup_count, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    stream: Optional[TextIO] = None
) -> None:
    """
    Replace the root logger's handlers with a console handler and,
    when ``log_file`` is given, a size-rotated file handler.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Path to log file (optional)
        max_file_size: Bytes before the log file is rotated
        backup_count: Rotated files to keep
        stream: Console stream, stderr by default
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers = [_console_handler(stream, numeric_level)]
    if log_file:
        handlers.append(_file_handler(log_file, numeric_level, max_file_size, backup_count))

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(numeric_level)
    for handler in handlers:
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging initialized - Level: {logging.getLevelName(numeric_level)}, File: {log_file or 'Console only'}"
    )


class AuctionLogger:
    """
    Specialized logger for auction runs.

    Provides structured, pipe-delimited logging for auction inputs,
    results, and performance metrics.
    """

    def __init__(self, name: str = "discrete_auction"):
        self.logger = logging.getLogger(name)
        self.auction_logger = logging.getLogger(f"{name}.auctions")
        self.performance_logger = logging.getLogger(f"{name}.performance")

    def log_auction_run(self, sell_count: int, buy_count: int, sell_levels: int, buy_levels: int) -> None:
        """Log the size of an auction run."""
        self.auction_logger.info(
            f"AUCTION_RUN|sells={sell_count}|buys={buy_count}|sell_levels={sell_levels}|buy_levels={buy_levels}"
        )

    def log_auction_result(self, quantity: int, price: Optional[str], tied_prices: int) -> None:
        """Log the outcome of an auction run."""
        self.auction_logger.info(
            f"AUCTION_RESULT|{quantity}|{price or 'N/A'}|tied={tied_prices}"
        )

    def log_performance_metric(self, metric_name: str, value: float, unit: str = "ms") -> None:
        """Log performance metric."""
        self.performance_logger.info(
            f"PERF_METRIC|{metric_name}|{value}|{unit}"
        )

    def log_rejected_input(self, source: str, reason: str) -> None:
        """Log input skipped at the ingestion boundary."""
        self.logger.debug(f"REJECTED|{source}|{reason}")
