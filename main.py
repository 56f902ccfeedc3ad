#!/usr/bin/env python3
"""
Main entry point for the discrete auction.

Reads orders, one "<S|B> <quantity> <price>" per line, from a file or
standard input and prints the auction result as "<quantity> <price>",
or "0 n/a" when no deal is possible. With --serve, starts the REST API
instead.
"""

import argparse
import logging
import sys

from auction.api.parser import read_orders
from auction.api.rest_api import run_server
from auction.config.settings import get_settings
from auction.core.discrete_auction import DiscreteAuction
from auction.core.order_types import OrderSide
from auction.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Discrete (call) auction clearing price calculator")
    parser.add_argument(
        "input",
        nargs="?",
        type=argparse.FileType("r"),
        default=sys.stdin,
        help="File with one order per line (default: standard input)"
    )
    parser.add_argument("--serve", action="store_true", help="Run the REST API server")
    parser.add_argument("--host", help="REST API host (overrides REST_HOST)")
    parser.add_argument("--port", type=int, help="REST API port (overrides REST_PORT)")
    return parser


def run_cli(stream) -> str:
    """Run one auction over the orders in ``stream`` and return the result line."""
    settings = get_settings()
    orders = read_orders(stream, settings)
    engine = DiscreteAuction(settings)
    result = engine.clear(orders[OrderSide.SELL], orders[OrderSide.BUY])
    return str(result)


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    setup_logging(level=settings.log_level, log_file=settings.log_file)

    if args.serve:
        try:
            run_server(host=args.host, port=args.port)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt, shutting down...")
        return 0

    with args.input:
        print(run_cli(args.input))
    return 0


if __name__ == "__main__":
    sys.exit(main())
