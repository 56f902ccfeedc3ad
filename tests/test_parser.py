"""
Tests for the ingestion boundary: line parsing, JSON validation,
settings, and the command line entry point.
"""

import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

from auction.api.parser import parse_order_line, parse_orders, parse_price, read_orders
from auction.api.validators import (
    validate_auction_request,
    validate_order_data,
    validate_order_side,
    validate_price,
    validate_quantity,
)
from auction.config.settings import Settings, reload_settings
from auction.core.order import Order
from auction.core.order_types import OrderSide

import main


class TestParseOrderLine(unittest.TestCase):
    """Test cases for parsing one input line."""

    def setUp(self):
        """Set up test fixtures."""
        self.settings = Settings()

    def parse(self, line):
        return parse_order_line(line, self.settings)

    def test_valid_lines(self):
        """Test well-formed lines become orders."""
        self.assertEqual(self.parse("S 10 15.00"), Order(OrderSide.SELL, 10, 1500))
        self.assertEqual(self.parse("B 1000 100.00\n"), Order(OrderSide.BUY, 1000, 10000))
        self.assertEqual(self.parse("B\t5   12.34"), Order(OrderSide.BUY, 5, 1234))
        self.assertEqual(self.parse("S 1 1"), Order(OrderSide.SELL, 1, 100))
        self.assertEqual(self.parse("S 1 10.00   "), Order(OrderSide.SELL, 1, 1000))

    def test_price_is_truncated_to_subunits(self):
        """Test fractions of a subunit are dropped."""
        self.assertEqual(self.parse("S 1 10.009").price, 1000)

    def test_malformed_lines_are_skipped(self):
        """Test malformed lines yield None."""
        for line in ("", "   ", "\n", "S 10", "S 10 15.00 extra", " S 10 15.00",
                     "X 10 15.00", "s 10 15.00", "SELL 10 15.00",
                     "S ten 15.00", "S 1.5 15.00", "S 10 abc", "S 10 NaN", "S 10 Infinity",
                     "S 10 1e999999", "S 10 1e999990", "S 10 9E+999999", "S 10 1e-999999",
                     "S 10 1_5.00", "S 1_0 15.00", "S\u00a010 15.00", "S 10\u200315.00",
                     "S 10 15.00\u00a0", "S 10 \uff11\uff15"):
            self.assertIsNone(self.parse(line), line)

    def test_parse_price(self):
        """Test price tokens are converted to subunits or refused."""
        self.assertEqual(parse_price("15.40"), 1540)
        self.assertEqual(parse_price("1.5e1"), 1500)
        self.assertEqual(parse_price(".5"), 50)
        self.assertEqual(parse_price("15."), 1500)
        for token in ("1e999999", "-1e999999", "9E+999999", "1e19", "inf", "1_5", "\u0661\u0665", ""):
            self.assertIsNone(parse_price(token), token)

    def test_rejected_lines_are_logged(self):
        """Test skipped lines are reported at debug level."""
        with self.assertLogs("discrete_auction", level="DEBUG") as logs:
            self.assertIsNone(self.parse("S 10 1e999999"))
        self.assertIn("REJECTED|S 10 1e999999|invalid price", logs.output[0])

    def test_out_of_range_lines_are_skipped(self):
        """Test values outside the configured ranges yield None."""
        for line in ("S 0 15.00", "S 1001 15.00", "S -5 15.00", "S 10 0.99", "S 10 100.01", "B 10 -15.00"):
            self.assertIsNone(self.parse(line), line)

    def test_custom_ranges(self):
        """Test ranges come from settings."""
        self.settings.max_quantity = 5
        self.assertIsNone(self.parse("S 6 15.00"))
        self.assertIsNotNone(self.parse("S 5 15.00"))


class TestReadOrders(unittest.TestCase):
    """Test cases for reading a stream of lines."""

    def test_read_orders_groups_by_side(self):
        """Test orders are grouped by side and junk is dropped."""
        stream = io.StringIO("S 10 15.00\nB 10 20.00\ngarbage\n\nB 3 11.00\n")

        orders = read_orders(stream, Settings())

        self.assertEqual(orders[OrderSide.SELL], [Order(OrderSide.SELL, 10, 1500)])
        self.assertEqual([o.price for o in orders[OrderSide.BUY]], [2000, 1100])

    def test_read_orders_without_valid_lines(self):
        """Test an empty stream yields empty sides."""
        orders = read_orders(io.StringIO(""), Settings())
        self.assertEqual(orders, {OrderSide.SELL: [], OrderSide.BUY: []})

    def test_lines_beyond_limit_are_ignored(self):
        """Test only the first max_order_count lines are read."""
        settings = Settings()
        settings.max_order_count = 3
        lines = ["bad line", "S 1 10.00", "B 1 10.00", "S 1 10.00", "B 1 10.00"]

        orders = parse_orders(lines, settings)

        self.assertEqual(len(orders), 2)


class TestValidators(unittest.TestCase):
    """Test cases for JSON order validation."""

    def setUp(self):
        """Set up test fixtures."""
        self.settings = Settings()

    def test_valid_order(self):
        """Test a complete JSON order."""
        is_valid, error, order = validate_order_data(
            {"side": "sell", "quantity": 10, "price": "15.00"}, self.settings
        )
        self.assertTrue(is_valid)
        self.assertIsNone(error)
        self.assertEqual(order, Order(OrderSide.SELL, 10, 1500))

    def test_side_forms(self):
        """Test accepted side spellings."""
        for side in ("S", "s", "sell", "SELL"):
            self.assertEqual(validate_order_side(side)[2], OrderSide.SELL)
        for side in ("B", "buy", "Buy"):
            self.assertEqual(validate_order_side(side)[2], OrderSide.BUY)
        self.assertFalse(validate_order_side("hold")[0])
        self.assertFalse(validate_order_side(1)[0])
        self.assertFalse(validate_order_side(None)[0])

    def test_quantity(self):
        """Test quantity validation."""
        self.assertEqual(validate_quantity("7", self.settings)[2], 7)
        self.assertFalse(validate_quantity(7.5, self.settings)[0])
        self.assertFalse(validate_quantity(True, self.settings)[0])
        self.assertFalse(validate_quantity(0, self.settings)[0])
        self.assertFalse(validate_quantity("x", self.settings)[0])
        self.assertFalse(validate_quantity(None, self.settings)[0])

    def test_price(self):
        """Test price validation and conversion to subunits."""
        self.assertEqual(validate_price("15.40", self.settings)[2], 1540)
        self.assertEqual(validate_price(20, self.settings)[2], 2000)
        self.assertEqual(validate_price(12.5, self.settings)[2], 1250)
        self.assertFalse(validate_price("0.50", self.settings)[0])
        self.assertFalse(validate_price("abc", self.settings)[0])
        self.assertFalse(validate_price("1e999999", self.settings)[0])
        self.assertFalse(validate_price("1_5", self.settings)[0])
        self.assertFalse(validate_price(float("inf"), self.settings)[0])
        self.assertFalse(validate_price(1e300, self.settings)[0])
        self.assertFalse(validate_price(None, self.settings)[0])

    def test_invalid_orders(self):
        """Test incomplete or malformed JSON orders."""
        self.assertFalse(validate_order_data({"side": "S", "quantity": 1}, self.settings)[0])
        self.assertFalse(validate_order_data(["S", 1, "10.00"], self.settings)[0])
        self.assertFalse(validate_order_data({"side": "X", "quantity": 1, "price": "10"}, self.settings)[0])

    def test_auction_request_envelope(self):
        """Test validation of the request envelope."""
        self.assertTrue(validate_auction_request({"orders": []})[0])
        self.assertFalse(validate_auction_request({})[0])
        self.assertFalse(validate_auction_request({"orders": "S 1 10"})[0])
        self.assertFalse(validate_auction_request([])[0])


class TestSettings(unittest.TestCase):
    """Test cases for configuration."""

    def test_defaults(self):
        """Test default limits."""
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        self.assertEqual(settings.max_order_count, 1000000)
        self.assertEqual((settings.min_quantity, settings.max_quantity), (1, 1000))
        self.assertEqual((settings.min_price, settings.max_price), (100, 10000))
        self.assertIsNone(settings.log_file)
        settings.validate()

    def test_environment_overrides(self):
        """Test limits read from the environment."""
        with mock.patch.dict(os.environ, {"AUCTION_MAX_QUANTITY": "50", "AUCTION_MAX_PRICE": "500"}):
            settings = Settings()
        self.assertEqual(settings.max_quantity, 50)
        self.assertFalse(settings.accepts_price(501))

    def test_validation_collects_errors(self):
        """Test invalid settings are rejected."""
        with mock.patch.dict(os.environ, {"AUCTION_MIN_PRICE": "0", "REST_PORT": "70000"}):
            settings = Settings()
        with self.assertRaises(ValueError) as ctx:
            settings.validate()
        self.assertIn("Min price", str(ctx.exception))
        self.assertIn("REST port", str(ctx.exception))

    def test_reload_settings(self):
        """Test the global settings follow the environment on reload."""
        with mock.patch.dict(os.environ, {"AUCTION_MAX_ORDER_COUNT": "10"}):
            self.assertEqual(reload_settings().max_order_count, 10)
        self.assertEqual(reload_settings().max_order_count, Settings().max_order_count)


class TestCommandLine(unittest.TestCase):
    """End-to-end tests of the command line entry point."""

    def test_run_cli(self):
        """Test one auction over a text stream."""
        self.assertEqual(main.run_cli(io.StringIO("S 10 15.00\nB 10 20.00\n")), "10 17.50")
        self.assertEqual(main.run_cli(io.StringIO("S 5 10.00\nS 5 12.00\nB 3 11.00\n")), "3 10.50")
        self.assertEqual(main.run_cli(io.StringIO("B 10 20.00\n")), "0 n/a")

    def test_run_cli_skips_unusable_prices(self):
        """Test huge or non-ASCII prices are skipped without aborting the run."""
        self.assertEqual(main.run_cli(io.StringIO("S 10 15.00\nB 10 20.00\nB 5 9E+999999\n")), "10 17.50")
        self.assertEqual(main.run_cli(io.StringIO("S 10 15.00\nB 10 20.00\nS 5 1_0.00\nS\u00a05 10.00\n")), "10 17.50")

    def test_main_reads_file(self):
        """Test the entry point prints exactly one result line."""
        with tempfile.NamedTemporaryFile("w", suffix=".txt", delete=False) as handle:
            handle.write("S 100 15.40\nB 100 15.20\nB 50 15.40\nbad\n")
            path = handle.name
        self.addCleanup(os.remove, path)

        output = io.StringIO()
        with mock.patch("main.setup_logging"), contextlib.redirect_stdout(output):
            exit_code = main.main([path])

        self.assertEqual(exit_code, 0)
        self.assertEqual(output.getvalue(), "50 15.40\n")


if __name__ == '__main__':
    unittest.main()
