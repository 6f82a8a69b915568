"""
Unit tests for the reporter.py module.

Tests the allocation reporter including:
- Count parsing
- Allocation and byte reporting
- Zero, unparseable and negative counts
- Clearing of the previous batch
"""

import unittest
from unittest.mock import patch

from memprobe.allocation.records import record_size
from memprobe.allocation.reporter import (
    AllocationReporter,
    InvalidCountError,
    parse_count,
)


class TestParseCount(unittest.TestCase):
    def test_valid_counts(self):
        self.assertEqual(parse_count("5"), 5)
        self.assertEqual(parse_count("+7"), 7)
        self.assertEqual(parse_count("-1"), -1)
        self.assertEqual(parse_count("007"), 7)
        self.assertEqual(parse_count("2147483647"), 2147483647)
        self.assertEqual(parse_count("-2147483648"), -2147483648)

    def test_invalid_counts_parse_as_zero(self):
        for value in ["", "abc", "5a", "1.5", " 5", "5\n", "-3\n", "1_000", "0x10", "٣", None]:
            with self.subTest(value=value):
                self.assertEqual(parse_count(value), 0)

    def test_out_of_range_counts_parse_as_zero(self):
        self.assertEqual(parse_count("2147483648"), 0)
        self.assertEqual(parse_count("-2147483649"), 0)


class TestAllocationReporter(unittest.TestCase):
    def setUp(self):
        self.reporter = AllocationReporter(force_gc=False)

    def test_handle_allocates_records(self):
        result = self.reporter.handle("5")
        expected = record_size() * 5
        self.assertEqual(result.amount, 5)
        self.assertEqual(result.allocated_bytes, expected)
        self.assertEqual(result.body, f"allocated: {expected} bytes")
        self.assertIsNotNone(result.stats)
        self.assertEqual(len(self.reporter.records), 5)

    def test_handle_zero(self):
        result = self.reporter.handle("0")
        self.assertEqual(result.amount, 0)
        self.assertIsNone(result.body)
        self.assertIsNone(result.stats)
        self.assertEqual(self.reporter.records, [])

    def test_handle_unparseable_matches_zero(self):
        self.assertEqual(self.reporter.handle("abc"), self.reporter.handle("0"))

    def test_handle_negative_raises(self):
        with self.assertRaises(InvalidCountError):
            self.reporter.handle("-1")
        self.assertEqual(self.reporter.records, [])

    def test_handle_is_not_cumulative(self):
        first = self.reporter.handle("10")
        second = self.reporter.handle("10")
        self.assertEqual(first.allocated_bytes, second.allocated_bytes)
        self.assertEqual(len(self.reporter.records), 10)

    def test_zero_clears_previous_batch(self):
        self.reporter.handle("3")
        self.reporter.handle("0")
        self.assertEqual(self.reporter.records, [])

    @patch("memprobe.allocation.reporter.logger")
    def test_zero_logs_diagnostic(self, mock_logger):
        self.reporter.handle("0")
        mock_logger.warning.assert_called_once()
        self.assertIn("amount was 0", mock_logger.warning.call_args[0][0])

    @patch("builtins.print")
    def test_stats_line_printed(self, mock_print):
        self.reporter.handle("2")
        mock_print.assert_called_once()
        line = mock_print.call_args[0][0]
        self.assertTrue(line.startswith("Alloc = "))
        self.assertIn("NumGC = ", line)

    @patch("builtins.print")
    @patch("memprobe.allocation.reporter.logger")
    def test_stats_line_printed_when_logging_is_quiet(self, mock_logger, mock_print):
        mock_logger.isEnabledFor.return_value = False
        self.reporter.handle("2")
        mock_print.assert_called_once()

    @patch("builtins.print")
    def test_zero_prints_no_stats(self, mock_print):
        self.reporter.handle("0")
        mock_print.assert_not_called()

    @patch("memprobe.allocation.reporter.gc.collect")
    def test_force_gc_collects_before_and_after(self, mock_collect):
        AllocationReporter(force_gc=True).handle("4")
        self.assertEqual(mock_collect.call_count, 2)

    @patch("memprobe.allocation.reporter.gc.collect")
    def test_force_gc_disabled(self, mock_collect):
        self.reporter.handle("4")
        mock_collect.assert_not_called()


if __name__ == "__main__":
    unittest.main()
