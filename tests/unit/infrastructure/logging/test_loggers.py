"""Unit tests for logger implementations.

Tests verify that:
1. ConsoleLogger and NullLogger implement the LoggerPort protocol
2. ConsoleLogger honours verbosity and tracks writer statistics
3. NullLogger stays silent so the writer can run without a console
"""

from io import StringIO
import time
import unittest

from rich.console import Console

from waxwriter.infrastructure.logging import (
    ConsoleLogger,
    LogContext,
    LogLevel,
    NullLogger,
)
from waxwriter.ports import LoggerPort
from waxwriter.xml.writer import WAX


class TestLoggerPort(unittest.TestCase):
    """Test that logger implementations comply with LoggerPort protocol."""

    def test_console_logger_implements_loggerport(self):
        self.assertIsInstance(ConsoleLogger(), LoggerPort)

    def test_null_logger_implements_loggerport(self):
        self.assertIsInstance(NullLogger(), LoggerPort)

    def test_loggerport_has_document_hooks(self):
        protocol_methods = {
            name for name in dir(LoggerPort) if not name.startswith("_")
        }
        self.assertIn("log_document_start", protocol_methods)
        self.assertIn("log_document_complete", protocol_methods)


class TestConsoleLogger(unittest.TestCase):
    def setUp(self):
        """Set up a logger writing into a buffer at debug verbosity."""
        self.buffer = StringIO()
        self.console = Console(file=self.buffer, force_terminal=False, width=120)
        self.logger = ConsoleLogger(console=self.console, verbosity=LogLevel.DEBUG)

    def _reset_buffer(self):
        self.buffer.truncate(0)
        self.buffer.seek(0)

    def test_initialization(self):
        """Logger should initialize with proper defaults."""
        logger = ConsoleLogger()
        self.assertEqual(logger.verbosity, 0)
        self.assertIsNone(logger._context)
        self.assertEqual(logger.get_stats()["documents_started"], 0)

    def test_info_logging(self):
        self.logger.info("Test message")
        self.assertIn("Test message", self.buffer.getvalue())

    def test_markup_in_messages_is_printed_literally(self):
        self.logger.info("element [bold] written")
        self.assertIn("element [bold] written", self.buffer.getvalue())

    def test_success_logging(self):
        self.logger.success("Wrote car.xml")
        self.assertIn("Wrote car.xml", self.buffer.getvalue())

    def test_warning_logging(self):
        """warning() should output message and increment warning count."""
        self.logger.warning("Warning message")
        self.assertIn("Warning message", self.buffer.getvalue())
        self.assertEqual(self.logger.get_stats()["warnings"], 1)

    def test_error_logging(self):
        self.logger.error("Error message")
        self.assertIn("Error message", self.buffer.getvalue())
        self.assertEqual(self.logger.get_stats()["errors"], 1)

    def test_debug_logging_with_verbosity(self):
        """debug() should only output when verbosity >= DEBUG."""
        self.logger.debug("Debug message")
        self.assertIn("Debug message", self.buffer.getvalue())

        self._reset_buffer()
        normal_logger = ConsoleLogger(console=self.console, verbosity=LogLevel.NORMAL)
        normal_logger.debug("Should not appear")
        normal_logger.verbose("Should not appear either")
        self.assertEqual(self.buffer.getvalue().strip(), "")

    def test_context_management(self):
        self.logger.set_context(sink="car.xml", root_element="car", unknown="x")
        self.assertIsNotNone(self.logger._context)
        self.assertEqual(self.logger._context.sink, "car.xml")
        self.assertEqual(self.logger._context.root_element, "car")
        self.assertFalse(hasattr(self.logger._context, "unknown"))

        self.logger.info("Writing")
        self.assertIn("[car] Writing", self.buffer.getvalue())

        self.logger.clear_context()
        self.assertIsNone(self.logger._context)

    def test_operation_shown_in_prefix(self):
        self.logger.set_context(operation="demo", root_element="artist")
        self.logger.info("Writing")
        self.assertIn("[demo:artist] Writing", self.buffer.getvalue())

    def test_prefix_hidden_below_debug(self):
        logger = ConsoleLogger(console=self.console, verbosity=LogLevel.VERBOSE)
        logger.set_context(operation="demo", root_element="artist")
        logger.info("Writing")
        self.assertNotIn("[demo", self.buffer.getvalue())

    def test_stats_tracking(self):
        """Logger should count documents and elements."""
        self.logger.log_document_start("car.xml", "1.0")
        self.logger.log_document_complete("car.xml", 3)
        stats = self.logger.get_stats()
        self.assertEqual(stats["documents_started"], 1)
        self.assertEqual(stats["documents_completed"], 1)
        self.assertEqual(stats["elements_written"], 3)

        self.logger.reset_stats()
        self.assertEqual(self.logger.get_stats()["elements_written"], 0)

    def test_get_stats_returns_copy(self):
        self.logger.get_stats()["errors"] = 99
        self.assertEqual(self.logger.get_stats()["errors"], 0)

    def test_log_document_start(self):
        self.logger.log_document_start("car.xml", "1.1")
        output = self.buffer.getvalue()
        self.assertIn("Writing XML to car.xml", output)
        self.assertIn("version 1.1", output)

    def test_writer_reports_through_logger(self):
        WAX(StringIO(), logger=self.logger).start("car").child("model", "Prius").close()
        output = self.buffer.getvalue()
        self.assertIn("Finished <StringIO>: 2 elements", output)
        self.assertEqual(self.logger.get_stats()["documents_completed"], 1)

    def test_writer_warns_about_version_1_2(self):
        WAX(StringIO(), "1.2", logger=self.logger)
        self.assertIn("XML 1.2 is not a published XML version", self.buffer.getvalue())
        self.assertEqual(self.logger.get_stats()["warnings"], 1)

    def test_log_final_stats(self):
        self.logger.log_document_complete("car.xml", 1200)
        self.logger.warning("careful")
        self._reset_buffer()
        self.logger.log_final_stats()
        output = self.buffer.getvalue()
        self.assertIn("Documents written: 1", output)
        self.assertIn("Elements written: 1,200", output)
        self.assertIn("Warnings: 1", output)
        self.assertNotIn("Errors", output)


class TestNullLogger(unittest.TestCase):
    """Test NullLogger for silent testing."""

    def test_null_logger_accepts_every_call(self):
        logger = NullLogger()

        logger.info("Info message")
        logger.success("Success message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.debug("Debug message")
        logger.verbose("Verbose message")
        self.assertIsNone(logger.log_document_start("out.xml", None))
        self.assertIsNone(logger.log_document_complete("out.xml", 0))


class TestLogContext(unittest.TestCase):
    def test_log_context_creation(self):
        context = LogContext()
        self.assertEqual(context.sink, "")
        self.assertEqual(context.root_element, "")
        self.assertIsNotNone(context.start_time)

    def test_log_context_elapsed_time(self):
        """LogContext should calculate elapsed time."""
        context = LogContext()
        time.sleep(0.01)
        self.assertGreater(context.elapsed_ms(), 5)


if __name__ == "__main__":
    unittest.main()
