import contextlib
import io
import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from sysres_core.config import LoggingConfig
from sysres_core.logging_setup import JsonFormatter, configure_logging, install_excepthook


class JsonFormatterTests(unittest.TestCase):
    def test_event_fields_are_serialized(self):
        record = logging.LogRecord("sysres.telemetry", logging.WARNING, __file__, 1, "gpu query failed", None, None)
        record.event = "telemetry_query_failed"
        record.domain = "graphics"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "WARNING")
        self.assertEqual(payload["logger"], "sysres.telemetry")
        self.assertEqual(payload["event"], "telemetry_query_failed")
        self.assertEqual(payload["domain"], "graphics")
        self.assertNotIn("exc", payload)

    def test_exception_is_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("sysres", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
        payload = json.loads(JsonFormatter().format(record))
        self.assertIn("ValueError: boom", payload["exc"])


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class ConfigureLoggingTests(unittest.TestCase):
    def test_file_handler_follows_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(LoggingConfig(keep_log_files=3, level="WARNING"), directory=Path(tmp), name="sysres.test.cfg")
            try:
                self.assertEqual(logger.level, logging.WARNING)
                self.assertEqual(len(logger.handlers), 1)
                self.assertEqual(logger.handlers[0].backupCount, 3)
                logger.info("dropped")
                logger.warning("kept", extra={"event": "sample"})
                logger.handlers[0].flush()
                rows = [json.loads(line) for line in (Path(tmp) / "sysres.log").read_text(encoding="utf-8").splitlines()]
                self.assertEqual([r["msg"] for r in rows], ["kept"])
                self.assertEqual(rows[0]["event"], "sample")
            finally:
                for handler in list(logger.handlers):
                    handler.close()
                    logger.removeHandler(handler)

    def test_console_handler_when_enabled(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(LoggingConfig(console=True), directory=Path(tmp), name="sysres.test.console")
            try:
                self.assertEqual(len(logger.handlers), 2)
                self.assertIs(logger.handlers[1].stream, sys.stderr)
            finally:
                for handler in list(logger.handlers):
                    handler.close()
                    logger.removeHandler(handler)


class ExcepthookTests(unittest.TestCase):
    def setUp(self):
        self._saved = sys.excepthook
        self.logger = logging.getLogger("sysres.test.excepthook")
        self.logger.propagate = False
        self.handler = _ListHandler()
        self.logger.addHandler(self.handler)

    def tearDown(self):
        sys.excepthook = self._saved
        self.logger.removeHandler(self.handler)

    def _raise_and_hook(self, exc):
        try:
            raise exc
        except BaseException:
            sys.excepthook(*sys.exc_info())

    def test_uncaught_error_is_logged_and_printed(self):
        sys.excepthook = sys.__excepthook__
        install_excepthook(self.logger)
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            self._raise_and_hook(ValueError("sleep length must be non-negative"))
        self.assertIn("Traceback", err.getvalue())
        self.assertIn("ValueError: sleep length must be non-negative", err.getvalue())
        self.assertEqual(len(self.handler.records), 1)
        self.assertEqual(self.handler.records[0].event, "uncaught_exception")

    def test_previous_hook_is_chained(self):
        seen = []
        sys.excepthook = lambda exc_type, exc, tb: seen.append(exc_type)
        install_excepthook(self.logger)
        self._raise_and_hook(RuntimeError("x"))
        self.assertEqual(seen, [RuntimeError])

    def test_keyboard_interrupt_is_not_logged(self):
        seen = []
        sys.excepthook = lambda exc_type, exc, tb: seen.append(exc_type)
        install_excepthook(self.logger)
        self._raise_and_hook(KeyboardInterrupt())
        self.assertEqual(seen, [KeyboardInterrupt])
        self.assertEqual(self.handler.records, [])


if __name__ == "__main__":
    unittest.main()
