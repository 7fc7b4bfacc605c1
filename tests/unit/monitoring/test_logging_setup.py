"""
Unit tests for logging configuration and request ID tracking.

Usage:
    pytest tests/unit/monitoring/test_logging_setup.py -v
"""

import json
import logging
import sys

from boutique.infrastructure.monitoring.logger import (
    MAX_REQUEST_ID_LENGTH,
    JSONFormatter,
    get_request_id,
    request_id_ctx,
    set_request_id,
    setup_logging,
)
from shared.tests.test_base import LaborantTest


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "boutique.test", logging.INFO, __file__, 1, message, None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestId(LaborantTest):
    """Unit tests for request ID binding."""

    component_name = "boutique"
    test_category = "unit"

    def teardown_test(self):
        request_id_ctx.set(None)

    def test_keeps_valid_incoming_id(self):
        self.reporter.info("Testing incoming request ID", context="Test")

        assert set_request_id("req-123") == "req-123"
        assert get_request_id() == "req-123"

    def test_generates_id_when_missing(self):
        request_id = set_request_id(None)

        assert request_id
        assert get_request_id() == request_id

    def test_replaces_empty_id(self):
        assert set_request_id("") != ""

    def test_replaces_oversized_id(self):
        """Test IDs longer than the limit are not trusted."""
        oversized = "x" * (MAX_REQUEST_ID_LENGTH + 1)

        request_id = set_request_id(oversized)

        assert request_id != oversized
        assert len(request_id) <= MAX_REQUEST_ID_LENGTH

    def test_replaces_non_printable_id(self):
        assert set_request_id("bad\nid") != "bad\nid"


class TestJSONFormatter(LaborantTest):
    """Unit tests for JSONFormatter."""

    component_name = "boutique"
    test_category = "unit"

    def teardown_test(self):
        request_id_ctx.set(None)

    def test_formats_core_fields(self):
        self.reporter.info("Testing JSON log line", context="Test")

        line = JSONFormatter(service="boutique").format(make_record("hello"))
        entry = json.loads(line)

        assert entry["level"] == "INFO"
        assert entry["service"] == "boutique"
        assert entry["logger"] == "boutique.test"
        assert entry["message"] == "hello"
        assert "request_id" not in entry
        assert "exception" not in entry

    def test_includes_request_id_and_extra_fields(self):
        set_request_id("req-abc")

        line = JSONFormatter().format(make_record("created", outfit_id="out_1"))
        entry = json.loads(line)

        assert entry["request_id"] == "req-abc"
        assert entry["outfit_id"] == "out_1"

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "boutique.test",
                logging.ERROR,
                __file__,
                1,
                "failed",
                None,
                sys.exc_info(),
            )

        entry = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in entry["exception"]


class TestSetupLogging(LaborantTest):
    """Unit tests for setup_logging()."""

    component_name = "boutique"
    test_category = "unit"

    def setup_test(self):
        root = logging.getLogger()
        self._saved_handlers = list(root.handlers)
        self._saved_level = root.level

    def teardown_test(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in self._saved_handlers:
            root.addHandler(handler)
        root.setLevel(self._saved_level)

    def test_writes_log_file(self, tmp_path):
        """Test log_dir adds a file handler named after the service."""
        self.reporter.info("Testing file logging", context="Test")

        setup_logging(level="INFO", json_logs=True, log_dir=str(tmp_path))
        logging.getLogger("boutique.test").info("to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_file = tmp_path / "boutique-api.log"
        assert log_file.exists()
        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["message"] == "to file"

    def test_replaces_root_handlers(self):
        setup_logging(level="WARNING", json_logs=False)
        setup_logging(level="WARNING", json_logs=False)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_quiets_chatty_loggers(self):
        setup_logging(level="INFO", json_logs=False)

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
