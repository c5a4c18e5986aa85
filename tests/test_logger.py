"""JSON log line layout."""

import json
import logging
import sys

from ems_api.config import settings
from ems_api.logger import JSONFormatter, get_logger


def _record(msg="Company created", exc_info=None, **extra):
    logger = logging.getLogger("ems_api.test")
    return logger.makeRecord(
        "ems_api.test", logging.INFO, __file__, 12, msg, None, exc_info, func="create_company", extra=extra
    )


class TestJSONFormatter:
    def test_standard_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "ems_api.test"
        assert entry["msg"] == "Company created"
        assert entry["version"] == settings.APP_VERSION
        assert entry["where"].endswith("create_company:12")
        assert "exception" not in entry

    def test_extra_fields_become_keys(self):
        entry = json.loads(JSONFormatter().format(_record(company_id="c1", employee_id="e1")))
        assert entry["company_id"] == "c1"
        assert entry["employee_id"] == "e1"

    def test_record_internals_are_not_leaked(self):
        entry = json.loads(JSONFormatter().format(_record()))
        for key in ("args", "msecs", "pathname", "levelno", "processName"):
            assert key not in entry

    def test_exception_is_formatted(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            entry = json.loads(JSONFormatter().format(_record(exc_info=sys.exc_info())))
        assert "RuntimeError: boom" in entry["exception"]


class TestGetLogger:
    def test_handler_attached_once(self):
        first = get_logger("ems_api.test.handlers")
        second = get_logger("ems_api.test.handlers")
        assert first is second
        assert len(second.handlers) == 1
        assert isinstance(second.handlers[0].formatter, JSONFormatter)
        assert second.propagate is False

    def test_level_comes_from_settings(self):
        logger = get_logger("ems_api.test.level")
        assert logger.level == logging.getLevelName(settings.LOG_LEVEL)

    def test_explicit_level_wins(self):
        logger = get_logger("ems_api.test.explicit", level="DEBUG")
        assert logger.level == logging.DEBUG
