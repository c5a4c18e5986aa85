"""JSON logging for the API.

Every record is one JSON object on stdout. Values passed through ``extra=``
(entity ids, request path) become top-level keys, so a log line can be
filtered by ``company_id`` or ``employee_id`` without parsing the message.
"""
import json
import logging
import sys
from datetime import UTC, datetime
from typing import Optional, Union

from ems_api.config import settings

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "version": settings.APP_VERSION,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _RESERVED
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Return the named logger, attaching the JSON stdout handler on first use.

    The level defaults to ``LOG_LEVEL``. Records do not propagate to the root
    logger, so uvicorn's own handlers do not print them a second time.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(level or settings.LOG_LEVEL)
        logger.propagate = False

    return logger
