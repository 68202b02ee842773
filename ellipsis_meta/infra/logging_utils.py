import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

LOGGER_NAME = "ellipsis_meta"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if hasattr(record, "extra_data"):
            payload.update(getattr(record, "extra_data"))
        # non-ASCII place names stay readable in the log stream
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: Optional[int] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if level is None:
        level = logging.getLevelName(os.environ.get("ELLIPSIS_LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    return logger


LOGGER = configure_logging()
