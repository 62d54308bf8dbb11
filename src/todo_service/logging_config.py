"""JSON log lines for the todo service."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

# Context the service passes through `extra=`; anything else on a record is ignored
CONTEXT_FIELDS = ("username", "user_id", "todo_id", "path", "header", "identity_header", "users")


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object: level, logger, message, plus request context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_structured_logging(level: str = "INFO") -> None:
    """Send every log line, uvicorn's access log included, through one JSON handler on stderr."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.handlers = [handler]
    access_logger.propagate = False
