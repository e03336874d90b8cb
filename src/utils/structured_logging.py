"""
Structured Logging Module
Provides JSON-formatted logging for log aggregation tools
"""

import json
import logging
from typing import Any


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs log records as JSON.

    Extra context is passed as ``extra={"extra_fields": {...}}`` and merged
    into the top-level object, so an evaluation can be queried by scenario,
    threat level or conclusion.
    """

    # Fields that might carry delivery secrets - never log their values
    SENSITIVE_FIELDS = {
        'password', 'token', 'api_key', 'secret', 'credential',
        'webhook_url', 'slack_webhook'
    }

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Python logging.LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update({
                k: self._sanitize_value(k, v)
                for k, v in record.extra_fields.items()
            })

        return json.dumps(log_data, default=str)

    def _sanitize_value(self, key: str, value: Any) -> Any:
        """Return "[REDACTED]" for keys that name a sensitive field"""
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in self.SENSITIVE_FIELDS):
            return "[REDACTED]"
        return value
