# capital_marketplace/core/logger.py
"""Structured logging setup with JSON formatter"""
import logging
import json
import sys

from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string

_LEVEL = logging.INFO


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": to_iso_string(get_utc_now()),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        request_id = getattr(record, "request_id", None)
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(level: str = "INFO") -> None:
    """
    Set the level used by loggers handed out by get_logger().

    Loggers created before this call are updated as well.
    """
    global _LEVEL
    _LEVEL = getattr(logging, level.upper(), logging.INFO)

    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith("capital_marketplace"):
            logger.setLevel(_LEVEL)


def get_logger(name: str, level: int = None) -> logging.Logger:
    """
    Get configured logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (default: level set by configure_logging)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else _LEVEL)

    return logger
