"""
Logging configuration and utilities for the end-to-end suite.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from hellobooks_e2e.config.settings import Settings, get_settings
from hellobooks_e2e.security.sanitizer import DataSanitizer, get_default_sanitizer

# Extra attributes promoted into JSON output
_JSON_EXTRA_FIELDS = ("test_id", "case_id", "event_type", "url", "note", "metric_name", "value", "unit")


class JSONFormatter(logging.Formatter):
    """JSON log formatter with optional sanitization."""

    def __init__(self, *args, sanitizer: Optional[DataSanitizer] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.sanitizer = sanitizer

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        if self.sanitizer:
            record = self.sanitizer.sanitize_log_record(record)

        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for name in _JSON_EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self.sanitizer:
            log_data = self.sanitizer.sanitize_dict(log_data)

        return json.dumps(log_data, default=str)


class SanitizingHandler(logging.Handler):
    """Log handler that sanitizes messages before passing to wrapped handler."""

    def __init__(self, handler: logging.Handler, sanitizer: Optional[DataSanitizer] = None):
        super().__init__()
        self.handler = handler
        self.sanitizer = sanitizer or get_default_sanitizer()
        self.setLevel(handler.level)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit sanitized record to wrapped handler."""
        try:
            self.handler.emit(self.sanitizer.sanitize_log_record(record))
        except Exception:
            self.handleError(record)


class ContextLogAdapter(logging.LoggerAdapter):
    """Log adapter that merges fixed context into every record."""

    def process(
        self, msg: str, kwargs: Dict[str, Any]
    ) -> tuple[str, Dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        settings: Settings instance (defaults to the cached settings)
        log_level: Logging level override
        log_format: 'json' or 'text' override
        log_file: Optional log file path override

    Returns:
        Root logger instance
    """
    settings = settings or get_settings()

    level = log_level or settings.log_level
    format_type = log_format or settings.log_format
    file_path = log_file or settings.log_file

    numeric_level = getattr(logging, level.upper())

    sanitizer: Optional[DataSanitizer] = None
    if settings.sanitize_logs:
        sanitizer = get_default_sanitizer()
        sanitizer.add_secret(settings.login_password)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if format_type == "json":
        console_handler: logging.Handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(JSONFormatter(sanitizer=sanitizer))
    else:
        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )

    console_handler.setLevel(numeric_level)

    # JSON formatter already sanitizes
    if sanitizer and format_type != "json":
        console_handler = SanitizingHandler(console_handler, sanitizer)

    root_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(numeric_level)

        if format_type == "json":
            file_handler.setFormatter(JSONFormatter(sanitizer=sanitizer))
            root_logger.addHandler(file_handler)
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                )
            )
            root_logger.addHandler(
                SanitizingHandler(file_handler, sanitizer) if sanitizer else file_handler
            )

    root_logger.setLevel(numeric_level)

    for noisy in ("asyncio", "urllib3", "faker", "factory"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("hellobooks_e2e").debug(
        "Logging initialized",
        extra={
            "log_level": level,
            "log_format": format_type,
            "log_file": file_path,
        },
    )

    return root_logger


def get_logger(name: str, **context: Any) -> logging.Logger:
    """
    Get a logger instance with optional context.

    Args:
        name: Logger name
        **context: Additional context to include in logs

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if context:
        return ContextLogAdapter(logger, context)

    return logger


def log_test_event(
    event_type: str,
    test_id: str,
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a test lifecycle event.

    Args:
        event_type: Type of event (started, passed, failed, ...)
        test_id: pytest node id
        data: Additional event data
    """
    logger = logging.getLogger("hellobooks_e2e.test_events")

    extra = {
        "event_type": event_type,
        "test_id": test_id,
    }

    if data:
        extra.update(data)

    logger.info(f"Test event: {event_type} {test_id}", extra=extra)


def log_performance_metric(
    metric_name: str,
    value: float,
    unit: str = "ms",
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a performance metric.

    Args:
        metric_name: Name of the metric
        value: Metric value
        unit: Unit of measurement
        context: Additional context
    """
    logger = logging.getLogger("hellobooks_e2e.performance")

    extra = {
        "metric_name": metric_name,
        "value": value,
        "unit": unit,
    }

    if context:
        extra.update(context)

    logger.debug(f"Performance metric: {metric_name}={value:.1f}{unit}", extra=extra)
