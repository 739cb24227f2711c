"""
Structured logging configuration
Provides consistent logging across the render engine with:
- Structured JSON logging for batch/production runs
- Human-readable logs for development
- Render correlation IDs
- Operation timing
"""

import logging
import sys
import json
import os
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from contextvars import ContextVar
from pathlib import Path
from logging.handlers import RotatingFileHandler

from demoforge import config

# Context variables for correlation across concurrent renders
render_id_var: ContextVar[Optional[str]] = ContextVar("render_id", default=None)
batch_id_var: ContextVar[Optional[str]] = ContextVar("batch_id", default=None)

_STANDARD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "getMessage",
    "message",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        render_id = render_id_var.get()
        if render_id:
            log_data["render_id"] = render_id

        batch_id = batch_id_var.get()
        if batch_id:
            log_data["batch_id"] = batch_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        # Anything passed through logger.info(..., extra={...}) lands on the record
        extra: Dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRS or key.startswith("_") or callable(value):
                continue
            extra[key] = value

        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S.%f')[:-3]

        context_parts = []
        batch_id = batch_id_var.get()
        if batch_id:
            context_parts.append(f"batch:{batch_id[:8]}")

        render_id = render_id_var.get()
        if render_id:
            context_parts.append(f"render:{render_id[:8]}")

        context = f" [{', '.join(context_parts)}]" if context_parts else ""

        log_line = (
            f"{color}{timestamp}{reset} "
            f"{color}{record.levelname:8s}{reset} "
            f"{record.name:30s}{context} "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)

        return log_line


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds component context and correlation IDs"""

    def process(self, msg: str, kwargs: Any) -> tuple:
        if "extra" not in kwargs:
            kwargs["extra"] = {}

        render_id = render_id_var.get()
        if render_id:
            kwargs["extra"]["render_id"] = render_id

        batch_id = batch_id_var.get()
        if batch_id:
            kwargs["extra"]["batch_id"] = batch_id

        if self.extra:
            kwargs["extra"].update(self.extra)

        return msg, kwargs


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    use_json: Optional[bool] = None,
) -> None:
    """
    Configure application logging

    Args:
        level: Logging level (defaults to LOG_LEVEL)
        log_file: Optional file path; file logs are always JSON
        use_json: If True, console output is structured JSON (defaults to LOG_JSON)
    """
    level = level or config.LOG_LEVEL
    use_json = config.LOG_JSON if use_json is None else use_json
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(StructuredFormatter() if use_json else DevelopmentFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=int(os.getenv("LOG_MAX_BYTES", str(20 * 1024 * 1024))),
            backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> LoggerAdapter:
    """
    Get a logger with optional extra context

    Example:
        logger = get_logger(__name__, component="render_engine")
        logger.info("Rendering plan", extra={"primitives": 42})
    """
    return LoggerAdapter(logging.getLogger(name), extra)


def set_render_id(render_id: str) -> None:
    """Set render ID for correlation across log messages"""
    render_id_var.set(render_id)


def set_batch_id(batch_id: str) -> None:
    """Set batch ID for correlation across log messages"""
    batch_id_var.set(batch_id)


def clear_context() -> None:
    """Clear correlation context"""
    render_id_var.set(None)
    batch_id_var.set(None)


class LogTimer:
    """Context manager for timing operations with automatic logging"""

    def __init__(self, logger: logging.LoggerAdapter, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[float] = None
        self.duration: Optional[float] = None

    def __enter__(self) -> "LogTimer":
        self.start_time = datetime.now().timestamp()
        self.logger.log(self.level, f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb) -> None:
        self.duration = datetime.now().timestamp() - self.start_time

        if exc_type:
            self.logger.error(
                f"Failed: {self.operation}",
                extra={"duration_seconds": self.duration, "error": str(exc_val)},
                exc_info=True
            )
        else:
            self.logger.log(
                self.level,
                f"Completed: {self.operation}",
                extra={"duration_seconds": self.duration}
            )
