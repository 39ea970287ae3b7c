"""Contextual logging setup for MCP Confluence/Jira."""

import contextvars
import logging
import os
import sys
import time
import types
import uuid
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_DIRECTORY = "logs"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5
ROOT_LOGGER_NAME = "mcp-confluence-jira"


class ContextualLogger(logging.Logger):
    """Logger that stamps every record with the current operation context.

    The context lives in a ContextVar, so each task (and each worker thread
    started with a copied context) sees only its own values.
    """

    def __init__(self, name: str, level: int = 0) -> None:
        super().__init__(name, level)
        self._context_var: contextvars.ContextVar[dict[str, Any]] = (
            contextvars.ContextVar(f"log_context:{name}", default={})
        )

    @property
    def context(self) -> dict[str, Any]:
        """Return a copy of the context bound to the current task."""
        return dict(self._context_var.get())

    def _get_context_str(self) -> str:
        context_data = self._context_var.get()
        if not context_data:
            return "no-context"
        return ",".join(f"{k}={v}" for k, v in context_data.items())

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple[object, ...] | Mapping[str, object],
        exc_info: Any = None,
        extra: Mapping[str, object] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        extra = dict(extra or {})
        extra.setdefault("context", self._get_context_str())
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)

    def set_context(self, **kwargs: Any) -> None:
        """Add key/value pairs to the context of the current task."""
        self._context_var.set({**self._context_var.get(), **kwargs})

    def replace_context(self, data: dict[str, Any]) -> None:
        """Swap the whole context of the current task."""
        self._context_var.set(dict(data))

    def clear_context(self) -> None:
        """Remove all context data for the current task."""
        self._context_var.set({})


class _DefaultContextFilter(logging.Filter):
    """Fill in ``context`` for records emitted by plain module loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = "no-context"
        return True


class LoggingContextManager:
    """Bind an operation name and trace id to a logger for a block of work."""

    def __init__(
        self, logger: ContextualLogger, operation: str, **context: Any
    ) -> None:
        self.logger = logger
        self.operation = operation
        self.context = context.copy()
        self.trace_id = context.get("trace_id", str(uuid.uuid4())[:8])
        self.start_time = time.time()
        self.old_context: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContextManager":
        self.old_context = self.logger.context
        self.context["operation"] = self.operation
        self.context["trace_id"] = self.trace_id
        self.logger.set_context(**self.context)
        self.logger.debug(f"Operation started: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        duration = time.time() - self.start_time
        if exc_type:
            self.logger.error(
                f"Operation failed: {self.operation} after {duration:.3f}s - {exc_val}"
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation} in {duration:.3f}s"
            )
        self.logger.replace_context(self.old_context)


def get_logger(name: str = ROOT_LOGGER_NAME) -> ContextualLogger:
    """Return a contextual logger without touching its handlers."""
    logging.setLoggerClass(ContextualLogger)
    return cast(ContextualLogger, logging.getLogger(name))


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    log_to_file: bool = False,
    log_dir: str | None = None,
    log_format: str | None = None,
) -> ContextualLogger:
    """
    Configure and return a contextual logger.

    Console output goes to stderr because stdout carries the MCP stdio
    stream.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, etc.)
        log_to_file: If True, also log to a rotating file
        log_dir: Directory to store log files
        log_format: Log format

    Returns:
        Configured contextual logger
    """
    logger = get_logger(name)

    log_level = level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logger.setLevel(getattr(logging, log_level.upper()))

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT", DEFAULT_FORMAT))

    # Reconfiguring replaces the previous handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_DefaultContextFilter())
    logger.addHandler(console_handler)

    if log_to_file:
        log_directory = Path(log_dir or os.getenv("LOG_DIR", DEFAULT_LOG_DIRECTORY))
        log_directory.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_directory / f"{name}.log",
            maxBytes=MAX_LOG_SIZE,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_DefaultContextFilter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def log_operation(
    logger: ContextualLogger, operation: str, **context: Any
) -> LoggingContextManager:
    """Create a context manager that logs the start and end of an operation."""
    return LoggingContextManager(logger, operation, **context)


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a secret, keeping only a few leading characters."""
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return value[:keep_chars] + "*" * (len(value) - keep_chars)


def log_config_param(
    logger: logging.Logger,
    service: str,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Log one configuration value, masking it when sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"{service} {param}: {display_value}")
