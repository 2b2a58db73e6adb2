"""Logging configuration for stash-build-status.

Concourse reads the resource response from stdout, so every handler set up
here writes to stderr.
"""

import logging
import os
import sys
import threading
import time
import types
import uuid
from collections.abc import Mapping
from typing import Any, TextIO, cast

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
ROOT_LOGGER_NAME = "stash-build-status"


class ContextualLogger(logging.Logger):
    """Logger that maintains context between related operations."""

    def __init__(self, name: str, level: int = 0) -> None:
        super().__init__(name, level)
        self._context_data = threading.local()

    def _get_context_str(self) -> str:
        context_data = getattr(self._context_data, "data", {})
        if not context_data:
            return "no-context"

        # Format context as: operation=X,trace_id=Y,...
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
        """Overrides _log method to include context."""
        if extra is None:
            extra = {}

        if "context" not in extra:
            extra = dict(extra)
            extra["context"] = self._get_context_str()

        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)

    def get_context(self) -> dict[str, Any]:
        return dict(getattr(self._context_data, "data", {}))

    def set_context(self, **kwargs: Any) -> None:
        """
        Sets context values for the logger.

        Args:
            **kwargs: Key-value pairs to add to the context
        """
        if not hasattr(self._context_data, "data"):
            self._context_data.data = {}
        self._context_data.data.update(kwargs)

    def restore_context(self, data: dict[str, Any]) -> None:
        self._context_data.data = data

    def clear_context(self) -> None:
        """Removes all context data from the logger."""
        if hasattr(self._context_data, "data"):
            self._context_data.data = {}


# Loggers created from here on, including module-level ones, are contextual
logging.setLoggerClass(ContextualLogger)


class DefaultContextFilter(logging.Filter):
    """Fills in `context` for records from loggers created before setup."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = "no-context"
        return True


class LoggingContextManager:
    """Context manager that logs the start and end of an operation."""

    def __init__(
        self, logger: ContextualLogger, operation: str, **context: Any
    ) -> None:
        """
        Initializes the logging context manager.

        Args:
            logger: Contextual logger
            operation: Name of the operation being executed
            **context: Additional context data
        """
        self.logger = logger
        self.operation = operation
        self.context = context.copy()
        self.start_time = time.monotonic()
        self.trace_id = context.get("trace_id", str(uuid.uuid4())[:8])

    def __enter__(self) -> "LoggingContextManager":
        self.old_context = self.logger.get_context()

        self.context["operation"] = self.operation
        self.context["trace_id"] = self.trace_id
        self.logger.set_context(**self.context)

        self.logger.info(f"Operation started: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        duration = time.monotonic() - self.start_time

        if exc_type:
            self.logger.error(
                f"Operation failed: {self.operation} after {duration:.3f}s - {exc_val}"
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation} in {duration:.3f}s"
            )

        self.logger.restore_context(self.old_context)


def get_logger(name: str) -> ContextualLogger:
    """Return the named logger.

    Raises:
        TypeError: If the logger was created before `ContextualLogger` became
            the logger class
    """
    logger = logging.getLogger(name)
    if not isinstance(logger, ContextualLogger):
        raise TypeError(f"Logger {name!r} was created before logging was configured")
    return cast(ContextualLogger, logger)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    stream: TextIO | None = None,
    log_format: str | None = None,
) -> ContextualLogger:
    """
    Configures and returns a contextual logger writing to stderr.

    Calling it again replaces the handlers it installed earlier, so the CLI
    can raise the level after parsing `--verbose`.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, etc.)
        stream: Stream to write to (defaults to sys.stderr)
        log_format: Log format

    Returns:
        Configured contextual logger
    """
    logger = get_logger(name)

    log_level = level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logger.setLevel(getattr(logging, log_level.upper()))

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT", DEFAULT_FORMAT))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(DefaultContextFilter())
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger


def log_operation(
    logger: ContextualLogger, operation: str, **context: Any
) -> LoggingContextManager:
    """
    Creates a context manager for operation logging.

    Args:
        logger: Contextual logger
        operation: Name of the operation
        **context: Additional context data

    Returns:
        Context manager configured for operation logging
    """
    return LoggingContextManager(logger, operation, **context)
