"""
Logging configuration for jikanio.

Structured logging built on structlog, with Rich console output for the CLI
and JSON output for log collectors. The library itself never configures
logging; applications call ``setup_logging`` once.
"""

import asyncio
import contextvars
import logging
import uuid
from typing import Any

import structlog
from rich.logging import RichHandler

# Context variable carrying the id of the current CLI invocation
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


class CorrelationIDProcessor:
    """Processor to add correlation ID to log records."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id_value = correlation_id.get("")
        if correlation_id_value:
            event_dict["correlation_id"] = correlation_id_value
        return event_dict


class AsyncContextProcessor:
    """Processor to add async task context to log records."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        try:
            task = asyncio.current_task()
            if task:
                event_dict["task_name"] = task.get_name()
        except RuntimeError:
            # No event loop running
            pass
        return event_dict


class StructuredLogger:
    """Thin wrapper over a structlog logger bound to a correlation ID."""

    def __init__(self, logger_name: str):
        self.logger = structlog.get_logger(logger_name)

    def with_correlation_id(
        self, correlation_id_value: str | None = None
    ) -> "StructuredLogger":
        """Bind a correlation ID to the current context."""
        if correlation_id_value is None:
            correlation_id_value = generate_correlation_id()

        correlation_id.set(correlation_id_value)
        return self

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, **kwargs)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_logs: bool = False,
    log_file: str | None = None,
    level_name: str = "INFO",
) -> None:
    """Configure structured logging for an application using jikanio.

    ``verbose`` and ``quiet`` override ``level_name``; an unknown level name
    falls back to INFO.
    """

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.INFO

    base_processors = [
        CorrelationIDProcessor(),
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        AsyncContextProcessor(),
    ]

    if json_logs:
        processors = [
            *base_processors,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]

        if log_file:
            logging.basicConfig(
                format="%(message)s", level=level, filename=log_file, encoding="utf-8"
            )
        else:
            logging.basicConfig(format="%(message)s", level=level)
    else:
        processors = [
            *base_processors,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

        handlers: list[logging.Handler] = [
            RichHandler(
                show_time=False,  # structlog stamps the time
                show_path=False,
                markup=True,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )
        ]

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            handlers.append(file_handler)

        logging.basicConfig(level=level, format="%(message)s", handlers=handlers)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    configure_third_party_loggers(verbose)


def configure_third_party_loggers(verbose: bool) -> None:
    """Configure third-party library loggers."""
    # Reduce noise from HTTP libraries
    logging.getLogger("httpx").setLevel(
        logging.WARNING if not verbose else logging.INFO
    )
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("rich").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())
