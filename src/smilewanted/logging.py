"""
Structured logging configuration for the SmileWanted adapter.

Provides JSON or console logging with auction correlation IDs
and a bidder tag on every entry.
"""

import logging
import os
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

from .utils.constants import BIDDER_CODE

# Context variable for the auction being translated
auction_id_var: ContextVar[str] = ContextVar("auction_id", default="")


def get_auction_id() -> str:
    """Get the current auction ID from context."""
    return auction_id_var.get()


def generate_auction_id() -> str:
    """Generate a new unique auction ID."""
    return f"{int(time.time())}-{uuid.uuid4().hex[:8]}"


def add_auction_id(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to add the auction ID to log entries."""
    auction_id = get_auction_id()
    if auction_id:
        event_dict["auction_id"] = auction_id
    return event_dict


def add_bidder_info(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to tag log entries with the bidder code."""
    event_dict.setdefault("bidder", BIDDER_CODE)
    return event_dict


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    show_timestamps: bool = True,
) -> None:
    """
    Configure structured logging for the adapter.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ('json' or 'console')
        show_timestamps: Whether to include timestamps
    """
    level = os.getenv("LOG_LEVEL", level).upper()
    format = os.getenv("LOG_FORMAT", format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_auction_id,
        add_bidder_info,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if show_timestamps:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if format == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
        )
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


def adapter_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for request/response translation events."""
    return get_logger("smilewanted.adapter")


def bidder_logger(bidder_code: str) -> structlog.stdlib.BoundLogger:
    """Get logger for events tied to one bidder code or alias."""
    return get_logger("smilewanted.bidder").bind(bidder=bidder_code)


def floors_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for floor resolution events."""
    return get_logger("smilewanted.floors")


class LogContext:
    """Context manager for auction-scoped logging."""

    def __init__(self, auction_id: str | None = None, **initial_context: Any):
        """
        Initialize log context.

        Args:
            auction_id: Optional auction ID (generated if not provided)
            **initial_context: Additional context to bind
        """
        self.auction_id = auction_id or generate_auction_id()
        self.initial_context = initial_context
        self.token = None

    def __enter__(self) -> "LogContext":
        """Enter context and set auction ID."""
        self.token = auction_id_var.set(self.auction_id)
        if self.initial_context:
            structlog.contextvars.bind_contextvars(**self.initial_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context and clear auction ID."""
        auction_id_var.reset(self.token)
        structlog.contextvars.clear_contextvars()


# Initialize with defaults on module load
configure_logging()
