"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any, TextIO

import structlog

from extcall.observability.logging.processors import CallContextProcessor


class JsonLoggerFactory:
    """Configure structlog for JSON output on a stdlib handler."""

    @staticmethod
    def configure(
        level: int = logging.INFO,
        *,
        stream: TextIO | None = None,
        cache_logger_on_first_use: bool = True,
    ) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            CallContextProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=cache_logger_on_first_use,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
        handler = logging.StreamHandler(stream)
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
