"""Observability – structured logging helpers."""
from extcall.observability.logging.factory import JsonLoggerFactory
from extcall.observability.logging.processors import CallContextProcessor, get_logger

__all__ = [
    "CallContextProcessor",
    "JsonLoggerFactory",
    "get_logger",
]
