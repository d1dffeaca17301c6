"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog

from extcall.observability.correlation import CallContextHolder


class CallContextProcessor:
    """structlog processor that injects the active :class:`CallContext`.

    Injects ``call_id``, ``api_type``, ``api_provider`` and ``operation``
    plus ``user_id`` / ``project_id`` when set.  Keys already bound on the
    event win.

    Usage::

        import structlog
        from extcall.observability.logging import CallContextProcessor

        structlog.configure(processors=[CallContextProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        try:
            ctx = CallContextHolder.get()
            if ctx is not None:
                for key, value in ctx.as_log_fields().items():
                    event_dict.setdefault(key, value)
        except Exception:  # noqa: BLE001
            pass
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["CallContextProcessor", "get_logger"]
