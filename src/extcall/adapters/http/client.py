"""HTTP adapter – client factories.

Both factories return an ``httpx.AsyncClient``; when API logging is enabled
its transport is wrapped in :class:`RedactingTransport`.
"""
from __future__ import annotations

import httpx

from extcall.adapters.http.interceptor import RedactingTransport
from extcall.config.settings import ApiLoggingSettings

DEFAULT_TIMEOUT = httpx.Timeout(30.0)
WEBHOOK_TIMEOUT = httpx.Timeout(2.0, connect=2.0, read=2.0)


def _wrap(
    settings: ApiLoggingSettings,
    transport: httpx.AsyncBaseTransport | None,
) -> httpx.AsyncBaseTransport:
    inner = transport or httpx.AsyncHTTPTransport()
    if settings.enabled:
        return RedactingTransport(inner, settings)
    return inner


def build_http_client(
    settings: ApiLoggingSettings | None = None,
    *,
    timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """General-purpose client for provider APIs."""
    settings = settings or ApiLoggingSettings()
    return httpx.AsyncClient(timeout=timeout, transport=_wrap(settings, transport))


def build_webhook_http_client(
    settings: ApiLoggingSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Client for webhook delivery: short connect/read timeouts."""
    settings = settings or ApiLoggingSettings()
    return httpx.AsyncClient(timeout=WEBHOOK_TIMEOUT, transport=_wrap(settings, transport))


__all__ = ["DEFAULT_TIMEOUT", "WEBHOOK_TIMEOUT", "build_http_client", "build_webhook_http_client"]
