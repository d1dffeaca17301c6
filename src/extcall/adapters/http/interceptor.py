"""HTTP adapter – RedactingTransport.

An ``httpx`` transport wrapper that logs every request/response pair that
crosses it, with URL, headers and bodies sanitized and bodies truncated.
Transport exceptions are logged and re-raised as the very same object.
"""
from __future__ import annotations

import logging
import time
from typing import Any, AsyncIterator, Mapping

import httpx

from extcall.application.masking import render_body, sanitize_headers, sanitize_url
from extcall.config.settings import ApiLoggingSettings
from extcall.observability.correlation import CallContextHolder, generate_call_id
from extcall.observability.logging import get_logger

_FAILED_TO_READ = "<failed to read>"


class RedactingTransport(httpx.AsyncBaseTransport):
    """Log sanitized request/response records around an inner transport."""

    def __init__(
        self,
        inner: httpx.AsyncBaseTransport,
        settings: ApiLoggingSettings | None = None,
    ) -> None:
        self._inner = inner
        self._settings = settings or ApiLoggingSettings()
        self._log = get_logger(__name__)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        request_id = generate_call_id()
        start = time.perf_counter()
        include_body = self._include_body()

        await self._log_request(request, request_id, include_body)
        try:
            response = await self._inner.handle_async_request(request)
        except BaseException as exc:
            self._log_error(request, request_id, start, exc)
            raise

        await self._log_response(response, request_id, start, include_body)
        return response

    async def aclose(self) -> None:
        await self._inner.aclose()

    # ------------------------------------------------------------------
    # records
    # ------------------------------------------------------------------

    async def _log_request(self, request: httpx.Request, request_id: str, include_body: bool) -> None:
        try:
            fields: dict[str, Any] = {
                "request_id": request_id,
                "method": request.method,
                "url": self._url(request),
            }
            if self._settings.include_headers:
                fields["headers"] = self._headers(request.headers)
            if include_body:
                fields["body"] = self._body(await request.aread())
            self._log.log(self._settings.log_level, "api_request", **fields)
        except Exception:  # noqa: BLE001
            pass

    async def _log_response(
        self,
        response: httpx.Response,
        request_id: str,
        start: float,
        include_body: bool,
    ) -> None:
        try:
            fields: dict[str, Any] = {
                "request_id": request_id,
                "status_code": response.status_code,
                "reason_phrase": response.reason_phrase,
            }
            if self._settings.include_timing:
                fields["duration_ms"] = _elapsed_ms(start)
            if self._settings.include_headers:
                fields["headers"] = self._headers(response.headers)
        except Exception:  # noqa: BLE001
            return

        if not include_body:
            self._emit(self._settings.log_level, "api_response", **fields)
            return

        original_stream = response.stream
        try:
            raw = await response.aread()
        except Exception as exc:  # noqa: BLE001
            # the caller's own read must fail with the same error
            response.stream = _FailedStream(original_stream, exc)
            response.is_stream_consumed = False
            self._emit(
                logging.WARNING,
                "api_response",
                body=_FAILED_TO_READ,
                read_error=type(exc).__name__,
                **fields,
            )
            return
        self._emit(self._settings.log_level, "api_response", body=self._body(raw), **fields)

    def _log_error(
        self,
        request: httpx.Request,
        request_id: str,
        start: float,
        exc: BaseException,
    ) -> None:
        try:
            fields: dict[str, Any] = {
                "request_id": request_id,
                "method": request.method,
                "url": self._url(request),
                "error": type(exc).__name__,
                "message": str(exc),
            }
            if self._settings.include_timing:
                fields["duration_ms"] = _elapsed_ms(start)
            self._log.error("api_request_error", **fields)
        except Exception:  # noqa: BLE001
            pass

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _include_body(self) -> bool:
        if not self._settings.include_payload:
            return False
        ctx = CallContextHolder.get()
        return ctx is None or self._settings.detailed_for(ctx.api_type)

    def _url(self, request: httpx.Request) -> str:
        url = str(request.url)
        return sanitize_url(url) if self._settings.sanitize_sensitive_data else url

    def _headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        if self._settings.sanitize_sensitive_data:
            return sanitize_headers(headers)
        return dict(headers)

    def _body(self, raw: bytes) -> str:
        return render_body(
            raw,
            self._settings.max_payload_length,
            sanitize=self._settings.sanitize_sensitive_data,
        )

    def _emit(self, level: int, event: str, **fields: Any) -> None:
        try:
            self._log.log(level, event, **fields)
        except Exception:  # noqa: BLE001
            pass


class _FailedStream(httpx.AsyncByteStream):
    """Response stream that re-raises the error hit while reading the body."""

    def __init__(self, inner: Any, error: Exception) -> None:
        self._inner = inner
        self._error = error

    async def __aiter__(self) -> AsyncIterator[bytes]:
        raise self._error
        yield b""  # pragma: no cover

    async def aclose(self) -> None:
        if isinstance(self._inner, httpx.AsyncByteStream):
            await self._inner.aclose()


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


__all__ = ["RedactingTransport"]
