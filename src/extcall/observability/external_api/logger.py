"""Observability – ExternalApiLogger.

Wraps an outbound call in a :class:`CallContext` and emits exactly one
``external_api_start`` event before it and exactly one terminal event
(``external_api_success`` or ``external_api_error``) after it.  Every log
statement executed while the call is in flight, including the transport
interceptor's records, carries the call's metadata through
:class:`~extcall.observability.logging.CallContextProcessor`.
"""
from __future__ import annotations

import contextlib
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Iterator, Mapping, TypeVar, Union

from extcall.application.masking import sanitize_url
from extcall.config.settings import ApiLoggingSettings
from extcall.kernel.types import ApiType
from extcall.observability.correlation import CallContext, CallContextHolder, generate_call_id
from extcall.observability.logging import get_logger

T = TypeVar("T")

CallBody = Callable[[], Union[Awaitable[T], T]]


class CallScope:
    """Handle yielded by :meth:`ExternalApiLogger.call_scope`."""

    def __init__(self, context: CallContext) -> None:
        self.context = context
        self.result_indicator: str | None = None

    @property
    def call_id(self) -> str:
        return self.context.call_id

    def record_result(self, result: Any) -> None:
        self.result_indicator = "null" if result is None else "success"


class ExternalApiLogger:
    """Correlation tagger and point-in-time telemetry for external API calls."""

    def __init__(self, settings: ApiLoggingSettings | None = None) -> None:
        self._settings = settings or ApiLoggingSettings()
        self._log = get_logger(__name__)

    @property
    def settings(self) -> ApiLoggingSettings:
        return self._settings

    @contextlib.contextmanager
    def call_scope(
        self,
        api_type: ApiType,
        provider: str,
        operation: str,
        *,
        url: str | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
        additional_data: Mapping[str, Any] | None = None,
    ) -> Iterator[CallScope]:
        """Run the ``with`` block as one tagged external call.

        The :class:`CallContext` is reset on every exit path, including
        exceptions and task cancellation; failures are re-raised unchanged.
        """
        ctx = CallContext(
            call_id=generate_call_id(),
            api_type=api_type,
            provider=provider,
            operation=operation,
            user_id=user_id,
            project_id=project_id,
        )
        start = time.perf_counter()
        with CallContextHolder.activate(ctx):
            self._log_start(ctx, url, additional_data)
            scope = CallScope(ctx)
            try:
                yield scope
            except BaseException as exc:
                self._log_error(ctx, start, exc)
                raise
            self._log_success(ctx, start, scope)

    async def with_call_result(
        self,
        api_type: ApiType,
        provider: str,
        operation: str,
        body: CallBody[T],
        *,
        url: str | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
        additional_data: Mapping[str, Any] | None = None,
    ) -> T:
        """Invoke *body* (sync or async) inside :meth:`call_scope` and return its result."""
        with self.call_scope(
            api_type,
            provider,
            operation,
            url=url,
            user_id=user_id,
            project_id=project_id,
            additional_data=additional_data,
        ) as scope:
            result = body()
            if inspect.isawaitable(result):
                result = await result
            scope.record_result(result)
            return result  # type: ignore[return-value]

    async def with_call(
        self,
        api_type: ApiType,
        provider: str,
        operation: str,
        body: CallBody[Any],
        *,
        url: str | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
        additional_data: Mapping[str, Any] | None = None,
    ) -> None:
        """Fire-and-forget variant of :meth:`with_call_result`."""
        with self.call_scope(
            api_type,
            provider,
            operation,
            url=url,
            user_id=user_id,
            project_id=project_id,
            additional_data=additional_data,
        ):
            result = body()
            if inspect.isawaitable(result):
                await result

    def log_quota_usage(
        self,
        api_type: ApiType,
        provider: str,
        operation: str,
        *,
        characters_used: int | None = None,
        request_count: int = 1,
        remaining_quota: int | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
    ) -> None:
        if not self._settings.include_quota_info:
            return
        self._emit(
            self._settings.log_level,
            "api_quota_usage",
            api_type=api_type.value,
            api_provider=provider,
            operation=operation,
            characters=characters_used if characters_used is not None else "N/A",
            requests=request_count,
            remaining=remaining_quota if remaining_quota is not None else "unknown",
            user_id=user_id if user_id is not None else "N/A",
            project_id=project_id if project_id is not None else "N/A",
        )

    def log_rate_limit(
        self,
        api_type: ApiType,
        provider: str,
        *,
        remaining: int | None = None,
        reset: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        if not self._settings.include_quota_info:
            return
        self._emit(
            logging.WARNING,
            "api_rate_limit",
            api_type=api_type.value,
            api_provider=provider,
            remaining=remaining if remaining is not None else "unknown",
            reset=reset if reset is not None else "unknown",
            retry_after_seconds=retry_after if retry_after is not None else "unknown",
        )

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _log_start(
        self,
        ctx: CallContext,
        url: str | None,
        additional_data: Mapping[str, Any] | None,
    ) -> None:
        fields: dict[str, Any] = self._base_fields(ctx)
        fields["operation"] = ctx.operation
        fields["user_id"] = ctx.user_id
        fields["project_id"] = ctx.project_id
        if self._settings.detailed_for(ctx.api_type):
            if url is not None and self._settings.sanitize_sensitive_data:
                url = sanitize_url(url)
            fields["url"] = url
            fields["data"] = dict(additional_data) if additional_data else "none"
        self._emit(self._settings.log_level, "external_api_start", **fields)

    def _log_success(self, ctx: CallContext, start: float, scope: CallScope) -> None:
        fields = self._base_fields(ctx)
        if self._settings.include_timing:
            fields["duration_ms"] = _elapsed_ms(start)
        if scope.result_indicator is not None:
            fields["result"] = scope.result_indicator
        self._emit(self._settings.log_level, "external_api_success", **fields)

    def _log_error(self, ctx: CallContext, start: float, exc: BaseException) -> None:
        fields = self._base_fields(ctx)
        if self._settings.include_timing:
            fields["duration_ms"] = _elapsed_ms(start)
        self._emit(
            logging.ERROR,
            "external_api_error",
            error=type(exc).__name__,
            message=str(exc),
            exc_info=exc,
            **fields,
        )

    @staticmethod
    def _base_fields(ctx: CallContext) -> dict[str, Any]:
        return {
            "call_id": ctx.call_id,
            "api_type": ctx.api_type.value,
            "api_provider": ctx.provider,
        }

    def _emit(self, level: int, event: str, **fields: Any) -> None:
        try:
            self._log.log(level, event, **fields)
        except Exception:  # noqa: BLE001
            pass


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


__all__ = ["CallScope", "ExternalApiLogger"]
