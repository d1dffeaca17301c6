"""HTTP adapter – ApiHttpClient.

Issues JSON calls to third-party APIs.  Categorized calls run inside
:meth:`ExternalApiLogger.with_call_result`; uncategorized calls get a single
``http_request`` record and run unwrapped.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Mapping
from urllib.parse import urlsplit

import httpx
import pydantic
import pydantic_core

from extcall.adapters.http.descriptor import CallDescriptor, NoContent, UncategorizedRequest
from extcall.application.masking import render_body, sanitize_url
from extcall.kernel.errors import (
    DecodeError,
    DispatchError,
    EncodeError,
    ResponseStatusError,
    TransportError,
)
from extcall.kernel.types import ApiType
from extcall.observability.external_api import ExternalApiLogger
from extcall.observability.logging import get_logger

_log = get_logger(__name__)

# checked in order against the URL host
_KNOWN_HOSTS: tuple[tuple[str, str], ...] = (
    ("googleapis", "Google"),
    ("deepl", "DeepL"),
    ("microsoft", "Microsoft"),
    ("amazonaws", "AWS"),
    ("azure", "Azure"),
    ("github", "GitHub"),
    ("slack", "Slack"),
)

UNKNOWN_PROVIDER = "Unknown"


def provider_from_url(url: str) -> str:
    """Derive a provider label from the host of *url*.

    Falls back to the first dot-separated host label longer than three
    characters, so ``sub.example.com`` yields ``"example"``.
    """
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        return UNKNOWN_PROVIDER
    for fragment, name in _KNOWN_HOSTS:
        if fragment in host:
            return name
    for label in host.split("."):
        if len(label) > 3:
            return label
    return UNKNOWN_PROVIDER


class ApiHttpClient:
    """Dispatcher for outbound JSON calls.

    Args:
        client: Client used for every call; usually built by
            :func:`~extcall.adapters.http.client.build_http_client`.
        api_logger: Correlation tagger for categorized calls.
        webhook_client: Optional dedicated client for
            :meth:`request_for_webhook` (short timeouts).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_logger: ExternalApiLogger | None = None,
        *,
        webhook_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client
        self._api_logger = api_logger or ExternalApiLogger()
        self._webhook_client = webhook_client

    async def dispatch(self, descriptor: CallDescriptor) -> Any:
        return await self._dispatch(descriptor, self._client)

    async def dispatch_uncategorized(self, request: UncategorizedRequest) -> Any:
        _log.info(
            "http_request",
            method=request.method,
            url=self._loggable_url(request.url),
            body_type=type(request.body).__name__,
            timestamp=datetime.now(UTC).isoformat(),
        )
        return await self._execute(
            self._client,
            request.url,
            request.method,
            request.body,
            request.result_type,
            request.headers,
        )

    # ------------------------------------------------------------------
    # convenience entry points
    # ------------------------------------------------------------------

    async def request_for_machine_translation(
        self,
        url: str,
        body: Any,
        method: str,
        result_type: Any,
        provider: str,
        *,
        operation: str = "translate",
        headers: Mapping[str, str] | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
    ) -> Any:
        return await self.dispatch(
            CallDescriptor(
                url=url,
                method=method,
                body=body,
                result_type=result_type,
                api_type=ApiType.MACHINE_TRANSLATION,
                provider=provider,
                operation=operation,
                headers=headers or {},
                user_id=user_id,
                project_id=project_id,
            )
        )

    async def request_for_auth(
        self,
        url: str,
        body: Any,
        method: str,
        result_type: Any,
        provider: str,
        *,
        operation: str = "authenticate",
        headers: Mapping[str, str] | None = None,
        user_id: int | str | None = None,
    ) -> Any:
        return await self.dispatch(
            CallDescriptor(
                url=url,
                method=method,
                body=body,
                result_type=result_type,
                api_type=ApiType.OAUTH_AUTHENTICATION,
                provider=provider,
                operation=operation,
                headers=headers or {},
                user_id=user_id,
            )
        )

    async def request_for_webhook(
        self,
        url: str,
        body: Any,
        method: str,
        result_type: Any,
        *,
        provider: str | None = None,
        operation: str = "webhook_call",
        headers: Mapping[str, str] | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
    ) -> Any:
        descriptor = CallDescriptor(
            url=url,
            method=method,
            body=body,
            result_type=result_type,
            api_type=ApiType.WEBHOOK,
            provider=provider or provider_from_url(url),
            operation=operation,
            headers=headers or {},
            user_id=user_id,
            project_id=project_id,
        )
        return await self._dispatch(descriptor, self._webhook_client or self._client)

    async def request_for_llm(
        self,
        url: str,
        body: Any,
        method: str,
        result_type: Any,
        provider: str,
        *,
        operation: str = "generate",
        headers: Mapping[str, str] | None = None,
        user_id: int | str | None = None,
        project_id: int | str | None = None,
    ) -> Any:
        return await self.dispatch(
            CallDescriptor(
                url=url,
                method=method,
                body=body,
                result_type=result_type,
                api_type=ApiType.LLM_PROVIDER,
                provider=provider,
                operation=operation,
                headers=headers or {},
                user_id=user_id,
                project_id=project_id,
            )
        )

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    async def _dispatch(self, descriptor: CallDescriptor, client: httpx.AsyncClient) -> Any:
        additional_data: dict[str, Any] = {
            "method": descriptor.method,
            "body_type": type(descriptor.body).__name__,
        }
        additional_data.update(descriptor.additional_data)
        return await self._api_logger.with_call_result(
            descriptor.api_type,
            descriptor.provider,
            descriptor.operation,
            lambda: self._execute(
                client,
                descriptor.url,
                descriptor.method,
                descriptor.body,
                descriptor.result_type,
                descriptor.headers,
                api_type=descriptor.api_type,
                provider=descriptor.provider,
            ),
            url=descriptor.url,
            user_id=descriptor.user_id,
            project_id=descriptor.project_id,
            additional_data=additional_data,
        )

    async def _execute(
        self,
        client: httpx.AsyncClient,
        url: str,
        method: str,
        body: Any,
        result_type: Any,
        headers: Mapping[str, str],
        *,
        api_type: ApiType | None = None,
        provider: str | None = None,
    ) -> Any:
        safe_url = self._loggable_url(url)
        try:
            content = pydantic_core.to_json(body)
        except pydantic_core.PydanticSerializationError as exc:
            raise EncodeError(
                f"Could not serialise {type(body).__name__} payload for {method} {safe_url}",
                url=safe_url,
                method=method,
                cause=exc,
            ) from exc

        request_headers = httpx.Headers(headers)
        request_headers["Content-Type"] = "application/json"

        try:
            response = await client.request(method, url, content=content, headers=request_headers)
        except httpx.InvalidURL as exc:
            raise DispatchError(
                f"Invalid URL for {method} {safe_url}: {exc}",
                url=safe_url,
                method=method,
                cause=exc,
            ) from exc
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise TransportError(
                f"{type(exc).__name__} during {method} {safe_url}: {exc}",
                url=safe_url,
                method=method,
                cause=exc,
            ) from exc

        if not response.is_success:
            if response.status_code == 429 and api_type is not None and provider is not None:
                self._report_rate_limit(api_type, provider, response.headers)
            raise ResponseStatusError(
                f"HTTP {response.status_code} from {method} {safe_url}",
                status_code=response.status_code,
                body_excerpt=self._excerpt(response.content),
                url=safe_url,
                method=method,
            )

        if result_type is NoContent:
            return None

        try:
            return pydantic.TypeAdapter(result_type).validate_json(response.content)
        except pydantic.ValidationError as exc:
            raise DecodeError(
                f"Could not decode response of {method} {safe_url} as {getattr(result_type, '__name__', result_type)}",
                body_excerpt=self._excerpt(response.content),
                url=safe_url,
                method=method,
                cause=exc,
            ) from exc

    def _report_rate_limit(self, api_type: ApiType, provider: str, headers: httpx.Headers) -> None:
        self._api_logger.log_rate_limit(
            api_type,
            provider,
            remaining=_parse_int(headers.get("x-ratelimit-remaining")),
            reset=headers.get("x-ratelimit-reset"),
            retry_after=_parse_float(headers.get("retry-after")),
        )

    def _loggable_url(self, url: str) -> str:
        if self._api_logger.settings.sanitize_sensitive_data:
            return sanitize_url(url)
        return url

    def _excerpt(self, raw: bytes) -> str:
        settings = self._api_logger.settings
        return render_body(raw, settings.max_payload_length, sanitize=settings.sanitize_sensitive_data)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None


__all__ = ["ApiHttpClient", "UNKNOWN_PROVIDER", "provider_from_url"]
