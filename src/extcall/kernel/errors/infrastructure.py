"""Infrastructure errors – failures of outbound calls to external APIs."""

from __future__ import annotations

from typing import Any

from extcall.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class DispatchError(InfrastructureError):
    """An outbound call issued through the dispatcher failed.

    ``url`` is always the sanitized form, so the error is safe to log.
    """

    default_code = "dispatch_error"

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        method: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.url = url
        self.method = method

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["url"] = self.url
        base["method"] = self.method
        return base


class TransportError(DispatchError):
    """The request never produced a response (connect refused, timeout, TLS …)."""

    default_code = "transport_error"


class ResponseStatusError(DispatchError):
    """The provider answered with a non-2xx status."""

    default_code = "response_status_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body_excerpt: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.body_excerpt = body_excerpt

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["status_code"] = self.status_code
        base["body_excerpt"] = self.body_excerpt
        return base


class DecodeError(DispatchError):
    """The response body could not be decoded into the expected shape."""

    default_code = "decode_error"

    def __init__(
        self,
        message: str,
        *,
        body_excerpt: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.body_excerpt = body_excerpt

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["body_excerpt"] = self.body_excerpt
        return base


class EncodeError(DispatchError):
    """The request payload could not be serialised to JSON."""

    default_code = "encode_error"


__all__ = [
    "DecodeError",
    "DispatchError",
    "EncodeError",
    "InfrastructureError",
    "ResponseStatusError",
    "TransportError",
]
