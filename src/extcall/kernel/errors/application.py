"""Application-layer errors – misuse and configuration problems."""

from __future__ import annotations

from extcall.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
