"""Kernel types – ApiType."""
from __future__ import annotations

import enum


class ApiType(str, enum.Enum):
    """Classification of an outbound call by purpose."""

    MACHINE_TRANSLATION = "MACHINE_TRANSLATION"
    OAUTH_AUTHENTICATION = "OAUTH_AUTHENTICATION"
    WEBHOOK = "WEBHOOK"
    CONTENT_DELIVERY = "CONTENT_DELIVERY"
    TELEMETRY = "TELEMETRY"
    RECAPTCHA = "RECAPTCHA"
    LLM_PROVIDER = "LLM_PROVIDER"
    CACHE_PURGING = "CACHE_PURGING"
    EMAIL_SERVICE = "EMAIL_SERVICE"
    FILE_STORAGE = "FILE_STORAGE"


__all__ = ["ApiType"]
