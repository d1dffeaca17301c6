"""Masking – redaction of sensitive data in logged requests and responses."""
from extcall.application.masking.rules import (
    DEFAULT_MAX_BODY_LENGTH,
    MASK,
    SENSITIVE_BODY_KEYWORDS,
    SENSITIVE_HEADERS,
    SENSITIVE_QUERY_PARAMS,
    TRUNCATION_MARKER,
)
from extcall.application.masking.sanitizer import (
    render_body,
    sanitize_body,
    sanitize_headers,
    sanitize_url,
    truncate,
)

__all__ = [
    "DEFAULT_MAX_BODY_LENGTH",
    "MASK",
    "SENSITIVE_BODY_KEYWORDS",
    "SENSITIVE_HEADERS",
    "SENSITIVE_QUERY_PARAMS",
    "TRUNCATION_MARKER",
    "render_body",
    "sanitize_body",
    "sanitize_headers",
    "sanitize_url",
    "truncate",
]
