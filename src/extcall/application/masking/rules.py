"""Masking – Redaction Rule Set.

All match terms are lower-case and compared case-insensitively.
"""
from __future__ import annotations

MASK = "***"
TRUNCATION_MARKER = "..."
DEFAULT_MAX_BODY_LENGTH = 1000

# Header names *containing* any of these fragments are masked.
SENSITIVE_HEADERS: frozenset[str] = frozenset({
    "authorization", "auth-key", "x-api-key", "api-key", "token",
    "x-auth-token", "x-access-token", "bearer", "cookie", "set-cookie",
})

# Body field names *containing* any of these fragments are masked.
SENSITIVE_BODY_KEYWORDS: frozenset[str] = frozenset({
    "password", "secret", "key", "token", "auth", "credential",
})

# Query parameters whose name *equals* one of these are masked.
SENSITIVE_QUERY_PARAMS: frozenset[str] = frozenset({
    "api_key", "api-key", "apikey", "token", "auth_key", "auth-key", "authkey", "secret",
})

__all__ = [
    "DEFAULT_MAX_BODY_LENGTH",
    "MASK",
    "SENSITIVE_BODY_KEYWORDS",
    "SENSITIVE_HEADERS",
    "SENSITIVE_QUERY_PARAMS",
    "TRUNCATION_MARKER",
]
