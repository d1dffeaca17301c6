"""Masking – textual sanitizers for URLs, headers and bodies.

Every function here is pure.  Body redaction is a best-effort textual
transform over JSON and form-encoded payloads; it never parses structure
and never fails on malformed input.
"""
from __future__ import annotations

import re
from typing import Mapping

import structlog

from extcall.application.masking.rules import (
    DEFAULT_MAX_BODY_LENGTH,
    MASK,
    SENSITIVE_BODY_KEYWORDS,
    SENSITIVE_HEADERS,
    SENSITIVE_QUERY_PARAMS,
    TRUNCATION_MARKER,
)

_log = structlog.get_logger(__name__)

_QUERY_RE = re.compile(
    r"([?&])("
    + "|".join(re.escape(p) for p in sorted(SENSITIVE_QUERY_PARAMS, key=len, reverse=True))
    + r")=([^&#]*)",
    re.IGNORECASE,
)

# quoted string (escapes honoured, may be cut off by truncation upstream)
# or a bare token up to the next delimiter
_VALUE = r"""(?:"(?:[^"\\]|\\.)*(?:"|$)|'(?:[^'\\]|\\.)*(?:'|$)|[^\s"',;&{}\[\]]+)"""

# field names start at a word boundary and are bounded in length, which keeps
# matching linear on large bodies
_NAME_PART = r"[\w.\-]{0,64}"


def _field_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(
        r"""(?P<prefix>(?P<q>["']?)(?<![\w.\-])"""
        + _NAME_PART
        + re.escape(keyword)
        + _NAME_PART
        + r"""(?P=q)\s*[:=]\s*)(?P<value>"""
        + _VALUE
        + ")",
        re.IGNORECASE,
    )


# sorted so the pass order, and therefore the output, is stable across runs
_BODY_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (kw, _field_pattern(kw)) for kw in sorted(SENSITIVE_BODY_KEYWORDS)
)


def _mask_value(match: re.Match[str]) -> str:
    value = match.group("value")
    if len(value) >= 2 and value[0] in "\"'" and value[-1] == value[0]:
        return f"{match.group('prefix')}{value[0]}{MASK}{value[0]}"
    return f"{match.group('prefix')}{MASK}"


def sanitize_url(url: str) -> str:
    """Mask the value of sensitive query parameters, keeping everything else.

    The fragment is left as is.
    """
    head, hash_mark, fragment = url.partition("#")
    return _QUERY_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}={MASK}", head) + hash_mark + fragment


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of *headers* with sensitive values replaced by ``***``."""
    sanitized: dict[str, str] = {}
    for name, value in headers.items():
        lowered = name.lower()
        if any(fragment in lowered for fragment in SENSITIVE_HEADERS):
            sanitized[name] = MASK
        else:
            sanitized[name] = value
    return sanitized


def sanitize_body(body: str) -> str:
    """Mask values of fields whose name contains a sensitive keyword.

    Handles ``"field": value``, ``'field': value``, ``field=value`` and
    ``field: value``.  If one keyword pass fails the result of the previous
    passes is kept, so the caller never gets the raw body back after an error.
    """
    if not body or body.isspace():
        return body

    sanitized = body
    for keyword, pattern in _BODY_PATTERNS:
        try:
            sanitized = pattern.sub(_mask_value, sanitized)
        except Exception as exc:  # noqa: BLE001
            _log.warning("body_redaction_failed", keyword=keyword, error=type(exc).__name__)
    return sanitized


def truncate(text: str, limit: int = DEFAULT_MAX_BODY_LENGTH) -> str:
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


def render_body(
    raw: bytes | str,
    limit: int = DEFAULT_MAX_BODY_LENGTH,
    *,
    sanitize: bool = True,
) -> str:
    """Decode, sanitize and truncate a payload for logging."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if sanitize:
        text = sanitize_body(text)
    return truncate(text, limit)


__all__ = [
    "render_body",
    "sanitize_body",
    "sanitize_headers",
    "sanitize_url",
    "truncate",
]
