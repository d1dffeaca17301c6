"""Observability – short correlation identifiers."""
from __future__ import annotations

import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_SPACE = 36 ** 4


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_call_id() -> str:
    """Return ``<millis base36>-<random base36>``, e.g. ``"mgw3k2l1-1x9f"``.

    Used to tie log lines together, not as an identity: collisions are
    possible but rare within one process.
    """
    millis = time.time_ns() // 1_000_000
    return f"{to_base36(millis)}-{to_base36(secrets.randbelow(_RANDOM_SPACE))}"


__all__ = ["generate_call_id", "to_base36"]
