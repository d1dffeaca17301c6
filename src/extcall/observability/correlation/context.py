"""Observability – CallContext, CallContextHolder."""
from __future__ import annotations

import contextlib
import dataclasses
from contextvars import ContextVar
from typing import Iterator

from extcall.kernel.types import ApiType


@dataclasses.dataclass(frozen=True)
class CallContext:
    """Ambient metadata for one outbound call attempt."""
    call_id: str
    api_type: ApiType
    provider: str
    operation: str
    user_id: int | str | None = None
    project_id: int | str | None = None

    def as_log_fields(self) -> dict[str, object]:
        fields: dict[str, object] = {
            "call_id": self.call_id,
            "api_type": self.api_type.value,
            "api_provider": self.provider,
            "operation": self.operation,
        }
        if self.user_id is not None:
            fields["user_id"] = self.user_id
        if self.project_id is not None:
            fields["project_id"] = self.project_id
        return fields


_CTX_VAR: ContextVar[CallContext | None] = ContextVar("_extcall_call_ctx", default=None)


class CallContextHolder:
    """Ambient call context stored in a ``ContextVar``.

    Each asyncio task and each thread sees its own value, so concurrent calls
    never observe each other's metadata.
    """

    @staticmethod
    def get() -> CallContext | None:
        return _CTX_VAR.get()

    @staticmethod
    @contextlib.contextmanager
    def activate(ctx: CallContext) -> Iterator[CallContext]:
        """Make *ctx* the ambient context for the duration of the block.

        The previous value is restored on every exit path, including
        exceptions and task cancellation.
        """
        token = _CTX_VAR.set(ctx)
        try:
            yield ctx
        finally:
            _CTX_VAR.reset(token)


__all__ = ["CallContext", "CallContextHolder"]
