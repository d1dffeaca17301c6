"""HTTP adapter – call descriptors."""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Mapping

from extcall.kernel.types import ApiType


class NoContent:
    """Marker result type: the response body is ignored and ``None`` returned."""


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclasses.dataclass(frozen=True)
class CallDescriptor:
    """One categorized outbound call attempt."""
    url: str
    method: str
    body: Any
    result_type: Any
    api_type: ApiType
    provider: str
    operation: str
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    user_id: int | str | None = None
    project_id: int | str | None = None
    additional_data: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", _frozen(self.headers))
        object.__setattr__(self, "additional_data", _frozen(self.additional_data))


@dataclasses.dataclass(frozen=True)
class UncategorizedRequest:
    """An outbound call whose purpose has not been classified yet."""
    url: str
    method: str
    body: Any
    result_type: Any
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", _frozen(self.headers))


__all__ = ["CallDescriptor", "NoContent", "UncategorizedRequest"]
