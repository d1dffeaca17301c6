"""Observability – tagging of outbound calls to external APIs."""
from extcall.kernel.types import ApiType
from extcall.observability.external_api.logger import CallScope, ExternalApiLogger

__all__ = ["ApiType", "CallScope", "ExternalApiLogger"]
