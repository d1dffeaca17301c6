"""Observability – correlation context."""
from extcall.observability.correlation.context import CallContext, CallContextHolder
from extcall.observability.correlation.ids import generate_call_id

__all__ = ["CallContext", "CallContextHolder", "generate_call_id"]
