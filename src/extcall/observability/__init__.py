"""Observability – correlation context, structured logging and the external API logger."""
