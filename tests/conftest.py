"""Shared fixtures: structlog capture with call-context injection."""
from __future__ import annotations

from typing import Any, Iterator

import pytest
import structlog
from structlog.testing import LogCapture

from extcall.observability.logging import CallContextProcessor


@pytest.fixture
def log_events() -> Iterator[list[dict[str, Any]]]:
    """Capture every structlog event emitted during the test.

    Events pass through :class:`CallContextProcessor` first, so records
    emitted inside a call carry its ``call_id`` and metadata.
    """
    capture = LogCapture()
    structlog.configure(processors=[CallContextProcessor(), capture])
    yield capture.entries
    structlog.reset_defaults()

