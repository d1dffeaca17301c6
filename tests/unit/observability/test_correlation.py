"""Unit tests for CallContext, CallContextHolder and call ids."""

from __future__ import annotations

import asyncio
import re
import threading
import time

import pytest

from extcall.kernel.types import ApiType
from extcall.observability.correlation import CallContext, CallContextHolder, generate_call_id
from extcall.observability.correlation.ids import to_base36


def _ctx(call_id: str = "cid", provider: str = "DeepL") -> CallContext:
    return CallContext(
        call_id=call_id,
        api_type=ApiType.MACHINE_TRANSLATION,
        provider=provider,
        operation="translate",
    )


class TestCallIds:
    def test_format(self) -> None:
        assert re.fullmatch(r"[0-9a-z]+-[0-9a-z]{1,4}", generate_call_id())

    def test_time_component_is_current_millis(self) -> None:
        before = to_base36(time.time_ns() // 1_000_000)
        prefix = generate_call_id().split("-")[0]
        assert len(prefix) == len(before)
        assert int(prefix, 36) >= int(before, 36)

    def test_practically_unique(self) -> None:
        ids = {generate_call_id() for _ in range(200)}
        assert len(ids) > 190

    def test_base36(self) -> None:
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"
        with pytest.raises(ValueError):
            to_base36(-1)


class TestCallContext:
    def test_log_fields_minimal(self) -> None:
        assert _ctx().as_log_fields() == {
            "call_id": "cid",
            "api_type": "MACHINE_TRANSLATION",
            "api_provider": "DeepL",
            "operation": "translate",
        }

    def test_log_fields_with_ids(self) -> None:
        ctx = CallContext("c", ApiType.WEBHOOK, "Slack", "notify", user_id=7, project_id=42)
        fields = ctx.as_log_fields()
        assert fields["user_id"] == 7
        assert fields["project_id"] == 42

    def test_is_frozen(self) -> None:
        with pytest.raises((AttributeError, TypeError)):
            _ctx().provider = "x"  # type: ignore[misc]


class TestCallContextHolder:
    def test_absent_by_default(self) -> None:
        assert CallContextHolder.get() is None

    def test_activate_and_reset(self) -> None:
        ctx = _ctx()
        with CallContextHolder.activate(ctx) as active:
            assert active is ctx
            assert CallContextHolder.get() is ctx
        assert CallContextHolder.get() is None

    def test_reset_when_block_raises(self) -> None:
        with pytest.raises(RuntimeError):
            with CallContextHolder.activate(_ctx()):
                raise RuntimeError("boom")
        assert CallContextHolder.get() is None

    def test_nested_restores_outer(self) -> None:
        outer, inner = _ctx("outer"), _ctx("inner")
        with CallContextHolder.activate(outer):
            with CallContextHolder.activate(inner):
                assert CallContextHolder.get() is inner
            assert CallContextHolder.get() is outer
        assert CallContextHolder.get() is None

    def test_isolated_across_tasks(self) -> None:
        results: list[str | None] = []

        async def worker(cid: str) -> None:
            with CallContextHolder.activate(_ctx(cid)):
                await asyncio.sleep(0)
                stored = CallContextHolder.get()
                results.append(stored.call_id if stored else None)

        async def run() -> None:
            await asyncio.gather(worker("id-1"), worker("id-2"))

        asyncio.run(run())
        assert sorted(results) == ["id-1", "id-2"]

    def test_isolated_across_threads(self) -> None:
        seen: dict[str, str | None] = {}
        barrier = threading.Barrier(2)

        def worker(cid: str) -> None:
            with CallContextHolder.activate(_ctx(cid)):
                barrier.wait()
                stored = CallContextHolder.get()
                seen[cid] = stored.call_id if stored else None

        threads = [threading.Thread(target=worker, args=(c,)) for c in ("t-1", "t-2")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert seen == {"t-1": "t-1", "t-2": "t-2"}
        assert CallContextHolder.get() is None
