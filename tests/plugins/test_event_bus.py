"""Tests for EventBus — synchronous lifecycle dispatch."""

from __future__ import annotations

from typing import Any

from ordercart.plugins.event_bus import EventBus
from ordercart.plugins.hookspecs import hookimpl
from ordercart.plugins.manager import PluginManager


class RecordingPlugin:
    """Plugin that records all hook calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @hookimpl
    def post_order_submit(self, order_id: str, user_id: str, total: str, line_count: int) -> None:
        self.calls.append(
            (
                "post_order_submit",
                {"order_id": order_id, "user_id": user_id, "total": total, "line_count": line_count},
            )
        )


class FailingPlugin:
    @hookimpl
    def post_cart_change(self, action: str, item_id: int, quantity: int) -> None:
        raise ValueError("cart hook broke")


def _bus(*plugins: object) -> EventBus:
    pm = PluginManager()
    for plugin in plugins:
        pm.register_plugin(plugin)
    return EventBus(pm)


PAYLOAD = {"order_id": "o-1", "user_id": "alice", "total": "9.50", "line_count": 1}


class TestDispatch:
    def test_calls_plugin(self) -> None:
        plugin = RecordingPlugin()
        assert _bus(plugin).dispatch("post_order_submit", PAYLOAD) == []
        assert plugin.calls == [("post_order_submit", PAYLOAD)]

    def test_failure_returned_not_raised(self) -> None:
        bus = _bus(FailingPlugin())
        failures = bus.dispatch("post_cart_change", {"action": "add", "item_id": 1, "quantity": 1})
        assert failures == ["cart hook broke"]

    def test_one_failure_does_not_hide_other_hooks(self) -> None:
        recorder = RecordingPlugin()
        bus = _bus(FailingPlugin(), recorder)
        bus.dispatch("post_cart_change", {"action": "add", "item_id": 1, "quantity": 1})
        assert bus.dispatch("post_order_submit", PAYLOAD) == []
        assert len(recorder.calls) == 1

    def test_unknown_hook_is_ignored(self) -> None:
        assert _bus().dispatch("post_nothing", {}) == []

    def test_no_plugins(self) -> None:
        assert _bus().dispatch("post_catalog_load", {"item_count": 2, "ok": True}) == []
