"""
Tests for the event emitter and the process-wide bus.
"""

import threading
from unittest.mock import MagicMock

import pytest

from crazyeights.events import EventEmitter, EventBus, EngineEventType, EventPriority


@pytest.fixture
def emitter():
    return EventEmitter()


def test_new_emitter_has_no_context(emitter):
    callback = MagicMock()
    emitter.on("ping", callback)

    emitter.emit("ping", {"value": 1})

    callback.assert_called_once_with({"value": 1})


def test_context_is_stamped_on_payloads(emitter):
    callback = MagicMock()
    emitter.on("ping", callback)

    emitter.set_context("game-123", 4)
    emitter.emit("ping", {"value": "test"})

    assert callback.call_args[0][0] == {
        "context_game_id": "game-123",
        "context_generation": 4,
        "value": "test",
    }


def test_enum_and_name_address_the_same_event(emitter):
    callback = MagicMock()
    emitter.on(EngineEventType.CARD_PLAYED, callback)

    emitter.emit("CARD_PLAYED", {"card": "8-clubs"})
    emitter.emit(EngineEventType.CARD_PLAYED, {"card": "5-hearts"})

    assert [c[0][0]["card"] for c in callback.call_args_list] == ["8-clubs", "5-hearts"]


def test_unsubscribe(emitter):
    callback = MagicMock()
    unsubscribe = emitter.on("ping", callback)

    emitter.emit("ping", {})
    unsubscribe()
    emitter.emit("ping", {})
    # A second call is harmless
    unsubscribe()

    assert callback.call_count == 1


def test_once_fires_a_single_time(emitter):
    callback = MagicMock()
    emitter.once(EngineEventType.GAME_ENDED, callback)

    emitter.emit(EngineEventType.GAME_ENDED, {"winner": "player"})
    emitter.emit(EngineEventType.GAME_ENDED, {"winner": "opponent"})

    callback.assert_called_once_with({"winner": "player"})


def test_once_can_be_cancelled(emitter):
    callback = MagicMock()
    unsubscribe = emitter.once("ping", callback)

    unsubscribe()
    emitter.emit("ping", {})

    callback.assert_not_called()


def test_on_any_receives_name_and_payload(emitter):
    seen = []
    emitter.on_any(seen.append)

    emitter.emit(EngineEventType.CARD_DRAWN, {"seat": "player"})
    emitter.emit("custom", {"x": 1})

    assert seen == [("CARD_DRAWN", {"seat": "player"}), ("custom", {"x": 1})]


def test_named_handlers_run_before_catch_all(emitter):
    order = []
    emitter.on_any(lambda event: order.append("any"))
    emitter.on("ping", lambda data: order.append("named"))

    emitter.emit("ping", {})

    assert order == ["named", "any"]


def test_priority_order(emitter):
    order = []
    emitter.on("ping", lambda d: order.append("low"), EventPriority.LOW)
    emitter.on("ping", lambda d: order.append("normal-1"))
    emitter.on("ping", lambda d: order.append("critical"), EventPriority.CRITICAL)
    emitter.on("ping", lambda d: order.append("normal-2"))
    emitter.on("ping", lambda d: order.append("high"), EventPriority.HIGH)

    emitter.emit("ping", {})

    assert order == ["critical", "high", "normal-1", "normal-2", "low"]


def test_remove_all_listeners_for_one_event(emitter):
    first = MagicMock()
    second = MagicMock()
    emitter.on("first", first)
    emitter.on("second", second)

    emitter.remove_all_listeners("first")
    emitter.emit("first", {})
    emitter.emit("second", {})

    first.assert_not_called()
    second.assert_called_once()


def test_remove_all_listeners(emitter):
    named = MagicMock()
    catch_all = MagicMock()
    emitter.on(EngineEventType.ERROR, named)
    emitter.on_any(catch_all)

    emitter.remove_all_listeners()
    emitter.emit(EngineEventType.ERROR, {})

    named.assert_not_called()
    catch_all.assert_not_called()


def test_handler_errors_are_logged_not_raised(emitter, caplog):
    def broken(data):
        raise ValueError("boom")

    after = MagicMock()
    emitter.on("ping", broken)
    emitter.on("ping", after)

    emitter.emit("ping", {})

    after.assert_called_once()
    assert "Error in event handler for ping" in caplog.text


def test_event_bus_is_a_singleton():
    bus = EventBus.get_instance()

    assert bus is EventBus.get_instance()
    assert isinstance(bus, EventEmitter)


def test_concurrent_emits(emitter):
    count = {"value": 0}
    lock = threading.Lock()

    def increment(data):
        with lock:
            count["value"] += 1

    emitter.on("ping", increment)
    threads = [threading.Thread(target=emitter.emit, args=("ping", {})) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert count["value"] == 10


def test_concurrent_once_fires_once(emitter):
    callback = MagicMock()
    emitter.once("ping", callback)

    threads = [threading.Thread(target=emitter.emit, args=("ping", {})) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert callback.call_count == 1


@pytest.mark.asyncio
async def test_emit_async(emitter):
    callback = MagicMock()
    emitter.on("ping", callback)

    await emitter.emit_async("ping", {"id": 1})

    callback.assert_called_once_with({"id": 1})
