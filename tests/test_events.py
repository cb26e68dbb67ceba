from __future__ import annotations

import asyncio
import threading

from solution_wheel.core.events import (
    Event,
    EventBus,
    EventType,
    speech_error_event,
    speech_result_event,
    tick_event,
)


def test_subscribe_emit_unsubscribe() -> None:
    bus = EventBus()
    received: list[Event] = []
    unsubscribe = bus.subscribe(EventType.SPIN_REQUESTED, received.append)

    bus.emit(Event(EventType.SPIN_REQUESTED))
    unsubscribe()
    bus.emit(Event(EventType.SPIN_REQUESTED))

    assert len(received) == 1


def test_failing_handler_does_not_stop_dispatch() -> None:
    bus = EventBus()
    received: list[Event] = []

    def broken(event: Event) -> None:
        raise RuntimeError("handler failure")

    bus.subscribe(EventType.TICK, broken)
    bus.subscribe(EventType.TICK, received.append)
    bus.emit(tick_event(0.016, 1))

    assert received[0].data == {"delta": 0.016, "frame": 1}


def test_queued_events_wait_for_process_queue() -> None:
    bus = EventBus()
    texts: list[str] = []
    bus.subscribe(EventType.SPEECH_RESULT, lambda e: texts.append(e.data["text"]))

    bus.post_threadsafe(speech_result_event("שלום"))
    assert texts == []
    assert bus.pending == 1

    asyncio.run(bus.process_queue())
    assert texts == ["שלום"]
    assert bus.pending == 0


def test_post_threadsafe_from_worker_thread() -> None:
    bus = EventBus()
    messages: list[str] = []
    bus.subscribe(EventType.SPEECH_ERROR, lambda e: messages.append(e.data["message"]))

    async def scenario() -> None:
        bus.bind_loop(asyncio.get_running_loop())
        worker = threading.Thread(target=bus.post_threadsafe, args=(speech_error_event("Network error"),))
        worker.start()
        worker.join()
        await asyncio.sleep(0)
        await bus.process_queue()

    asyncio.run(scenario())
    assert messages == ["Network error"]


def test_handler_may_unsubscribe_while_dispatching() -> None:
    bus = EventBus()
    seen: list[str] = []
    unsubscribers = []

    def once(event: Event) -> None:
        seen.append("once")
        unsubscribers[0]()

    unsubscribers.append(bus.subscribe("custom", once))
    bus.subscribe("custom", lambda event: seen.append("always"))

    bus.emit(Event("custom"))
    bus.emit(Event("custom"))

    assert seen == ["once", "always", "always"]
