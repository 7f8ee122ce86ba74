"""
Event system for the crazyeights engine.

Transitions and the engine publish what happened on a process-wide bus so a
presentation layer can animate, log, or narrate without being wired into the
rules themselves. Every payload is stamped with the game id and generation
last set through ``set_context``.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("crazyeights.events")

EventKey = Union[str, Enum]


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


@dataclass(eq=False)
class _Handler:
    callback: Callable
    priority: int
    once: bool = False


def _event_name(event_type: EventKey) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


def _insert(handlers: List[_Handler], handler: _Handler) -> None:
    # Higher priority first; equal priorities keep subscription order
    for i, existing in enumerate(handlers):
        if existing.priority < handler.priority:
            handlers.insert(i, handler)
            return
    handlers.append(handler)


class EventEmitter:
    """
    Thread-safe event emitter.

    Handlers for a named event receive the payload dict. Handlers registered
    with ``on_any`` receive an ``(event_name, payload)`` tuple. Exceptions
    raised by handlers are logged and do not reach the emitter.
    """

    def __init__(self):
        self._listeners: Dict[str, List[_Handler]] = defaultdict(list)
        self._global_listeners: List[_Handler] = []
        self._listener_lock = threading.RLock()

        self._game_id: Optional[str] = None
        self._generation: Optional[int] = None

    def set_context(self, game_id: str, generation: int) -> None:
        """
        Stamp subsequent payloads with a game id and generation.

        Args:
            game_id: Identifier of the current game
            generation: Deal counter of that game
        """
        self._game_id = game_id
        self._generation = generation

    def _subscribe(
        self, handlers: List[_Handler], handler: _Handler
    ) -> Callable[[], None]:
        with self._listener_lock:
            _insert(handlers, handler)

        def unsubscribe():
            with self._listener_lock:
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def on(
        self,
        event_type: EventKey,
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Event name or enum member
            callback: Called with the payload dict
            priority: Handlers with higher priority run first

        Returns:
            A function that removes this subscription
        """
        return self._subscribe(
            self._listeners[_event_name(event_type)],
            _Handler(callback, priority.value),
        )

    def once(
        self,
        event_type: EventKey,
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable[[], None]:
        """Subscribe to the next occurrence of an event type only."""
        return self._subscribe(
            self._listeners[_event_name(event_type)],
            _Handler(callback, priority.value, once=True),
        )

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable[[], None]:
        """
        Subscribe to every event.

        Args:
            callback: Called with an ``(event_name, payload)`` tuple
            priority: Handlers with higher priority run first

        Returns:
            A function that removes this subscription
        """
        return self._subscribe(self._global_listeners, _Handler(callback, priority.value))

    def _with_context(self, data: Dict[str, Any]) -> Dict[str, Any]:
        context = {}
        if self._game_id is not None:
            context["context_game_id"] = self._game_id
        if self._generation is not None:
            context["context_generation"] = self._generation
        return {**context, **data} if context else data

    def _collect(self, name: str, data: Dict[str, Any]) -> List[Tuple[Callable, Any]]:
        with self._listener_lock:
            named = self._listeners.get(name, [])
            calls = [(handler.callback, data) for handler in named]
            # Drop one-shot handlers before calling them so they fire once
            named[:] = [handler for handler in named if not handler.once]
            calls.extend(
                (handler.callback, (name, data)) for handler in self._global_listeners
            )
        return calls

    def emit(self, event_type: EventKey, data: Dict[str, Any]) -> None:
        """
        Deliver an event to its handlers, then to the catch-all handlers.

        Args:
            event_type: Event name or enum member
            data: Payload for the handlers
        """
        name = _event_name(event_type)
        for callback, args in self._collect(name, self._with_context(data)):
            try:
                callback(args)
            except Exception as e:
                logger.error("Error in event handler for %s: %s", name, e, exc_info=True)

    async def emit_async(self, event_type: EventKey, data: Dict[str, Any]) -> None:
        """Emit from a coroutine. Handlers still run synchronously, in order."""
        self.emit(event_type, data)

    def remove_all_listeners(self, event_type: Optional[EventKey] = None) -> None:
        """
        Remove the handlers of one event type, or every handler.

        Args:
            event_type: Event to clear; None clears named and catch-all handlers
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners.pop(_event_name(event_type), None)


class EventBus:
    """
    Process-wide event emitter.

    Transitions are pure functions of state, so they publish here rather than
    on an emitter passed in by the caller.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """
    Event types published by the crazyeights transitions and engine.
    """

    # Engine lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Game lifecycle
    GAME_CREATED = "game_created"
    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"

    # Moves
    CARD_PLAYED = "card_played"
    CARD_DRAWN = "card_drawn"
    SUIT_CHOSEN = "suit_chosen"
    TURN_SKIPPED = "turn_skipped"

    # Engine flow
    PLAYER_DECISION_NEEDED = "player_decision_needed"
    STALE_MOVE_DISCARDED = "stale_move_discarded"
    ERROR = "error"
