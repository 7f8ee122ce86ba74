"""
Event system for the crazyeights engine.

This package provides the event bus that transitions and the engine publish
to, and that presentation layers subscribe to.
"""

from crazyeights.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
