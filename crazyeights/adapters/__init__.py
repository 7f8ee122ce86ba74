"""
Platform adapters for the crazyeights engine.

This package provides adapters that translate between the core game engine
and the presentation layer.
"""

from crazyeights.adapters.base import PlatformAdapter
from crazyeights.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "DummyAdapter"]
