"""
Game engine for the crazyeights package.

This package provides the engine that drives a game between the human player,
whose moves arrive through a platform adapter, and the computer opponent.
"""

from crazyeights.engine.base import GameEngine
from crazyeights.engine.crazy_eights import CrazyEightsEngine

__all__ = ["GameEngine", "CrazyEightsEngine"]
