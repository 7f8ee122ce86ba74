"""
Base adapter interface for the crazyeights engine.

This module defines the interface that platform-specific adapters must implement
to interact with the crazyeights engine.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Union
import asyncio
from enum import Enum

from crazyeights.game.state import ActionType, Move


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    The adapter is the presentation collaborator: it renders the state the
    engine hands it, reports game events to the user, and turns user input
    into moves. Everything visual lives behind this interface.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the platform.

        Args:
            state: The state in adapter format (see GameState.to_adapter_format)
        """
        pass

    @abstractmethod
    async def request_player_action(
        self, valid_actions: Dict[ActionType, List[Any]]
    ) -> Move:
        """
        Ask the human player for a move.

        Args:
            valid_actions: Action types mapped to their valid arguments
                           (card ids for PLAY_CARD, suits for CHOOSE_SUIT)

        Returns:
            The move the player chose
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the adapter is first connected to the engine.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.

        This method is called when the engine is shutting down.
        """
        pass

    def get_sync_methods(self) -> Dict[str, callable]:
        """
        Get a dictionary of synchronous methods for platforms that don't support async.

        Returns:
            A dictionary mapping method names to synchronous wrapper functions
        """
        methods = {}

        def wrap_async(async_func):
            def sync_wrapper(*args, **kwargs):
                loop = asyncio.new_event_loop()
                try:
                    return loop.run_until_complete(async_func(*args, **kwargs))
                finally:
                    loop.close()

            return sync_wrapper

        for name in [
            "render_game_state",
            "request_player_action",
            "notify_game_event",
            "initialize",
            "shutdown",
        ]:
            if hasattr(self, name):
                methods[name] = wrap_async(getattr(self, name))

        return methods
