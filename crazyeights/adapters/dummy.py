"""
Dummy adapter for the crazyeights engine, used for testing and simulation.

This module provides a non-interactive adapter that can be used for automated
testing, simulations, and benchmarks where no user interaction is needed.
"""

from typing import List, Dict, Any, Optional, Union, Callable
from enum import Enum

from crazyeights.adapters.base import PlatformAdapter
from crazyeights.game.constants import SUIT_ORDER
from crazyeights.game.state import ActionType, Move


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    Moves come from a scripted list first, then from an optional strategy
    function, and finally from a fixed fallback: play the first playable
    card, otherwise draw, and declare the first suit in canonical order.
    """

    def __init__(
        self,
        auto_moves: Optional[List[Move]] = None,
        strategy_function: Optional[
            Callable[[Dict[ActionType, List[Any]]], Move]
        ] = None,
        verbose: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            auto_moves: Optional list of moves to return in sequence
            strategy_function: Optional function that takes the valid actions
                               and returns a move
            verbose: Whether to print events to stdout (useful for debugging)
        """
        self.auto_moves = list(auto_moves or [])
        self.strategy_function = strategy_function
        self.verbose = verbose

        self.move_index = 0

        # Track events for later inspection
        self.events = []

        # Track rendered states for testing
        self.rendered_states = []

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Store the game state for later inspection.

        Args:
            state: The current game state
        """
        self.rendered_states.append(state)

        if self.verbose:
            print("\n=== Game State ===")
            print(f"Status: {state.get('status')}  Turn: {state.get('turn')}")
            print(
                f"Discard: {state.get('discard_top')}  "
                f"Declared suit: {state.get('active_suit')}  "
                f"Draw pile: {state.get('draw_pile_count')}"
            )
            print(f"Opponent holds {state.get('opponent_hand_size')} cards")
            print(f"Hand: {[card['card'] for card in state.get('player_hand', [])]}")
            print("==================\n")

    async def request_player_action(
        self, valid_actions: Dict[ActionType, List[Any]]
    ) -> Move:
        """
        Return a scripted move or select one.

        Args:
            valid_actions: Action types mapped to their valid arguments

        Returns:
            A selected move
        """
        selected = None

        if self.move_index < len(self.auto_moves):
            selected = self.auto_moves[self.move_index]
            self.move_index += 1

        if selected is None and self.strategy_function:
            selected = self.strategy_function(valid_actions)

        if selected is None:
            if ActionType.CHOOSE_SUIT in valid_actions:
                suits = valid_actions[ActionType.CHOOSE_SUIT]
                suit = next(s for s in SUIT_ORDER if s in suits)
                selected = Move(ActionType.CHOOSE_SUIT, suit=suit)
            elif valid_actions.get(ActionType.PLAY_CARD):
                selected = Move(
                    ActionType.PLAY_CARD,
                    card_id=valid_actions[ActionType.PLAY_CARD][0],
                )
            else:
                selected = Move(ActionType.DRAW_CARD)

        if self.verbose:
            print(f"Player selects {selected.action.name}")

        return selected

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type

        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
        self.move_index = 0
