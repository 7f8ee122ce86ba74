"""
Crazy Eights engine implementation.

This module provides the CrazyEightsEngine class, which owns the current game
state, applies the human player's moves, renders through a platform adapter
and runs the computer opponent after a pacing delay.
"""

from typing import Dict, Any, List, Optional, Union
from enum import Enum
import asyncio
import logging
import random
import time

from crazyeights.adapters import PlatformAdapter
from crazyeights.common.card import Suit
from crazyeights.engine.base import GameEngine
from crazyeights.events import EngineEventType
from crazyeights.game.constants import SUIT_ORDER
from crazyeights.game.opponent import OpponentPolicy
from crazyeights.game.rules import (
    CardConservationError,
    playable_cards,
    verify_card_conservation,
)
from crazyeights.game.state import ActionType, GameState, GameStatus, Move, Seat
from crazyeights.game.transitions import StateTransitionEngine

logger = logging.getLogger(__name__)


class CrazyEightsEngine(GameEngine):
    """
    Engine implementation for Crazy Eights, human against computer.

    The opponent's move is scheduled as an asyncio task that remembers the
    generation of the game it was scheduled for. When it fires after a new
    game has been dealt it discards itself instead of touching the new game.
    """

    def __init__(self, adapter: PlatformAdapter, config: Dict[str, Any] = None):
        """
        Initialize the Crazy Eights engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
        """
        super().__init__(adapter, config)

        # Apply default configuration
        default_config = {
            "opponent_delay": 1.5,  # seconds before the computer moves
            "verify_invariants": __debug__,
            "seed": None,
        }

        # Merge with provided config
        if config:
            default_config.update(config)

        self.config = default_config

        seed = self.config.get("seed")
        self.rng = random.Random(seed) if seed is not None else None
        self.policy = OpponentPolicy(Seat.OPPONENT, self.rng)

        self.state = GameState()
        self._opponent_task: Optional[asyncio.Task] = None
        self._pending_events = []
        self._unsubscribe = None

    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await super().initialize()

        # Collect transition events so they can be forwarded to the adapter
        if self._unsubscribe is None:
            self._unsubscribe = self.event_bus.on_any(self._pending_events.append)

        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": "crazy_eights",
                "config": self.config,
                "timestamp": time.time(),
            },
        )

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        if self._opponent_task and not self._opponent_task.done():
            self._opponent_task.cancel()
            try:
                await self._opponent_task
            except asyncio.CancelledError:
                pass

        self.event_bus.emit(EngineEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        await super().shutdown()

    async def start_game(self) -> None:
        """
        Deal a new game, replacing whatever game was in progress.
        """
        self.state = StateTransitionEngine.new_game(self.state, self.rng)
        self.event_bus.set_context(self.state.id, self.state.generation)
        self._check_invariants()

        self.event_bus.emit(
            EngineEventType.GAME_STARTED,
            {
                "game_id": self.state.id,
                "generation": self.state.generation,
                "timestamp": time.time(),
            },
        )

        await self._after_transition()

    async def play_card(self, card_id: str) -> bool:
        """
        Play a card from the human player's hand.

        Args:
            card_id: Identifier of the card to play

        Returns:
            True if the card was played
        """
        return await self._apply(
            StateTransitionEngine.play_card(self.state, card_id, Seat.PLAYER)
        )

    async def draw_card(self) -> bool:
        """
        Draw a card for the human player (or skip if the pile is empty).

        Returns:
            True if the turn passed
        """
        return await self._apply(StateTransitionEngine.draw_card(self.state, Seat.PLAYER))

    async def choose_suit(self, suit: Suit) -> bool:
        """
        Declare the suit after the human player played an eight.

        Args:
            suit: Suit to declare

        Returns:
            True if the suit was accepted
        """
        return await self._apply(
            StateTransitionEngine.choose_suit(self.state, suit, Seat.PLAYER)
        )

    async def execute_player_action(
        self, action: Union[str, ActionType], **kwargs
    ) -> bool:
        """
        Execute a human player action.

        Args:
            action: Action to perform (play_card, draw_card, choose_suit)
            **kwargs: ``card_id`` for play_card, ``suit`` for choose_suit

        Returns:
            True if the action changed the game state
        """
        if isinstance(action, str):
            try:
                action = ActionType(action.lower())
            except ValueError:
                raise ValueError(f"Unknown action: {action}") from None

        if action == ActionType.PLAY_CARD:
            card_id = kwargs.get("card_id")
            if not card_id:
                raise ValueError("Missing card_id")
            return await self.play_card(card_id)

        if action == ActionType.DRAW_CARD:
            return await self.draw_card()

        if action == ActionType.CHOOSE_SUIT:
            suit = kwargs.get("suit")
            if isinstance(suit, str):
                suit = Suit(suit.lower())
            if not isinstance(suit, Suit):
                raise ValueError("Missing suit")
            return await self.choose_suit(suit)

        raise ValueError(f"Unknown action: {action}")

    async def execute_move(self, move: Move) -> bool:
        """Execute a move returned by the adapter."""
        return await self.execute_player_action(
            move.action, card_id=move.card_id, suit=move.suit
        )

    def get_valid_actions(self) -> Dict[ActionType, List[Any]]:
        """
        Get the moves open to the human player.

        Returns:
            Dictionary mapping action types to lists of valid parameters
        """
        if self.state.turn != Seat.PLAYER:
            return {}

        if self.state.status == GameStatus.CHOOSING_SUIT:
            return {ActionType.CHOOSE_SUIT: list(SUIT_ORDER)}

        if self.state.status != GameStatus.PLAYING:
            return {}

        valid_actions = {}
        playable = playable_cards(
            self.state.player_hand, self.state.discard_top, self.state.active_suit
        )
        if playable:
            valid_actions[ActionType.PLAY_CARD] = [card.id for card in playable]

        # Drawing is always allowed; on an empty pile it skips the turn
        valid_actions[ActionType.DRAW_CARD] = []
        return valid_actions

    async def play_turn(self) -> bool:
        """
        Ask the adapter for the human player's move and apply it.

        Returns:
            True if the move changed the game state
        """
        valid_actions = self.get_valid_actions()
        if not valid_actions:
            return False

        move = await self.adapter.request_player_action(valid_actions)
        return await self.execute_move(move)

    async def wait_for_opponent(self) -> None:
        """
        Wait until the scheduled computer move has run.

        If it is the computer's turn and nothing is scheduled, a move is
        scheduled first.
        """
        if self._opponent_to_move() and (
            self._opponent_task is None or self._opponent_task.done()
        ):
            self._schedule_opponent_move()

        if self._opponent_task is not None and not self._opponent_task.done():
            await self._opponent_task

    async def run_game(self, max_turns: int = 500) -> GameState:
        """
        Play a game to the end, taking human moves from the adapter.

        Args:
            max_turns: Upper bound on the number of moves by either side

        Returns:
            The final game state
        """
        if self.state.status in (GameStatus.MENU, GameStatus.GAME_OVER):
            await self.start_game()

        turns = 0
        while not self.state.is_over and turns < max_turns:
            if self.state.turn == Seat.OPPONENT:
                await self.wait_for_opponent()
            else:
                await self.play_turn()
            turns += 1

        if not self.state.is_over:
            logger.warning(
                "Game %s still running after %d turns", self.state.id, max_turns
            )
        return self.state

    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        adapter_state = self.state.to_adapter_format()
        await self.adapter.render_game_state(adapter_state)

    def is_game_over(self) -> bool:
        """
        Check if the game is over.

        Returns:
            True if the game is over, False otherwise
        """
        return self.state.is_over

    def get_winner(self) -> Optional[Seat]:
        """
        Get the winning seat.

        Returns:
            The winner, or None if the game is a draw or not over
        """
        if not self.is_game_over():
            return None
        return self.state.winner

    async def _apply(self, new_state: GameState) -> bool:
        """Install a transition result; False if the transition was a no-op."""
        if new_state is self.state:
            return False

        self.state = new_state
        self._check_invariants()
        await self._after_transition()
        return True

    async def _after_transition(self) -> None:
        await self._flush_events()
        await self.render_state()

        if self.state.is_over:
            return

        if self._opponent_to_move():
            self._schedule_opponent_move()
        elif self.state.turn == Seat.PLAYER:
            await self._notify(
                EngineEventType.PLAYER_DECISION_NEEDED,
                {
                    "game_id": self.state.id,
                    "status": self.state.status.value,
                    "valid_actions": {
                        action.value: [
                            value.value if isinstance(value, Enum) else value
                            for value in values
                        ]
                        for action, values in self.get_valid_actions().items()
                    },
                    "timestamp": time.time(),
                },
            )

    def _opponent_to_move(self) -> bool:
        return (
            self.state.status == GameStatus.PLAYING
            and self.state.turn == Seat.OPPONENT
        )

    def _schedule_opponent_move(self) -> None:
        generation = self.state.generation
        self._opponent_task = asyncio.create_task(self._opponent_move(generation))

    async def _opponent_move(self, generation: int) -> None:
        """Run the computer's move for the game of ``generation``."""
        await asyncio.sleep(self.config.get("opponent_delay", 0))

        if self.state.generation != generation or not self._opponent_to_move():
            logger.info(
                "Discarding opponent move scheduled for generation %d "
                "(current generation %d, status %s)",
                generation,
                self.state.generation,
                self.state.status.value,
            )
            await self._notify(
                EngineEventType.STALE_MOVE_DISCARDED,
                {
                    "scheduled_generation": generation,
                    "current_generation": self.state.generation,
                    "timestamp": time.time(),
                },
            )
            return

        await self._apply(self.policy.take_turn(self.state))

    def _check_invariants(self) -> None:
        if not self.config.get("verify_invariants"):
            return
        try:
            verify_card_conservation(self.state)
        except CardConservationError as e:
            logger.error("Invariant violation: %s", e)
            self.event_bus.emit(
                EngineEventType.ERROR,
                {"game_id": self.state.id, "error": str(e), "timestamp": time.time()},
            )
            raise

    async def _notify(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        """Emit an engine event and forward it to the adapter."""
        self.event_bus.emit(event_type, data)
        await self._flush_events()

    async def _flush_events(self) -> None:
        """Forward events collected from the bus to the adapter."""
        while self._pending_events:
            event_type, data = self._pending_events.pop(0)
            await self.adapter.notify_game_event(event_type, data)
