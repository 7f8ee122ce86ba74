"""
Immutable state models for the Crazy Eights card game.

This module provides dataclasses for representing the state of a Crazy Eights
game in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from enum import Enum
import uuid
import time

from crazyeights.common.card import Card, Suit


class GameStatus(Enum):
    """Possible statuses of a Crazy Eights game."""

    MENU = "menu"
    WAITING = "waiting"
    PLAYING = "playing"
    CHOOSING_SUIT = "choosing_suit"
    GAME_OVER = "game_over"


class Seat(Enum):
    """The two sides of the table."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Seat":
        """The seat across the table."""
        return Seat.OPPONENT if self is Seat.PLAYER else Seat.PLAYER


class ActionType(Enum):
    """Moves a seat can make."""

    PLAY_CARD = "play_card"
    DRAW_CARD = "draw_card"
    CHOOSE_SUIT = "choose_suit"


@dataclass(frozen=True)
class Move:
    """
    A move requested by a platform adapter.

    Attributes:
        action: What to do
        card_id: Identifier of the card to play (PLAY_CARD only)
        suit: Suit to declare (CHOOSE_SUIT only)
    """

    action: ActionType
    card_id: Optional[str] = None
    suit: Optional[Suit] = None


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the Crazy Eights game state.

    The draw pile and the discard pile are stacks whose top is the last
    element of the list.

    Attributes:
        id: Unique identifier for this game
        generation: Deal counter, bumped by every new game
        draw_pile: Cards still to be drawn
        discard_pile: Cards played so far, initial card first
        player_hand: Cards held by the human player
        opponent_hand: Cards held by the computer
        turn: Seat that may act now
        status: Current status of the game
        winner: Winning seat, or None for a draw (meaningful only when game_over)
        active_suit: Suit declared by the last eight, if any
        timestamp: Time when this state was created
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    generation: int = 0
    draw_pile: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    player_hand: List[Card] = field(default_factory=list)
    opponent_hand: List[Card] = field(default_factory=list)
    turn: Seat = Seat.PLAYER
    status: GameStatus = GameStatus.MENU
    winner: Optional[Seat] = None
    active_suit: Optional[Suit] = None
    timestamp: float = field(default_factory=lambda: time.time())

    @property
    def discard_top(self) -> Optional[Card]:
        """The face-up card, or None before the deal."""
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def draw_pile_count(self) -> int:
        """Get the number of cards left to draw."""
        return len(self.draw_pile)

    @property
    def current_hand(self) -> List[Card]:
        """Hand of the seat whose turn it is."""
        return self.hand_for(self.turn)

    @property
    def is_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    @property
    def is_draw(self) -> bool:
        """True when the game ended with nobody able to move."""
        return self.is_over and self.winner is None

    def hand_for(self, seat: Seat) -> List[Card]:
        """Get the hand held by ``seat``."""
        return self.player_hand if seat == Seat.PLAYER else self.opponent_hand

    def find_card(self, seat: Seat, card_id: str) -> Optional[Card]:
        """Find a card in a seat's hand by identifier."""
        for card in self.hand_for(seat):
            if card.id == card_id:
                return card
        return None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "generation": self.generation,
            "status": self.status.value,
            "turn": self.turn.value,
            "winner": self.winner.value if self.winner else None,
            "active_suit": self.active_suit.value if self.active_suit else None,
            "draw_pile": [card.id for card in self.draw_pile],
            "discard_pile": [card.id for card in self.discard_pile],
            "player_hand": [card.id for card in self.player_hand],
            "opponent_hand": [card.id for card in self.opponent_hand],
            "timestamp": self.timestamp,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        The computer's cards are hidden; only their count is exposed.

        Returns:
            Dictionary in adapter-friendly format
        """
        # Imported here, rules depends on this module
        from crazyeights.game.rules import is_valid_move

        top = self.discard_top
        can_play = self.status == GameStatus.PLAYING and self.turn == Seat.PLAYER
        return {
            "game_id": self.id,
            "status": self.status.value,
            "turn": self.turn.value,
            "winner": self.winner.value if self.winner else None,
            "active_suit": str(self.active_suit) if self.active_suit else None,
            "discard_top": str(top) if top else None,
            "draw_pile_count": self.draw_pile_count,
            "opponent_hand_size": len(self.opponent_hand),
            "player_hand": [
                {
                    "id": card.id,
                    "card": str(card),
                    "playable": bool(
                        can_play
                        and top is not None
                        and is_valid_move(card, top, self.active_suit)
                    ),
                }
                for card in self.player_hand
            ],
        }
