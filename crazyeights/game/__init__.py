"""
Crazy Eights rules module.

This module provides the state models, move validation, pure state
transitions and the computer opponent for Crazy Eights.
"""

from crazyeights.game.state import (
    GameState as GameState,
    GameStatus as GameStatus,
    Seat as Seat,
    ActionType as ActionType,
    Move as Move,
)
from crazyeights.game.rules import (
    CardConservationError as CardConservationError,
    is_valid_move as is_valid_move,
    playable_cards as playable_cards,
    verify_card_conservation as verify_card_conservation,
)
from crazyeights.game.transitions import (
    StateTransitionEngine as StateTransitionEngine,
    new_game as new_game,
    play_card as play_card,
    draw_card as draw_card,
    choose_suit as choose_suit,
)
from crazyeights.game.opponent import OpponentPolicy as OpponentPolicy

__all__ = [
    "GameState",
    "GameStatus",
    "Seat",
    "ActionType",
    "Move",
    "CardConservationError",
    "is_valid_move",
    "playable_cards",
    "verify_card_conservation",
    "StateTransitionEngine",
    "new_game",
    "play_card",
    "draw_card",
    "choose_suit",
    "OpponentPolicy",
]
