"""
Heuristic computer opponent for Crazy Eights.

The policy plays a random matching non-wild card when it has one, keeps its
eights for when nothing else fits, declares the suit it holds most of, and
draws otherwise.
"""

from collections import Counter
from typing import Iterable, Optional
import logging
import random

from crazyeights.common.card import Card, Suit
from crazyeights.game.constants import DEFAULT_WILD_SUIT, SUIT_ORDER
from crazyeights.game.rules import playable_cards
from crazyeights.game.state import GameState, GameStatus, Seat
from crazyeights.game.transitions import StateTransitionEngine

logger = logging.getLogger(__name__)


class OpponentPolicy:
    """
    Simple decision procedure for one seat.

    Attributes:
        seat: The seat this policy plays for
        rng: Random source for picking among matching cards
    """

    def __init__(
        self, seat: Seat = Seat.OPPONENT, rng: Optional[random.Random] = None
    ):
        self.seat = seat
        self.rng = rng or random

    def select_card(self, state: GameState) -> Optional[Card]:
        """
        Pick the card to play, or None when the seat has to draw.

        Args:
            state: Current game state

        Returns:
            A playable card from the seat's hand, or None
        """
        playable = playable_cards(
            state.hand_for(self.seat), state.discard_top, state.active_suit
        )
        if not playable:
            return None

        non_wild = [card for card in playable if not card.is_wild]
        if non_wild:
            return self.rng.choice(non_wild)
        return playable[0]

    @staticmethod
    def select_suit(hand: Iterable[Card]) -> Suit:
        """
        Pick the suit held most often, ties broken by ``SUIT_ORDER``.

        Args:
            hand: Cards left after the eight was played

        Returns:
            The suit to declare
        """
        counts = Counter(card.suit for card in hand)
        if not counts:
            return DEFAULT_WILD_SUIT
        # max() keeps the first of equal maxima
        return max(SUIT_ORDER, key=lambda suit: counts[suit])

    def take_turn(self, state: GameState) -> GameState:
        """
        Make a full move for the seat: play (and declare) or draw.

        Args:
            state: Current game state

        Returns:
            New game state, or ``state`` itself if it is not this seat's turn
        """
        if state.status != GameStatus.PLAYING or state.turn != self.seat:
            return state

        card = self.select_card(state)
        if card is None:
            logger.debug("%s has no playable card, drawing", self.seat.value)
            return StateTransitionEngine.draw_card(state, self.seat)

        new_state = StateTransitionEngine.play_card(state, card.id, self.seat)
        if new_state.status == GameStatus.CHOOSING_SUIT:
            suit = self.select_suit(new_state.hand_for(self.seat))
            logger.debug("%s played %s and declares %s", self.seat.value, card, suit.value)
            new_state = StateTransitionEngine.choose_suit(new_state, suit, self.seat)
        return new_state
