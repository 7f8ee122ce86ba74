"""
Move legality and bookkeeping checks for Crazy Eights.
"""

from collections import Counter
from typing import Iterable, List, Optional

from crazyeights.common.card import Card, Suit
from crazyeights.common.deck import create_deck
from crazyeights.game.constants import WILD_RANK
from crazyeights.game.state import GameState


class CardConservationError(Exception):
    """Raised when the piles and hands no longer partition the deck."""


def is_valid_move(card: Card, top_card: Card, active_suit: Optional[Suit]) -> bool:
    """
    Check whether ``card`` may be played on ``top_card``.

    Eights are always playable. Otherwise the card must match the rank of the
    top card, or the declared suit when one is active (the top card's own
    suit when none is).
    """
    if card.rank == WILD_RANK:
        return True

    target_suit = active_suit if active_suit is not None else top_card.suit
    return card.suit == target_suit or card.rank == top_card.rank


def playable_cards(
    hand: Iterable[Card], top_card: Optional[Card], active_suit: Optional[Suit]
) -> List[Card]:
    """Cards in ``hand`` that may be played, in hand order."""
    if top_card is None:
        return []
    return [card for card in hand if is_valid_move(card, top_card, active_suit)]


def has_playable_card(
    hand: Iterable[Card], top_card: Optional[Card], active_suit: Optional[Suit]
) -> bool:
    if top_card is None:
        return False
    return any(is_valid_move(card, top_card, active_suit) for card in hand)


def verify_card_conservation(state: GameState) -> None:
    """
    Check that every card of the deck is owned by exactly one collection.

    Args:
        state: State to check

    Raises:
        CardConservationError: If a card is duplicated or missing
    """
    held = Counter(
        state.draw_pile + state.discard_pile + state.player_hand + state.opponent_hand
    )
    duplicated = sorted(card.id for card, count in held.items() if count > 1)
    expected = set(create_deck())
    missing = sorted(card.id for card in expected - held.keys())

    if duplicated or missing:
        raise CardConservationError(
            f"Deck out of balance in game {state.id}: "
            f"duplicated={duplicated} missing={missing}"
        )
