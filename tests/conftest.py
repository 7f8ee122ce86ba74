"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures and configuration for testing components.
"""

import pytest

from crazyeights.common.card import Card
from crazyeights.common.deck import create_deck
from crazyeights.events import EventBus
from crazyeights.game.state import GameState, GameStatus, Seat


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def build_state():
    """
    Factory for mid-game states from card ids.

    Cards not placed anywhere go to the draw pile (in deck order) unless an
    explicit draw pile is given.
    """

    def _build(
        player,
        opponent,
        discard,
        draw=None,
        turn=Seat.PLAYER,
        status=GameStatus.PLAYING,
        active_suit=None,
    ):
        player_hand = [Card.from_id(card_id) for card_id in player]
        opponent_hand = [Card.from_id(card_id) for card_id in opponent]
        discard_pile = [Card.from_id(card_id) for card_id in discard]
        if draw is None:
            used = set(player_hand + opponent_hand + discard_pile)
            draw_pile = [card for card in create_deck() if card not in used]
        else:
            draw_pile = [Card.from_id(card_id) for card_id in draw]
        return GameState(
            generation=1,
            draw_pile=draw_pile,
            discard_pile=discard_pile,
            player_hand=player_hand,
            opponent_hand=opponent_hand,
            turn=turn,
            status=status,
            active_suit=active_suit,
        )

    return _build
