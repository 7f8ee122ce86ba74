"""
State transition functions for the Crazy Eights game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. A transition that does not
apply (wrong seat, wrong status, unplayable card) returns the state it was
given, unchanged and by identity.
"""

from typing import Optional
from dataclasses import replace
import logging
import random
import time

from crazyeights.common.card import Suit
from crazyeights.common.deck import Deck
from crazyeights.events import EventBus, EngineEventType
from crazyeights.game.constants import HAND_SIZE, WILD_RANK
from crazyeights.game.rules import has_playable_card, is_valid_move
from crazyeights.game.state import GameState, GameStatus, Seat

logger = logging.getLogger(__name__)


class StateTransitionEngine:
    """
    Pure functions for state transitions in Crazy Eights.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def new_game(
        state: Optional[GameState] = None, rng: Optional[random.Random] = None
    ) -> GameState:
        """
        Deal a fresh game.

        Args:
            state: The state being replaced, if any; only its generation is kept
            rng: Optional random source, the process-wide one if None

        Returns:
            New game state in the playing status with the player to move
        """
        generation = state.generation + 1 if state is not None else 1

        deck = Deck(rng=rng).shuffle()
        player_hand = deck.cards[:HAND_SIZE]
        opponent_hand = deck.cards[HAND_SIZE : 2 * HAND_SIZE]
        deck.cards = deck.cards[2 * HAND_SIZE :]

        # The game must not open on a wild card
        first_discard = deck.deal()
        while first_discard.rank == WILD_RANK:
            logger.debug("Initial discard %s is wild, reshuffling", first_discard)
            deck.put_back(first_discard)
            deck.shuffle()
            first_discard = deck.deal()

        new_state = GameState(
            generation=generation,
            draw_pile=deck.cards,
            discard_pile=[first_discard],
            player_hand=player_hand,
            opponent_hand=opponent_hand,
            turn=Seat.PLAYER,
            status=GameStatus.PLAYING,
            winner=None,
            active_suit=None,
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_CREATED,
            {
                "game_id": new_state.id,
                "generation": new_state.generation,
                "discard_top": str(first_discard),
                "timestamp": new_state.timestamp,
            },
        )

        return new_state

    @staticmethod
    def play_card(
        state: GameState, card_id: str, seat: Seat = Seat.PLAYER
    ) -> GameState:
        """
        Play a card from a seat's hand onto the discard pile.

        Args:
            state: Current game state
            card_id: Identifier of the card to play
            seat: Seat playing the card

        Returns:
            New game state, or ``state`` itself if the play is not allowed
        """
        if state.status != GameStatus.PLAYING or state.turn != seat:
            logger.debug(
                "Rejected play of %s by %s: status=%s turn=%s",
                card_id,
                seat.value,
                state.status.value,
                state.turn.value,
            )
            return state

        card = state.find_card(seat, card_id)
        if card is None:
            logger.debug("Rejected play of %s by %s: not in hand", card_id, seat.value)
            return state

        top = state.discard_top
        if top is None or not is_valid_move(card, top, state.active_suit):
            logger.debug(
                "Rejected play of %s by %s: does not match %s (active suit %s)",
                card_id,
                seat.value,
                top,
                state.active_suit,
            )
            return state

        new_hand = [c for c in state.hand_for(seat) if c != card]
        hand_field = "player_hand" if seat == Seat.PLAYER else "opponent_hand"
        changes = {
            hand_field: new_hand,
            "discard_pile": list(state.discard_pile) + [card],
            "timestamp": time.time(),
        }

        if card.rank == WILD_RANK:
            # The same seat still has to declare a suit
            changes["status"] = GameStatus.CHOOSING_SUIT
        else:
            changes["turn"] = seat.other
            changes["active_suit"] = None

        new_state = replace(state, **changes)

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.CARD_PLAYED,
            {
                "game_id": state.id,
                "seat": seat.value,
                "card": card.id,
                "wild": card.is_wild,
                "timestamp": new_state.timestamp,
            },
        )

        return StateTransitionEngine.check_terminal(new_state)

    @staticmethod
    def choose_suit(
        state: GameState, suit: Suit, seat: Seat = Seat.PLAYER
    ) -> GameState:
        """
        Declare the suit after an eight and pass the turn.

        Args:
            state: Current game state
            suit: Suit to declare
            seat: Seat that played the eight

        Returns:
            New game state, or ``state`` itself if no suit is pending for ``seat``
        """
        if state.status != GameStatus.CHOOSING_SUIT or state.turn != seat:
            logger.debug(
                "Rejected suit choice %s by %s: status=%s turn=%s",
                suit,
                seat.value,
                state.status.value,
                state.turn.value,
            )
            return state

        new_state = replace(
            state,
            active_suit=suit,
            status=GameStatus.PLAYING,
            turn=seat.other,
            timestamp=time.time(),
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.SUIT_CHOSEN,
            {
                "game_id": state.id,
                "seat": seat.value,
                "suit": suit.value,
                "timestamp": new_state.timestamp,
            },
        )

        return StateTransitionEngine.check_terminal(new_state)

    @staticmethod
    def draw_card(state: GameState, seat: Seat = Seat.PLAYER) -> GameState:
        """
        Draw a card for a seat and pass the turn.

        With an empty draw pile nothing is drawn and the turn is skipped.

        Args:
            state: Current game state
            seat: Seat drawing the card

        Returns:
            New game state, or ``state`` itself if the seat may not draw
        """
        if state.status != GameStatus.PLAYING or state.turn != seat:
            logger.debug(
                "Rejected draw by %s: status=%s turn=%s",
                seat.value,
                state.status.value,
                state.turn.value,
            )
            return state

        event_bus = EventBus.get_instance()

        if not state.draw_pile:
            new_state = replace(state, turn=seat.other, timestamp=time.time())
            event_bus.emit(
                EngineEventType.TURN_SKIPPED,
                {
                    "game_id": state.id,
                    "seat": seat.value,
                    "timestamp": new_state.timestamp,
                },
            )
            return StateTransitionEngine.check_terminal(new_state)

        new_draw_pile = list(state.draw_pile)
        card = new_draw_pile.pop()
        hand_field = "player_hand" if seat == Seat.PLAYER else "opponent_hand"
        new_state = replace(
            state,
            draw_pile=new_draw_pile,
            turn=seat.other,
            timestamp=time.time(),
            **{hand_field: list(state.hand_for(seat)) + [card]},
        )

        event_bus.emit(
            EngineEventType.CARD_DRAWN,
            {
                "game_id": state.id,
                "seat": seat.value,
                "draw_pile_count": new_state.draw_pile_count,
                "timestamp": new_state.timestamp,
            },
        )

        return StateTransitionEngine.check_terminal(new_state)

    @staticmethod
    def check_terminal(state: GameState) -> GameState:
        """
        End the game if a hand is empty or nobody can move any more.

        Checks run in priority order: player hand empty, computer hand
        empty, then the stalemate draw.

        Args:
            state: Current game state

        Returns:
            The game_over state, or ``state`` itself if play continues
        """
        if state.status not in (GameStatus.PLAYING, GameStatus.CHOOSING_SUIT):
            return state

        if not state.player_hand:
            winner = Seat.PLAYER
        elif not state.opponent_hand:
            winner = Seat.OPPONENT
        elif (
            not state.draw_pile
            and state.discard_pile
            and not has_playable_card(
                state.player_hand, state.discard_top, state.active_suit
            )
            and not has_playable_card(
                state.opponent_hand, state.discard_top, state.active_suit
            )
        ):
            winner = None
        else:
            return state

        new_state = replace(
            state, status=GameStatus.GAME_OVER, winner=winner, timestamp=time.time()
        )

        logger.info(
            "Game %s over: %s",
            state.id,
            f"{winner.value} wins" if winner else "draw",
        )
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_ENDED,
            {
                "game_id": state.id,
                "winner": winner.value if winner else None,
                "timestamp": new_state.timestamp,
            },
        )

        return new_state


new_game = StateTransitionEngine.new_game
play_card = StateTransitionEngine.play_card
choose_suit = StateTransitionEngine.choose_suit
draw_card = StateTransitionEngine.draw_card
check_terminal = StateTransitionEngine.check_terminal
