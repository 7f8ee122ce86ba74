"""Crazy Eights constants."""

from crazyeights.common.card import Rank, Suit

HAND_SIZE = 8

WILD_RANK = Rank.EIGHT

# Canonical suit order, used wherever a suit has to be picked among ties
SUIT_ORDER = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)

# Suit declared by the computer when it plays its last cards and has nothing left to count
DEFAULT_WILD_SUIT = Suit.HEARTS

DECK_SIZE = 52
