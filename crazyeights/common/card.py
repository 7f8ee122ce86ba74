"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace.

- `Card`: An immutable (suit, rank) value with a derived identifier. Cards
compare and hash by value, so a deck can be checked with ordinary set logic.

This module is part of the `crazyeights` package.
"""

from dataclasses import dataclass, field
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        """The pip symbol for the suit."""
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def rank_str(self):
        """A string representation of the rank."""
        return self.value

    def __str__(self) -> str:
        return self.rank_str


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of ♥
    >>> card.id
    '2-hearts'
    """

    suit: Suit
    rank: Rank
    id: str = field(init=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")
        object.__setattr__(self, "id", f"{self.rank.value}-{self.suit.value}")

    @property
    def is_wild(self) -> bool:
        """Eights are wild."""
        return self.rank == Rank.EIGHT

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        """
        Rebuild a card from its identifier.

        :param card_id: An identifier such as ``"10-spades"``
        :return: The matching card
        :raises ValueError: If the identifier does not name a card
        """
        rank_part, _, suit_part = card_id.partition("-")
        try:
            return cls(Suit(suit_part), Rank(rank_part))
        except ValueError:
            raise ValueError(f"Invalid card id: {card_id!r}") from None

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"{self.rank.rank_str} of {self.suit.symbol}"
