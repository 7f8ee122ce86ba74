"""
This module contains deck construction, shuffling, and the Deck class.

>>> len(create_deck())
52
>>> deck = Deck()
>>> deck.size
52
>>> deck.deal()
Card(Suit.SPADES, Rank.ACE)
>>> deck.size
51
"""

import random
from typing import List, Optional, Sequence, TypeVar, Union

from crazyeights.common.card import Card, Rank, Suit

T = TypeVar("T")

SUITS = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANKS = [
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
    Rank.ACE,
]


def create_deck() -> List[Card]:
    """
    Build the 52-card deck in suit-major, rank-minor order.

    :return: A new list holding each (suit, rank) combination exactly once.
    """
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of ``items`` (Fisher-Yates).

    The input is never modified. Randomness comes from the process-wide
    ``random`` module unless ``rng`` is given.

    :param items: The sequence to permute
    :param rng: Optional random source
    :return: A new list with the same elements in random order
    """
    source = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class Deck:
    """
    A stack of cards. Cards are dealt from the end of the list.
    """

    def __init__(
        self,
        cards: Union[List[Card], None] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a full 52-card deck will be constructed.
        :param rng: Optional random source used by ``shuffle``.
        >>> deck = Deck()
        >>> deck.size
        52
        """
        self.rng = rng
        if cards is None:
            self.cards: List[Card] = create_deck()
        else:
            self.cards = list(cards)

    def shuffle(self):
        """
        Shuffle the cards in the deck.
        """
        self.cards = shuffle(self.cards, self.rng)
        return self

    def deal(self, num_cards=1) -> Union[Card, List[Card]]:
        """
        Pop n cards from the deck.

        :return: A card instance or a list of card instances.
        >>> deck = Deck()
        >>> cards = deck.deal(5)
        >>> len(cards)
        5
        """
        if num_cards == 1:
            return self.cards.pop()
        return [self.cards.pop() for _ in range(num_cards)]

    def put_back(self, card: Card) -> None:
        """Return a card to the bottom of the deck."""
        self.cards.insert(0, card)

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.
        """
        return len(self.cards)

    def is_empty(self) -> bool:
        """
        Check if the deck is empty.

        :return: True if the deck is empty, False otherwise.
        """
        return len(self.cards) == 0

    def reset(self):
        """
        Reset the deck by recreating
        """
        self.cards = create_deck()

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
