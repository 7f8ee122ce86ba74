import random
from collections import Counter

from crazyeights.common.card import Card, Rank, Suit
from crazyeights.common.deck import Deck, create_deck, shuffle


def test_create_deck_has_52_unique_cards():
    deck = create_deck()
    assert len(deck) == 52
    assert len({(card.suit, card.rank) for card in deck}) == 52
    assert len({card.id for card in deck}) == 52


def test_create_deck_is_deterministic():
    assert create_deck() == create_deck()
    deck = create_deck()
    assert deck[0] == Card(Suit.HEARTS, Rank.TWO)
    assert deck[12] == Card(Suit.HEARTS, Rank.ACE)
    assert deck[13] == Card(Suit.DIAMONDS, Rank.TWO)
    assert deck[-1] == Card(Suit.SPADES, Rank.ACE)


def test_create_deck_returns_new_list():
    first = create_deck()
    first.pop()
    assert len(create_deck()) == 52


def test_shuffle_is_permutation():
    deck = create_deck()
    shuffled = shuffle(deck)
    assert Counter(shuffled) == Counter(deck)


def test_shuffle_does_not_mutate_input():
    deck = create_deck()
    original = list(deck)
    shuffled = shuffle(deck)
    assert deck == original
    assert shuffled is not deck


def test_shuffle_with_seeded_rng_is_reproducible():
    first = shuffle(create_deck(), random.Random(7))
    second = shuffle(create_deck(), random.Random(7))
    assert first == second
    assert first != create_deck()


def test_shuffle_generic_sequences():
    assert shuffle([]) == []
    assert shuffle([1]) == [1]
    assert sorted(shuffle(range(10))) == list(range(10))
    assert sorted(shuffle("abc")) == ["a", "b", "c"]


def test_shuffle_uses_process_random_source():
    random.seed(42)
    first = shuffle(create_deck())
    random.seed(42)
    second = shuffle(create_deck())
    assert first == second


def test_shuffle_small_sample_is_roughly_uniform():
    rng = random.Random(1234)
    counts = Counter(tuple(shuffle([1, 2, 3], rng)) for _ in range(6000))
    assert len(counts) == 6
    for count in counts.values():
        assert 850 <= count <= 1150


def test_deck_initialization():
    deck = Deck()
    assert isinstance(deck.cards, list)
    assert len(deck.cards) == 52


def test_deck_initialization_with_custom_cards():
    cards = [
        Card(Suit.HEARTS, Rank.TWO),
        Card(Suit.DIAMONDS, Rank.ACE),
        Card(Suit.CLUBS, Rank.JACK),
    ]
    deck = Deck(cards)
    assert deck.cards == cards
    assert deck.cards is not cards


def test_deck_shuffle():
    deck = Deck(rng=random.Random(3))
    original_order = deck.cards.copy()
    assert deck.shuffle() is deck
    assert deck.cards != original_order
    assert set(deck.cards) == set(original_order)


def test_deck_deal_from_top():
    deck = Deck()
    size = deck.size
    card = deck.deal()
    assert card == Card(Suit.SPADES, Rank.ACE)
    assert deck.size == size - 1
    assert len(deck.deal(3)) == 3


def test_deck_put_back_goes_to_bottom():
    deck = Deck()
    card = deck.deal()
    deck.put_back(card)
    assert deck.cards[0] == card
    assert deck.size == 52


def test_deck_deal_until_empty():
    deck = Deck()
    for _ in range(deck.size):
        assert isinstance(deck.deal(), Card)
    assert deck.is_empty()
    deck.reset()
    assert deck.size == 52


def test_deck_str_and_repr():
    deck = Deck()
    assert str(deck) == "Deck of 52 cards"
    assert repr(deck) == f"Deck({[repr(card) for card in deck.cards]})"
