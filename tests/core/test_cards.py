"""Tests for Card and Shoe classes."""

import pytest
from collections import Counter
from random import Random

from core.cards import Card, Shoe, Rank, Suit, standard_deck


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.NINE, Suit.HEARTS).value == 9
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_is_ace(self):
        assert Card(Rank.ACE, Suit.SPADES).is_ace
        assert not Card(Rank.KING, Suit.SPADES).is_ace

    def test_rank_labels(self):
        """Ranks print as A, 2..10, J, Q, K."""
        assert [str(r) for r in Rank] == [
            "A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K",
        ]

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("TD") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    def test_card_from_string_invalid(self):
        with pytest.raises(ValueError):
            Card.from_string("1S")
        with pytest.raises(ValueError):
            Card.from_string("AX")
        with pytest.raises(ValueError):
            Card.from_string("A")

    def test_card_str(self):
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.DIAMONDS)) == "10♦"

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestShoe:
    """Tests for the per-round Shoe."""

    def test_standard_deck(self):
        deck = standard_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_build_size(self):
        """A six-deck shoe holds 312 cards."""
        shoe = Shoe.build(6, rng=Random(1))
        assert shoe.cards_remaining == 312
        assert len(shoe) == 312

    def test_build_contains_each_card_once_per_deck(self):
        counts = Counter(Shoe.build(6, rng=Random(1)))
        assert len(counts) == 52
        assert set(counts.values()) == {6}

    def test_build_is_shuffled(self):
        shoe = Shoe.build(1, rng=Random(42))
        assert list(shoe) != standard_deck()

    def test_build_reproducible_with_seed(self):
        assert list(Shoe.build(2, rng=Random(5))) == list(Shoe.build(2, rng=Random(5)))

    def test_build_rejects_zero_decks(self):
        with pytest.raises(ValueError):
            Shoe.build(0)

    def test_draw_removes_card(self):
        shoe = Shoe.build(1, rng=Random(3))
        card = shoe.draw()
        assert isinstance(card, Card)
        assert shoe.cards_remaining == 51

    def test_draw_never_repeats_within_deck(self):
        shoe = Shoe.build(1, rng=Random(3))
        drawn = [shoe.draw() for _ in range(52)]
        assert len(set(drawn)) == 52
        assert shoe.is_empty

    def test_draw_from_empty_shoe_returns_none(self):
        """An exhausted shoe grants nothing instead of failing."""
        shoe = Shoe()
        assert shoe.draw() is None
        assert shoe.cards_remaining == 0

    def test_draw_order(self):
        """Cards are drawn from the end of the stack."""
        first = Card(Rank.TWO, Suit.CLUBS)
        second = Card(Rank.THREE, Suit.CLUBS)
        shoe = Shoe([second, first])
        assert shoe.draw() == first
        assert shoe.draw() == second
        assert shoe.draw() is None
