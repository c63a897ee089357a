"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from config import TableConfig
from core.cards import Card, Rank, Suit, Shoe
from core.hand import Hand
from core.game import MessageLog, TableGame


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def rules():
    """Default table rules, independent of the environment."""
    return TableConfig(capacity=10, num_decks=6, dealer_hits_soft_17=False)


@pytest.fixture
def message_log():
    """Dispatcher that records every outbound message."""
    return MessageLog()


@pytest.fixture
def game(rules, message_log, rng):
    """An empty table."""
    return TableGame(rules, dispatcher=message_log, rng=rng)


@pytest.fixture
def make_hand():
    """Build a hand from card strings like 'AS', '10H'."""

    def build(*cards: str) -> Hand:
        return Hand([Card.from_string(c) for c in cards])

    return build


@pytest.fixture
def rig_shoe(monkeypatch):
    """
    Make every shoe built afterwards deal the given cards in order.

    Initial deal order is one card to each player in seat order, then the
    dealer, repeated once; hits and dealer draws follow.
    """

    def rig(*cards: str) -> None:
        dealt = [Card.from_string(c) for c in cards]

        def build(cls, num_decks=6, rng=None):
            return cls(list(reversed(dealt)))

        monkeypatch.setattr(Shoe, "build", classmethod(build))

    return rig


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_17_hand():
    """A hard 17 hand (10-7)."""
    return Hand([Card(Rank.TEN, Suit.SPADES), Card(Rank.SEVEN, Suit.HEARTS)])


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])
