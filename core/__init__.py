"""Core blackjack table engine - 100% transport-agnostic."""

from core.cards import Card, Shoe, Rank, Suit
from core.hand import Hand, HandValue, evaluate
from core.dealer import should_hit, play_dealer_hand

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "HandValue",
    "evaluate",
    "should_hit",
    "play_dealer_hand",
]
