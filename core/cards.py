"""Card and Shoe classes - immutable cards, one shoe per round."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterator


class Suit(Enum):
    """Card suits, valued by the symbol observers see."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks, valued by their blackjack points."""

    ACE = "A"
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

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        return self is Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', '10♦' or 'kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str == "T":
            rank_str = "10"

        suit_map = {suit.value: suit for suit in Suit}
        suit_map.update({suit.name[0]: suit for suit in Suit})

        try:
            rank = Rank(rank_str)
        except ValueError:
            raise ValueError(f"Invalid rank: {rank_str}") from None
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank, suit_map[suit_str])


def standard_deck() -> list[Card]:
    """Return the 52 cards of one deck in a fixed order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Shoe:
    """
    The multi-deck stack a round is dealt from.

    A shoe lives for exactly one round. It is never topped up or reshuffled
    while the round is running; once it is empty, ``draw`` returns ``None``
    and hands simply stop growing.
    """

    def __init__(self, cards: list[Card] | None = None) -> None:
        self._cards: list[Card] = list(cards or [])

    @classmethod
    def build(cls, num_decks: int = 6, rng: Random | None = None) -> "Shoe":
        """
        Build a freshly shuffled shoe.

        Args:
            num_decks: Number of standard 52-card decks to combine
            rng: Random number generator for shuffling

        Returns:
            A shoe holding ``num_decks * 52`` uniformly permuted cards
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        cards = [card for _ in range(num_decks) for card in standard_deck()]
        (rng or Random()).shuffle(cards)
        return cls(cards)

    def draw(self) -> Card | None:
        """Draw the next card, or return None if the shoe is exhausted."""
        if not self._cards:
            return None
        return self._cards.pop()

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
