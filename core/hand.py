"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple

from core.cards import Card


class HandValue(NamedTuple):
    """Result of evaluating a hand."""

    total: int
    is_soft: bool


def evaluate(cards: Iterable[Card]) -> HandValue:
    """
    Score a sequence of cards under ace-flexible rules.

    Every ace starts at 11. While the total is over 21 and an ace is still
    counted high, that ace drops to 1. The hand is soft when at least one ace
    is still counted as 11 afterwards.
    """
    total = 0
    soft_aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            soft_aces += 1

    while total > 21 and soft_aces > 0:
        total -= 10
        soft_aces -= 1

    return HandValue(total=total, is_soft=soft_aces > 0)


@dataclass
class Hand:
    """An append-only sequence of cards held for one round."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    def evaluate(self) -> HandValue:
        return evaluate(self.cards)

    @property
    def value(self) -> int:
        """Return the best total for the hand."""
        return self.evaluate().total

    @property
    def is_soft(self) -> bool:
        """Check if an ace is still counted as 11."""
        return self.evaluate().is_soft

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with exactly 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        hand_value = self.evaluate()
        value_str = f"({hand_value.total})"
        if hand_value.is_soft:
            value_str = f"(soft {hand_value.total})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
