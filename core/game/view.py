"""Observer-specific projections of the table.

This is the only place hidden cards are masked. Everything sent outward is
built here, so a projection can never carry the face of a card its observer
is not entitled to see.
"""

from dataclasses import dataclass

from core.cards import Card
from core.game.state import DEALER_VISIBLE_PHASES, TablePhase
from core.game.table import Player, Table

# Sentinel ranks for face-down placeholders
DEALER_HOLE_RANK = "❓"
PEER_HOLE_RANK = "■"


@dataclass(frozen=True)
class CardView:
    """A card as an observer sees it."""

    rank: str
    suit: str
    value: int
    hidden: bool = False

    @classmethod
    def face_up(cls, card: Card) -> "CardView":
        return cls(rank=str(card.rank), suit=str(card.suit), value=card.value)

    @classmethod
    def face_down(cls, rank: str) -> "CardView":
        return cls(rank=rank, suit="", value=0, hidden=True)


@dataclass(frozen=True)
class PlayerView:
    """A player's seat; only ``hand`` is ever masked."""

    id: str
    name: str
    bet: int
    bankroll: int
    hand: tuple[CardView, ...]
    done: bool
    busted: bool
    blackjack: bool
    standing: bool
    ready: bool
    outcome: str | None


@dataclass(frozen=True)
class DealerView:
    hand: tuple[CardView, ...]


@dataclass(frozen=True)
class TableView:
    """A redacted snapshot of the table for one observer."""

    phase: str
    round: int
    shoe_remaining_count: int
    dealer: DealerView
    dealer_total: int | None
    dealer_bust: bool | None
    players: tuple[PlayerView, ...]


def _visible(cards: list[Card]) -> tuple[CardView, ...]:
    return tuple(CardView.face_up(card) for card in cards)


def _masked(cards: list[Card], sentinel: str) -> tuple[CardView, ...]:
    """Show the first card and one placeholder once a hand has two or more cards."""
    if len(cards) < 2:
        return _visible(cards)
    return (CardView.face_up(cards[0]), CardView.face_down(sentinel))


def _player_view(player: Player, hand: tuple[CardView, ...]) -> PlayerView:
    return PlayerView(
        id=player.id,
        name=player.name,
        bet=player.bet,
        bankroll=player.bankroll,
        hand=hand,
        done=player.done,
        busted=player.busted,
        blackjack=player.blackjack,
        standing=player.standing,
        ready=player.ready,
        outcome=player.outcome,
    )


def player_record(player: Player) -> PlayerView:
    """Return the full, unredacted record of a player."""
    return _player_view(player, _visible(player.hand.cards))


def project(table: Table, observer_id: str | None = None) -> TableView:
    """
    Derive what one observer may see of the table.

    Args:
        table: The canonical table state
        observer_id: Session id of the observer, or None for the public view

    Returns:
        A snapshot in which the dealer's hole card stays face down until the
        dealer's turn, and other players' second and later cards stay face
        down until showdown
    """
    dealer_visible = table.phase in DEALER_VISIBLE_PHASES
    showdown = table.phase is TablePhase.SETTLING

    dealer_cards = table.dealer.hand.cards
    dealer_hand = _visible(dealer_cards) if dealer_visible else _masked(dealer_cards, DEALER_HOLE_RANK)

    players = []
    for player in table.players:
        cards = player.hand.cards
        if showdown or (observer_id is not None and player.id == observer_id):
            hand = _visible(cards)
        else:
            hand = _masked(cards, PEER_HOLE_RANK)
        players.append(_player_view(player, hand))

    return TableView(
        phase=table.phase.value,
        round=table.round,
        shoe_remaining_count=table.shoe.cards_remaining,
        dealer=DealerView(hand=dealer_hand),
        dealer_total=table.dealer.total if dealer_visible else None,
        dealer_bust=table.dealer.bust if dealer_visible else None,
        players=tuple(players),
    )
