"""Table aggregate: players, dealer, shoe and phase."""

from dataclasses import dataclass, field
from typing import Iterable

from config import TableConfig
from core.cards import Shoe
from core.hand import Hand
from core.game.state import TablePhase


@dataclass
class Player:
    """A seated player, keyed by the session that owns the seat."""

    id: str
    name: str
    bet: int
    bankroll: int
    hand: Hand = field(default_factory=Hand)
    done: bool = False
    busted: bool = False
    blackjack: bool = False
    standing: bool = False
    ready: bool = False
    outcome: str | None = None

    @property
    def is_locked(self) -> bool:
        """Check if the player can no longer act this round."""
        return self.blackjack or self.done or self.busted

    def reset_round(self) -> None:
        """Clear the hand and every round-scoped flag except ``ready``."""
        self.hand.clear()
        self.done = False
        self.busted = False
        self.blackjack = False
        self.standing = False
        self.outcome = None

    def reclamp(self, rules: TableConfig) -> None:
        """Restore defaults for a corrupted wager and cap the bet to the bankroll."""
        if self.bankroll < 1:
            self.bankroll = rules.default_bankroll
        if self.bet < 1:
            self.bet = rules.default_bet
        self.bet = min(self.bet, self.bankroll)


@dataclass
class Dealer:
    """The house hand. Total and bust are only known once it is revealed."""

    hand: Hand = field(default_factory=Hand)
    total: int | None = None
    bust: bool = False

    def tally(self) -> int:
        """Compute and store the dealer's total and bust flag."""
        self.total = self.hand.value
        self.bust = self.total > 21
        return self.total

    def reset(self) -> None:
        self.hand.clear()
        self.total = None
        self.bust = False


@dataclass
class Table:
    """Canonical shared state of the one table."""

    phase: TablePhase = TablePhase.WAITING
    round: int = 0
    shoe: Shoe = field(default_factory=Shoe)
    dealer: Dealer = field(default_factory=Dealer)
    players: list[Player] = field(default_factory=list)

    def find_player(self, session_id: str) -> Player | None:
        for player in self.players:
            if player.id == session_id:
                return player
        return None

    def reset(self) -> None:
        """Return to the empty table the process started with."""
        self.phase = TablePhase.WAITING
        self.round = 0
        self.shoe = Shoe()
        self.dealer = Dealer()
        self.players.clear()

    @property
    def seated(self) -> int:
        return len(self.players)


def can_start(players: Iterable[Player], rules: TableConfig) -> bool:
    """Check the occupancy policy (min_players <= seated <= capacity)."""
    count = sum(1 for _ in players)
    return rules.min_players <= count <= rules.capacity


def everyone_ready(players: list[Player], rules: TableConfig) -> bool:
    """Check if a round may be dealt: occupancy satisfied and every player ready."""
    return can_start(players, rules) and all(p.ready for p in players)


def all_players_locked(players: list[Player]) -> bool:
    """
    Round-advance predicate for the simultaneous-action phase.

    True when every player has a blackjack, is done, or has busted. An empty
    table is trivially locked.
    """
    return all(p.is_locked for p in players)
