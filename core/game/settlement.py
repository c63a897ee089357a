"""Settlement of finished hands against the dealer."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from core.hand import Hand
from core.game.table import Player


class Outcome(str, Enum):
    """Outcome labels shown to players."""

    BLACKJACK = "Blackjack"
    WIN = "Win"
    LOSE = "Lose"
    PUSH = "Push"
    BUST = "Bust"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Settlement:
    """Result of settling one player."""

    player_id: str
    outcome: Outcome
    delta: int


def settle_player(player: Player, dealer_hand: Hand, blackjack_payout: float = 1.5) -> Settlement:
    """
    Decide one player's outcome without touching the player.

    Precedence: player blackjack, player bust, dealer bust, then totals.

    Raises:
        ValueError: The player is flagged both blackjack and busted
    """
    if player.blackjack and player.busted:
        raise ValueError(f"Player {player.id} cannot hold a blackjack and be busted")

    if player.blackjack:
        if dealer_hand.is_blackjack:
            return Settlement(player.id, Outcome.PUSH, 0)
        return Settlement(player.id, Outcome.BLACKJACK, math.floor(player.bet * blackjack_payout))

    if player.busted:
        return Settlement(player.id, Outcome.BUST, -player.bet)

    if dealer_hand.is_busted:
        return Settlement(player.id, Outcome.WIN, player.bet)

    player_total = player.hand.value
    dealer_total = dealer_hand.value
    if player_total > dealer_total:
        return Settlement(player.id, Outcome.WIN, player.bet)
    if player_total < dealer_total:
        return Settlement(player.id, Outcome.LOSE, -player.bet)
    return Settlement(player.id, Outcome.PUSH, 0)


def settle(
    players: Iterable[Player],
    dealer_hand: Hand,
    blackjack_payout: float = 1.5,
) -> list[Settlement]:
    """
    Settle every player, applying bankroll deltas and outcome labels.

    Args:
        players: Players holding their final hands
        dealer_hand: The dealer's final hand
        blackjack_payout: Multiplier paid on a natural (3:2 = 1.5)

    Returns:
        One settlement per player, in seating order
    """
    # Decide everything before mutating anyone
    results = [(p, settle_player(p, dealer_hand, blackjack_payout)) for p in players]

    for player, result in results:
        player.bankroll += result.delta
        player.outcome = result.outcome.value

    return [result for _, result in results]
