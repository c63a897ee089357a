"""Tests for settling hands against the dealer."""

import pytest

from core.game.settlement import Outcome, settle, settle_player
from core.game.table import Player


@pytest.fixture
def player_with(make_hand):
    """Build a player holding the given cards, flags derived from the hand."""

    def build(*cards: str, bet: int = 10, bankroll: int = 100, pid: str = "p1") -> Player:
        player = Player(id=pid, name=pid, bet=bet, bankroll=bankroll, hand=make_hand(*cards))
        player.blackjack = player.hand.is_blackjack
        player.busted = player.hand.is_busted
        return player

    return build


class TestSettlePlayer:
    def test_blackjack_pays_three_to_two(self, player_with, make_hand):
        result = settle_player(player_with("AS", "KH"), make_hand("10C", "8D"))
        assert result.outcome is Outcome.BLACKJACK
        assert result.delta == 15

    def test_blackjack_payout_is_floored(self, player_with, make_hand):
        result = settle_player(player_with("AS", "KH", bet=5), make_hand("10C", "8D"))
        assert result.delta == 7

    def test_both_blackjack_push(self, player_with, make_hand):
        result = settle_player(player_with("AS", "KH"), make_hand("AD", "QC"))
        assert result.outcome is Outcome.PUSH
        assert result.delta == 0

    def test_blackjack_beats_dealer_three_card_21(self, player_with, make_hand):
        result = settle_player(player_with("AS", "KH"), make_hand("7C", "7D", "7H"))
        assert result.outcome is Outcome.BLACKJACK

    def test_bust_loses_even_if_dealer_busts(self, player_with, make_hand):
        result = settle_player(player_with("10S", "6H", "KC"), make_hand("10C", "6D", "QH"))
        assert result.outcome is Outcome.BUST
        assert result.delta == -10

    def test_dealer_bust_wins(self, player_with, make_hand):
        result = settle_player(player_with("10S", "2H"), make_hand("10C", "6D", "QH"))
        assert result.outcome is Outcome.WIN
        assert result.delta == 10

    @pytest.mark.parametrize(
        "player_cards, dealer_cards, outcome, delta",
        [
            (("10S", "9H"), ("10C", "8D"), Outcome.WIN, 10),
            (("10S", "7H"), ("10C", "8D"), Outcome.LOSE, -10),
            (("10S", "8H"), ("10C", "8D"), Outcome.PUSH, 0),
        ],
    )
    def test_compare_totals(self, player_with, make_hand, player_cards, dealer_cards, outcome, delta):
        result = settle_player(player_with(*player_cards), make_hand(*dealer_cards))
        assert result.outcome is outcome
        assert result.delta == delta

    def test_dealer_natural_only_ties_a_drawn_21(self, player_with, make_hand):
        """A dealer natural is not a higher hand than a player 21 made with three cards."""
        result = settle_player(player_with("7S", "7H", "7C"), make_hand("10C", "AD"))
        assert result.outcome is Outcome.PUSH
        assert result.delta == 0

    def test_custom_payout(self, player_with, make_hand):
        result = settle_player(player_with("AS", "KH"), make_hand("10C", "8D"), blackjack_payout=1.2)
        assert result.delta == 12

    def test_blackjack_and_busted_is_rejected(self, player_with, make_hand):
        player = player_with("AS", "KH")
        player.busted = True
        with pytest.raises(ValueError):
            settle_player(player, make_hand("10C", "8D"))

    def test_outcome_labels(self):
        assert [str(o) for o in Outcome] == ["Blackjack", "Win", "Lose", "Push", "Bust"]


class TestSettle:
    def test_applies_deltas_and_labels(self, player_with, make_hand):
        players = [
            player_with("AS", "KH", pid="a"),
            player_with("10S", "9H", pid="b"),
            player_with("10S", "6H", "KC", pid="c"),
            player_with("10D", "8H", pid="d"),
        ]
        results = settle(players, make_hand("10C", "8D"))

        assert [r.player_id for r in results] == ["a", "b", "c", "d"]
        assert [p.bankroll for p in players] == [115, 110, 90, 100]
        assert [p.outcome for p in players] == ["Blackjack", "Win", "Bust", "Push"]

    def test_no_players(self, make_hand):
        assert settle([], make_hand("10C", "8D")) == []

    def test_bankroll_may_reach_zero(self, player_with, make_hand):
        player = player_with("10S", "6H", bet=10, bankroll=10)
        settle([player], make_hand("10C", "8D"))
        assert player.bankroll == 0
        assert player.outcome == "Lose"
