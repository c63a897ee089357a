"""Tests for the dealer drawing policy."""

import pytest

from core.cards import Card, Shoe
from core.dealer import play_dealer_hand, should_hit


def shoe_of(*cards: str) -> Shoe:
    """A shoe that deals the given cards in order."""
    return Shoe([Card.from_string(c) for c in reversed(cards)])


class TestShouldHit:
    @pytest.mark.parametrize(
        "cards, expected",
        [
            (("10S", "6H"), True),
            (("10S", "7H"), False),
            (("10S", "8H"), False),
            (("AS", "5H"), True),
            (("AS", "6H"), False),
            (("AS", "7H"), False),
            (("AS", "AH", "5C"), False),
            (("10S", "6H", "KC"), False),
            (("2S",), True),
        ],
    )
    def test_stands_on_soft_17(self, make_hand, cards, expected):
        assert should_hit(make_hand(*cards)) is expected

    def test_hits_soft_17_when_configured(self, soft_17_hand, hard_17_hand):
        assert should_hit(soft_17_hand, hits_soft_17=True)
        assert not should_hit(hard_17_hand, hits_soft_17=True)


class TestPlayDealerHand:
    def test_stands_without_drawing(self, hard_17_hand):
        shoe = shoe_of("5C")
        assert play_dealer_hand(hard_17_hand, shoe) == 0
        assert shoe.cards_remaining == 1

    def test_draws_until_seventeen(self, make_hand):
        hand = make_hand("2S", "3H")
        drawn = play_dealer_hand(hand, shoe_of("4C", "5D", "3S", "9H"))
        # 2 + 3 + 4 + 5 + 3 = 17
        assert drawn == 3
        assert hand.value == 17

    def test_draws_into_bust(self, make_hand):
        hand = make_hand("10S", "6H")
        assert play_dealer_hand(hand, shoe_of("KC")) == 1
        assert hand.is_busted

    def test_soft_17_rule(self, soft_17_hand):
        assert play_dealer_hand(soft_17_hand, shoe_of("4C")) == 0

        assert play_dealer_hand(soft_17_hand, shoe_of("4C"), hits_soft_17=True) == 1
        # A + 6 + 4 = 21
        assert soft_17_hand.value == 21

    def test_exhausted_shoe_stops_drawing(self, make_hand):
        hand = make_hand("10S", "2H")
        assert play_dealer_hand(hand, shoe_of("2C")) == 1
        assert hand.value == 14
        assert play_dealer_hand(hand, Shoe()) == 0
        assert len(hand) == 3
