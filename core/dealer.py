"""House policy for playing the dealer's hand."""

from core.cards import Shoe
from core.hand import Hand


def should_hit(hand: Hand, hits_soft_17: bool = False) -> bool:
    """
    Decide whether the dealer draws another card.

    The dealer hits below 17 and stands on 18 or more. Soft 17 stands unless
    the table plays H17 rules.
    """
    total, is_soft = hand.evaluate()
    if total < 17:
        return True
    if total == 17 and is_soft and hits_soft_17:
        return True
    return False


def play_dealer_hand(hand: Hand, shoe: Shoe, hits_soft_17: bool = False) -> int:
    """
    Draw for the dealer until the policy stands or the shoe runs dry.

    Returns:
        Number of cards drawn
    """
    drawn = 0
    while should_hit(hand, hits_soft_17):
        card = shoe.draw()
        if card is None:
            break
        hand.add_card(card)
        drawn += 1
    return drawn
