"""Play classification: which combination a set of cards forms."""

from collections import Counter
from enum import Enum
from typing import Sequence

from bigtwo.cards import Card


class EvalType(Enum):
    """Combination types, ordered by base value."""

    INVALID = 0
    SINGLE = 1
    PAIR = 2
    STRAIGHT = 3
    FLUSH = 4
    FULL_HOUSE = 5
    FOUR_OF_A_KIND = 6
    STRAIGHT_FLUSH = 7

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_valid(self) -> bool:
        """Check if this is a playable combination."""
        return self is not EvalType.INVALID


# Escalation ladder used by chaining
LADDER: tuple[EvalType, ...] = (
    EvalType.SINGLE,
    EvalType.PAIR,
    EvalType.STRAIGHT,
    EvalType.FLUSH,
    EvalType.FULL_HOUSE,
    EvalType.FOUR_OF_A_KIND,
    EvalType.STRAIGHT_FLUSH,
)

VALID_PLAY_SIZES = (1, 2, 5)


def is_pair(cards: Sequence[Card]) -> bool:
    """Two cards of equal rank."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def is_straight(cards: Sequence[Card]) -> bool:
    """
    Five distinct ranks forming a consecutive run.

    Aces only count high, so A-2-3-4-5 is not a straight.
    """
    if len(cards) != 5:
        return False
    ranks = sorted(c.rank.value for c in cards)
    return all(ranks[i] == ranks[i - 1] + 1 for i in range(1, 5))


def is_flush(cards: Sequence[Card]) -> bool:
    """Five cards of one suit."""
    return len(cards) == 5 and len({c.suit for c in cards}) == 1


def is_full_house(cards: Sequence[Card]) -> bool:
    """Three of one rank and two of another."""
    if len(cards) != 5:
        return False
    return sorted(Counter(c.rank for c in cards).values()) == [2, 3]


def is_four_of_a_kind(cards: Sequence[Card]) -> bool:
    """Four cards share a rank; the fifth is ignored."""
    if len(cards) != 5:
        return False
    return 4 in Counter(c.rank for c in cards).values()


def is_straight_flush(cards: Sequence[Card]) -> bool:
    return is_straight(cards) and is_flush(cards)


def evaluate(cards: Sequence[Card]) -> EvalType:
    """
    Classify a played card set.

    Args:
        cards: The selected cards, in any order

    Returns:
        The best matching EvalType, or EvalType.INVALID
    """
    size = len(cards)
    if size == 1:
        return EvalType.SINGLE
    if size == 2:
        return EvalType.PAIR if is_pair(cards) else EvalType.INVALID
    if size == 5:
        if is_straight_flush(cards):
            return EvalType.STRAIGHT_FLUSH
        if is_four_of_a_kind(cards):
            return EvalType.FOUR_OF_A_KIND
        if is_full_house(cards):
            return EvalType.FULL_HOUSE
        if is_flush(cards):
            return EvalType.FLUSH
        if is_straight(cards):
            return EvalType.STRAIGHT
    return EvalType.INVALID
