"""
Hand Evaluation for Teen Patti.

This module ranks a 3-card hand into a category plus a tiebreak key.
Higher categories always win; within a category the tiebreak keys are
compared element by element.

Hand Rankings (best to worst):
6. Trail: three cards of the same rank
5. Pure Sequence: three consecutive ranks of one suit
4. Sequence: three consecutive ranks, mixed suits
3. Color: three cards of one suit, not consecutive
2. Pair: two cards of the same rank
1. High Card: none of the above

Note: A-2-3 counts as a sequence and keeps its ace high in the tiebreak,
so it ranks just below A-K-Q. K-A-2 is not a sequence.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple, Union

from teenpatti.core.card import Card, Rank
from teenpatti.core.rules import CARDS_PER_HAND


class HandCategory(IntEnum):
    """Hand categories, higher value = better hand."""
    TRAIL = 6
    PURE_SEQUENCE = 5
    SEQUENCE = 4
    COLOR = 3
    PAIR = 2
    HIGH_CARD = 1


HAND_CATEGORY_NAMES = {
    HandCategory.TRAIL: "Trail",
    HandCategory.PURE_SEQUENCE: "Pure Sequence",
    HandCategory.SEQUENCE: "Sequence",
    HandCategory.COLOR: "Color",
    HandCategory.PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}

# Filler for tiebreak keys of different lengths
MISSING_TIEBREAK = -1

LOW_STRAIGHT = (Rank.ACE, Rank.THREE, Rank.TWO)


@dataclass(frozen=True)
class HandRank:
    """
    Ranking of a 3-card hand.

    Attributes:
        category: Hand category (1-6)
        tiebreak: Rank values in descending order of importance
    """
    category: HandCategory
    tiebreak: Tuple[int, ...]

    @property
    def name(self) -> str:
        return HAND_CATEGORY_NAMES[self.category]

    def to_dict(self) -> dict:
        return {
            "category": int(self.category),
            "name": self.name,
            "tiebreak": list(self.tiebreak),
        }


def evaluate_hand(cards: Sequence[Card]) -> HandRank:
    """
    Evaluate a Teen Patti hand.

    Args:
        cards: Exactly three cards

    Returns:
        HandRank with the category and tiebreak key

    Raises:
        ValueError: If not exactly 3 cards are given
    """
    if len(cards) != CARDS_PER_HAND:
        raise ValueError(f"Need {CARDS_PER_HAND} cards, got {len(cards)}")

    values = sorted((c.value for c in cards), reverse=True)
    is_color = len({c.suit for c in cards}) == 1
    is_low_straight = tuple(values) == tuple(int(r) for r in LOW_STRAIGHT)
    is_sequence = is_low_straight or (
        values[0] - values[1] == 1 and values[1] - values[2] == 1
    )

    rank_counts = Counter(values)

    if len(rank_counts) == 1:
        return HandRank(HandCategory.TRAIL, tuple(values))

    if is_sequence and is_color:
        return HandRank(HandCategory.PURE_SEQUENCE, tuple(values))

    if is_sequence:
        return HandRank(HandCategory.SEQUENCE, tuple(values))

    if is_color:
        return HandRank(HandCategory.COLOR, tuple(values))

    if len(rank_counts) == 2:
        pair_value = next(v for v, c in rank_counts.items() if c == 2)
        kicker_value = next(v for v, c in rank_counts.items() if c == 1)
        return HandRank(HandCategory.PAIR, (pair_value, kicker_value))

    return HandRank(HandCategory.HIGH_CARD, tuple(values))


def _as_rank(hand: Union[HandRank, Sequence[Card]]) -> HandRank:
    if isinstance(hand, HandRank):
        return hand
    return evaluate_hand(hand)


def compare_hands(
    hand_a: Union[HandRank, Sequence[Card]],
    hand_b: Union[HandRank, Sequence[Card]],
) -> int:
    """
    Compare two hands.

    Returns:
        Positive if hand_a wins, negative if hand_b wins, 0 on an exact tie
    """
    a = _as_rank(hand_a)
    b = _as_rank(hand_b)

    if a.category != b.category:
        return int(a.category) - int(b.category)

    for i in range(max(len(a.tiebreak), len(b.tiebreak))):
        av = a.tiebreak[i] if i < len(a.tiebreak) else MISSING_TIEBREAK
        bv = b.tiebreak[i] if i < len(b.tiebreak) else MISSING_TIEBREAK
        if av != bv:
            return av - bv

    return 0


def get_hand_description(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the hand."""
    if len(cards) != CARDS_PER_HAND:
        return "Incomplete hand"

    rank = evaluate_hand(cards)
    high = _rank_name(max(rank.tiebreak))

    if rank.category == HandCategory.TRAIL:
        return f"Trail of {_plural(rank.tiebreak[0])}"
    elif rank.category in (HandCategory.PURE_SEQUENCE, HandCategory.SEQUENCE):
        return f"{rank.name}, {high} high"
    elif rank.category == HandCategory.COLOR:
        return f"Color, {high} high"
    elif rank.category == HandCategory.PAIR:
        return f"Pair of {_plural(rank.tiebreak[0])}"
    else:
        return f"High Card, {high}"


def _plural(value: int) -> str:
    name = _rank_name(value)
    return "Sixes" if name == "Six" else f"{name}s"


def _rank_name(value: int) -> str:
    """Get the name of a rank value."""
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace",
    }
    return names[Rank(value)]
