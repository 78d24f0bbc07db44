"""
Card and Deck classes for Teen Patti.

Cards carry an integer rank value (2 lowest, Ace highest) so hand
evaluation can work on plain integers, while string helpers keep the
symbols the table displays (``"10♥"``, ``"A♠"``).
"""

from __future__ import annotations
import random
from typing import List, Optional, Sequence, Tuple
from enum import IntEnum

from teenpatti.core import rng as rng_source
from teenpatti.core.rules import CARDS_PER_HAND


class Suit(IntEnum):
    """Card suits, in the order the deck is built."""
    SPADES = 0    # ♠
    HEARTS = 1    # ♥
    DIAMONDS = 2  # ♦
    CLUBS = 3     # ♣


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (highest)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

SUIT_CHARS = {
    Suit.SPADES: "s",
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
}

RANK_SYMBOLS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

SYMBOL_TO_RANK = {v: k for k, v in RANK_SYMBOLS.items()}
SYMBOL_TO_RANK["T"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("A♠"), Card.from_string("10h")
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def value(self) -> int:
        """Rank value used for sequences and tiebreaks (0 = Two, 12 = Ace)."""
        return int(self._rank)

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts "A♠", "10♥", "As", "Th" or "10h". The suit is always the
        last character.
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part = s[:-1].upper()
        suit_part = s[-1]

        if rank_part not in SYMBOL_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        if suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        elif suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(SYMBOL_TO_RANK[rank_part], suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return False

    def __hash__(self) -> int:
        return int(self._rank) * 4 + int(self._suit)

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self._rank < other._rank

    def __repr__(self) -> str:
        return f"Card({RANK_SYMBOLS[self._rank]}{SUIT_CHARS[self._suit]})"

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_SYMBOLS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "color": self.color,
        }


def create_deck() -> List[Card]:
    """Return the 52 cards in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_cards(cards: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Return a uniformly random permutation of ``cards``.

    Fisher-Yates: walk from the back, swapping each slot with a random
    slot at or before it.
    """
    rng = rng or rng_source.get_rng()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal_hands(
    cards: Sequence[Card],
    num_seats: int,
    dealer_index: int,
) -> Tuple[List[List[Card]], List[Card]]:
    """
    Deal three cards to each seat, one per seat per pass.

    The first card goes to the seat left of the dealer. Cards are taken
    from the front of ``cards``.

    Returns:
        Tuple of (hands indexed by seat, remaining cards)
    """
    needed = CARDS_PER_HAND * num_seats
    if needed > len(cards):
        raise ValueError(f"Cannot deal {needed} cards, only {len(cards)} remain")

    hands: List[List[Card]] = [[] for _ in range(num_seats)]
    position = 0
    for _ in range(CARDS_PER_HAND):
        for offset in range(1, num_seats + 1):
            seat = (dealer_index + offset) % num_seats
            hands[seat].append(cards[position])
            position += 1

    return hands, list(cards[position:])


class Deck:
    """
    A standard 52-card deck, created fresh for every round.

    Usage:
        deck = Deck(rng=random.Random(7))
        hands = deck.deal_hands(num_seats=3, dealer_index=0)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        self._rng = rng
        self._cards: List[Card] = create_deck()
        self._dealt: List[Card] = []
        if shuffle:
            self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        self._cards = shuffle_cards(self._cards, self._rng)

    def deal_hands(self, num_seats: int, dealer_index: int) -> List[List[Card]]:
        """Deal a three-card hand to every seat, consuming the deck."""
        hands, remaining = deal_hands(self._cards, num_seats, dealer_index)
        for hand in hands:
            self._dealt.extend(hand)
        self._cards = remaining
        return hands

    @property
    def cards(self) -> List[Card]:
        """Remaining cards, top of the deck first."""
        return self._cards.copy()

    @property
    def remaining(self) -> int:
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards, e.g. ``"A♠ K♥ 10♦"`` or ``"As Kh Td"``.
    """
    return [Card.from_string(s) for s in cards_str.split()]
