"""
Player (seat) class for Teen Patti.

Manages seat state including:
- Chip count (persists across rounds)
- The three-card hand
- Blind / seen status
- Fold status and total contribution to the current pot
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from teenpatti.core.card import Card
from teenpatti.core.rules import SeatKind


@dataclass
class Player:
    """
    A seat at the Teen Patti table.

    Attributes:
        player_id: Unique identifier for the seat
        name: Display name
        kind: HUMAN or AUTOMATED
        chips: Current chip count, never negative
        seat: Seat position at the table (0-indexed)
        hand: The seat's cards (empty or exactly 3)
        is_blind: Still betting without having looked at the hand
        has_seen: Has looked at the hand this round
        has_folded: Has folded this round
        total_bet: Chips put into the current pot, boot included
    """
    player_id: str
    name: str
    kind: SeatKind = SeatKind.AUTOMATED
    chips: int = 0
    seat: int = 0
    hand: List[Card] = field(default_factory=list)
    is_blind: bool = True
    has_seen: bool = False
    has_folded: bool = False
    total_bet: int = 0

    # Track last action for display
    last_action: Optional[str] = None

    def reset_for_new_round(self) -> None:
        """Clear everything except chips."""
        self.hand = []
        self.is_blind = True
        self.has_seen = False
        self.has_folded = False
        self.total_bet = 0
        self.last_action = None

    def deal_cards(self, cards: List[Card]) -> None:
        self.hand = list(cards)

    def see_cards(self) -> None:
        """Look at the hand; later bets are made as a seen seat."""
        self.is_blind = False
        self.has_seen = True
        self.last_action = "SEEN"

    def fold(self) -> None:
        self.has_folded = True
        self.last_action = "FOLD"

    @property
    def is_human(self) -> bool:
        return self.kind == SeatKind.HUMAN

    @property
    def is_in_round(self) -> bool:
        """Check if the seat still contests the pot."""
        return not self.has_folded and bool(self.hand)

    def to_dict(self, show_cards: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            show_cards: If True, include the hand face up
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "kind": self.kind.value,
            "seat": self.seat,
            "chips": self.chips,
            "total_bet": self.total_bet,
            "is_blind": self.is_blind,
            "has_seen": self.has_seen,
            "has_folded": self.has_folded,
            "last_action": self.last_action,
            "card_count": len(self.hand),
        }

        if show_cards and self.hand:
            result["cards"] = [card.to_dict() for card in self.hand]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.total_bet}, folded={self.has_folded})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hand) if self.hand else "??"
        return f"{self.name} [{cards_str}] {self.chips}"
