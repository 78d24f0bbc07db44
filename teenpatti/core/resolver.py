"""
Round resolution: who takes the pot.

Two ways a round ends:
- Last standing: a fold leaves one seat (or none) in the round.
- Showdown: a show is requested with exactly two seats left and the two
  hands are compared.

An exact tie at showdown splits the pot. The first contender in seating
order gets ``pot // 2`` and the second gets the rest, so an odd chip
always goes to the second seat.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any
import logging

from teenpatti.core.hand import compare_hands, evaluate_hand
from teenpatti.core.ledger import WagerLedger
from teenpatti.core.player import Player


logger = logging.getLogger(__name__)


class OutcomeKind(Enum):
    LAST_STANDING = "LAST_STANDING"
    SHOWDOWN = "SHOWDOWN"
    SPLIT = "SPLIT"
    VOID = "VOID"


@dataclass
class RoundOutcome:
    """
    How a round ended.

    Attributes:
        kind: Resolution path taken
        winner_ids: Seats that received chips
        payouts: Chips paid to each winner
        pot: Pot size at resolution
        title: Short headline for the result banner
        text: One-line explanation
    """
    kind: OutcomeKind
    winner_ids: List[str] = field(default_factory=list)
    payouts: Dict[str, int] = field(default_factory=dict)
    pot: int = 0
    title: str = ""
    text: str = ""

    @property
    def is_void(self) -> bool:
        return self.kind == OutcomeKind.VOID

    @property
    def unawarded(self) -> int:
        """Chips left in the pot after payouts."""
        return self.pot - sum(self.payouts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "winner_ids": list(self.winner_ids),
            "payouts": dict(self.payouts),
            "pot": self.pot,
            "unawarded": self.unawarded,
            "title": self.title,
            "text": self.text,
        }


def _void(pot: int, text: str) -> RoundOutcome:
    logger.warning(f"Round void, pot of {pot} left unawarded: {text}")
    return RoundOutcome(OutcomeKind.VOID, pot=pot, title="All Folded", text=text)


def resolve_last_standing(players: List[Player], ledger: WagerLedger) -> RoundOutcome:
    """
    Pay the pot to the only seat that has not folded.

    If nobody is left the round is void and the pot stays where it is.
    """
    pot = ledger.pot
    remaining = [p for p in players if not p.has_folded]

    if not remaining:
        return _void(pot, "No active players. Start a new round.")

    if len(remaining) > 1:
        raise ValueError(f"{len(remaining)} seats still in the round, nobody is last standing")

    winner = remaining[0]
    ledger.award(winner, pot)
    logger.info(f"{winner.name} wins pot of {pot} by default")

    return RoundOutcome(
        OutcomeKind.LAST_STANDING,
        winner_ids=[winner.player_id],
        payouts={winner.player_id: pot},
        pot=pot,
        title=f"{winner.name} wins",
        text="All other players folded",
    )


def resolve_showdown(players: List[Player], ledger: WagerLedger) -> RoundOutcome:
    """
    Compare the two remaining hands and pay out the pot.

    Contenders are taken in seating order; on an exact tie the first gets
    ``pot // 2`` and the second the remainder.
    """
    pot = ledger.pot
    contenders = [p for p in players if not p.has_folded]

    if len(contenders) < 2:
        return _void(pot, "Show needs two players in the round.")
    if len(contenders) > 2:
        raise ValueError(f"Show needs exactly two players, {len(contenders)} remain")

    first, second = contenders
    first_rank = evaluate_hand(first.hand)
    second_rank = evaluate_hand(second.hand)
    result = compare_hands(first_rank, second_rank)

    if result == 0:
        half = pot // 2
        ledger.award(first, half)
        ledger.award(second, pot - half)
        logger.info(f"Split pot of {pot} between {first.name} and {second.name}")
        return RoundOutcome(
            OutcomeKind.SPLIT,
            winner_ids=[first.player_id, second.player_id],
            payouts={first.player_id: half, second.player_id: pot - half},
            pot=pot,
            title="Split Pot",
            text="Both players have equal hands.",
        )

    if result > 0:
        winner, winner_rank, loser_rank = first, first_rank, second_rank
    else:
        winner, winner_rank, loser_rank = second, second_rank, first_rank

    ledger.award(winner, pot)
    logger.info(f"{winner.name} wins pot of {pot} at showdown with {winner_rank.name}")

    return RoundOutcome(
        OutcomeKind.SHOWDOWN,
        winner_ids=[winner.player_id],
        payouts={winner.player_id: pot},
        pot=pot,
        title=f"{winner.name} wins",
        text=f"{winner_rank.name} beats {loser_rank.name}",
    )
