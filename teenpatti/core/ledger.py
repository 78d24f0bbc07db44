"""
Wager ledger: chip movements between seats and the pot.

The ledger only does bookkeeping. Callers work out how much a call or
raise costs (see ``rules.bet_amount``) before calling ``place_bet``.
"""

from __future__ import annotations
from typing import Iterable
import logging

from teenpatti.core.player import Player


logger = logging.getLogger(__name__)


class WagerLedger:
    """Tracks the pot and moves chips in and out of it."""

    def __init__(self) -> None:
        self.pot = 0

    def reset(self) -> None:
        self.pot = 0

    def place_bet(self, player: Player, requested: int) -> int:
        """
        Move up to ``requested`` chips from a seat into the pot.

        The amount is clamped to the seat's chips, so a balance never goes
        negative.

        Returns:
            Chips actually moved (0 if nothing could be paid)
        """
        actual = min(requested, player.chips)
        if actual <= 0:
            return 0

        player.chips -= actual
        player.total_bet += actual
        self.pot += actual
        return actual

    def award(self, player: Player, amount: int) -> None:
        """Credit ``amount`` chips to a seat."""
        player.chips += amount
        logger.debug(f"Awarded {amount} to {player.player_id}")

    def contributions(self, players: Iterable[Player]) -> int:
        """Sum of every seat's contribution; equals the pot at rest."""
        return sum(p.total_bet for p in players)
