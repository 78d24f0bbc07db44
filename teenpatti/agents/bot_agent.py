"""
Teen Patti Bot Implementation.

A simple heuristic opponent driven by hand strength and randomness:

1. Maybe look at the cards first.
2. Sequence or better: lean towards raising.
   Pair or worse: lean towards folding.
   Otherwise call.
3. With two seats left, sometimes ask for a show instead.

The probabilities are tunable. Every roll comes from the injected
generator (or the process-wide one), so tests can script the branches.
"""

import logging
import random
from typing import Dict, List, Any, Optional

from teenpatti.agents.base import BaseAgent, BotDecision
from teenpatti.core import rng as rng_source
from teenpatti.core.hand import HandCategory, evaluate_hand
from teenpatti.core.player import Player
from teenpatti.core.rules import ActionType


logger = logging.getLogger(__name__)


class TeenPattiBot(BaseAgent):
    """
    Hand-strength opponent with configurable tendencies.

    Attributes:
        see_probability: Chance to look at unseen cards before acting
        raise_probability: Chance to raise holding a Sequence or better
        fold_probability: Chance to fold holding a Pair or worse
        show_probability: Chance to ask for a show with two seats left
    """

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        see_probability: float = 0.4,
        raise_probability: float = 0.6,
        fold_probability: float = 0.3,
        show_probability: float = 0.2,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(player_id, name or f"Bot-{player_id}")
        self.see_probability = see_probability
        self.raise_probability = raise_probability
        self.fold_probability = fold_probability
        self.show_probability = show_probability
        self.rng = rng

    def decide(
        self,
        player: Player,
        alive_count: int,
        legal_actions: List[Dict[str, Any]],
    ) -> BotDecision:
        """Pick one action for the seat, plus whether to see first."""
        rng = self.rng or rng_source.get_rng()
        legal = {a["type"] for a in legal_actions}

        see_first = not player.has_seen and rng.random() < self.see_probability

        category = evaluate_hand(player.hand).category
        action = ActionType.CALL
        if category >= HandCategory.SEQUENCE and rng.random() < self.raise_probability:
            action = ActionType.RAISE
        elif category <= HandCategory.PAIR and rng.random() < self.fold_probability:
            action = ActionType.FOLD

        if alive_count == 2 and ActionType.SHOW.value in legal and rng.random() < self.show_probability:
            action = ActionType.SHOW

        if action.value not in legal:
            # Bets are off the table once the seat runs out of chips
            action = ActionType.SHOW if ActionType.SHOW.value in legal else ActionType.FOLD

        logger.debug(
            f"{self.name} holding {category.name}: "
            f"{'see, ' if see_first else ''}{action.value}"
        )
        return BotDecision(action=action, see_first=see_first)
