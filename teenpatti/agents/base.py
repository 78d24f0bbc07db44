"""
Base Agent Interface for Teen Patti.

This module defines the abstract base class for automated seats.

Usage:
    class MyAgent(BaseAgent):
        def decide(self, player, alive_count, legal_actions):
            return BotDecision(action=ActionType.CALL)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Any, Optional

from teenpatti.core.player import Player
from teenpatti.core.rules import ActionType


@dataclass
class BotDecision:
    """
    One automated turn.

    Attributes:
        action: The single action the seat takes
        see_first: Look at the cards before acting
    """
    action: ActionType
    see_first: bool = False


class BaseAgent(ABC):
    """
    Abstract base class for automated Teen Patti seats.

    Attributes:
        player_id: Seat this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def decide(
        self,
        player: Player,
        alive_count: int,
        legal_actions: List[Dict[str, Any]],
    ) -> BotDecision:
        """
        Choose the seat's next move.

        Args:
            player: The seat to act, hand included
            alive_count: Seats that have not folded
            legal_actions: Action dicts from ``TeenPattiGame.get_legal_actions``

        Returns:
            BotDecision with exactly one action
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"
