"""
Teen Patti Core - Pure Python Round Logic

This module contains all round logic without any network dependencies.
"""

from teenpatti.core.card import Card, Deck, create_deck, shuffle_cards, deal_hands
from teenpatti.core.player import Player
from teenpatti.core.hand import HandCategory, HandRank, evaluate_hand, compare_hands
from teenpatti.core.game import TeenPattiGame, ActionResult
from teenpatti.core.rules import RoundPhase, ActionType, SeatKind, ConfigurationError
from teenpatti.core.resolver import OutcomeKind, RoundOutcome

__all__ = [
    "Card",
    "Deck",
    "create_deck",
    "shuffle_cards",
    "deal_hands",
    "Player",
    "HandCategory",
    "HandRank",
    "evaluate_hand",
    "compare_hands",
    "TeenPattiGame",
    "ActionResult",
    "RoundPhase",
    "ActionType",
    "SeatKind",
    "ConfigurationError",
    "OutcomeKind",
    "RoundOutcome",
]
