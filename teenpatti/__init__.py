"""
Teen Patti - Three-card Table Engine

A Teen Patti round engine for the casino lobby with:
- Pure Python round logic (cards, hand ranking, wagers, turn order)
- A heuristic bot for automated seats
- FastAPI + WebSocket server layer

Usage:
    from teenpatti.core import Card, TeenPattiGame, ActionType
    from teenpatti.agents import TeenPattiBot
    from teenpatti.table import TableSession
"""

__version__ = "0.1.0"

from teenpatti.core.card import Card, Deck
from teenpatti.core.player import Player
from teenpatti.core.game import TeenPattiGame
from teenpatti.core.hand import HandRank, evaluate_hand, compare_hands

__all__ = [
    "Card",
    "Deck",
    "Player",
    "TeenPattiGame",
    "HandRank",
    "evaluate_hand",
    "compare_hands",
    "__version__",
]
