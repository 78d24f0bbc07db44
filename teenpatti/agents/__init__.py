"""
Teen Patti Agents - automated seat policies.
"""

from teenpatti.agents.base import BaseAgent, BotDecision
from teenpatti.agents.bot_agent import TeenPattiBot

__all__ = ["BaseAgent", "BotDecision", "TeenPattiBot"]
