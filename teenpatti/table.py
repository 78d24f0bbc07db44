"""
Table session: one game, its bots and a clock.

The session is what the server talks to. Human commands are applied
straight away; when the turn passes to an automated seat the session
asks its clock to run the bot after a short "thinking" delay.

Every scheduled bot turn carries the round generation and action count
it was scheduled for. If the round was replaced (new round, table reset)
or anything else happened before the timer fires, the decision is
dropped instead of touching the new round.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
import logging
import random

from teenpatti.agents import BaseAgent, TeenPattiBot
from teenpatti.core import rng as rng_source
from teenpatti.core.clock import Clock, VirtualClock
from teenpatti.core.game import ActionResult, TeenPattiGame
from teenpatti.core.rules import ActionType, RoundPhase, SeatKind


logger = logging.getLogger(__name__)

# (round_generation, actions_taken, active_index)
TurnToken = Tuple[int, int, int]

DEFAULT_THINK_RANGE = (0.9, 1.5)


class TableSession:
    """
    Drives a ``TeenPattiGame`` for one human and any number of bots.

    Usage:
        session = TableSession(TeenPattiGame(), clock=VirtualClock())
        session.start_round()
        session.clock.advance(2.0)           # bots act
        session.take_action("0", ActionType.CALL)
    """

    def __init__(
        self,
        game: TeenPattiGame,
        clock: Optional[Clock] = None,
        agents: Optional[Dict[str, BaseAgent]] = None,
        think_range: Tuple[float, float] = DEFAULT_THINK_RANGE,
        rng: Optional[random.Random] = None,
    ):
        self.game = game
        self.clock = clock or VirtualClock()
        self.think_range = think_range
        self.rng = rng

        if agents is None:
            agents = {
                p.player_id: TeenPattiBot(p.player_id, name=p.name, rng=rng)
                for p in game.players
                if p.kind == SeatKind.AUTOMATED
            }
        self.agents = agents

        self._scheduled: Optional[TurnToken] = None
        self._handle = None
        self.closed = False
        self._listeners: List[Callable[[TableSession], None]] = []

    def add_listener(self, listener: Callable[[TableSession], None]) -> None:
        """Call ``listener(session)`` after every change to the game."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[TableSession], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def close(self) -> None:
        """Stop scheduling bot turns and cancel the one waiting on the clock."""
        self.closed = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._listeners.clear()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _token(self) -> TurnToken:
        return (self.game.round_generation, self.game.actions_taken, self.game.active_index)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_round(self) -> bool:
        started = self.game.start_round()
        if started:
            self._after_change()
        return started

    def new_round(self) -> bool:
        cleared = self.game.new_round()
        if cleared:
            self._after_change()
        return cleared

    def reset_table(self) -> None:
        self.game.reset_table()
        self._after_change()

    def take_action(self, player_id: str, action_type: ActionType) -> ActionResult:
        """Apply a human command. Automated seats are not driven from outside."""
        player = self.game.get_player(player_id)
        if player is None:
            return ActionResult(False, f"Unknown player: {player_id}")
        if player.kind != SeatKind.HUMAN:
            return ActionResult(False, "Automated seats act on their own")

        result = self.game.take_action(player_id, action_type)
        if result.success:
            self._after_change()
        return result

    def _after_change(self) -> None:
        self._notify()
        self._schedule_automated_turn()

    # ------------------------------------------------------------------
    # Automated turns
    # ------------------------------------------------------------------

    def _automated_turn_due(self) -> bool:
        player = self.game.current_player
        return player is not None and player.kind == SeatKind.AUTOMATED

    def _schedule_automated_turn(self) -> None:
        if self.closed or not self._automated_turn_due():
            return

        token = self._token()
        if self._scheduled == token:
            return
        self._scheduled = token

        rng = self.rng or rng_source.get_rng()
        delay = rng.uniform(*self.think_range)
        logger.debug(f"Scheduling {self.game.current_player.name} in {delay:.2f}s (generation {token[0]})")
        self._handle = self.clock.call_later(delay, lambda: self.run_automated_turn(token))

    def run_automated_turn(self, token: TurnToken) -> bool:
        """
        Play one scheduled bot turn.

        Returns:
            True if the decision was applied, False if it was stale
        """
        if self.closed or token != self._token() or not self._automated_turn_due():
            logger.info(f"Discarding stale automated decision for generation {token[0]}")
            return False
        return self._play_automated_turn()

    def _play_automated_turn(self) -> bool:
        game = self.game
        player = game.current_player
        agent = self.agents.get(player.player_id)
        if agent is None:
            logger.warning(f"No agent for automated seat {player.player_id}")
            return False

        decision = agent.decide(player, game.alive_count, game.get_legal_actions(player.player_id))
        result = game.apply_decision(player.player_id, decision.action, see_first=decision.see_first)
        if not result.success:
            logger.warning(f"{player.name} chose an illegal action: {result.message}")
            return False

        self._after_change()
        return True

    def step_automated(self) -> bool:
        """Play the current bot's turn now, without waiting on the clock."""
        if not self._automated_turn_due():
            return False
        return self._play_automated_turn()

    def run_until_human(self, max_steps: int = 200) -> int:
        """
        Play bot turns synchronously until a human must act or the round ends.

        Returns:
            Number of bot turns played
        """
        steps = 0
        while steps < max_steps and self.step_automated():
            steps += 1
        return steps

    @property
    def waiting_for_human(self) -> bool:
        player = self.game.current_player
        return (
            self.game.phase == RoundPhase.BETTING
            and player is not None
            and player.kind == SeatKind.HUMAN
        )

    def get_state(self, for_player_id: Optional[str] = None) -> dict:
        return self.game.get_state(for_player_id=for_player_id)
