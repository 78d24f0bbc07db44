"""
Teen Patti Round Engine - State Machine Implementation.

This module implements the round logic for a Teen Patti table.
It handles:
- Round phases (IDLE, DEALT, BETTING, SHOW, FINISHED)
- Seat actions (see cards, fold, call, raise, show)
- Boot posting and dealer rotation
- Blind / seen stake arithmetic and stake escalation
- Resolution by last player standing or showdown

Every action goes through ``take_action``, which checks the phase, the
turn and the seat's own state before anything is mutated. An illegal
action returns an unsuccessful ``ActionResult`` and leaves the round
untouched.
"""

from __future__ import annotations
from collections import deque
from typing import Deque, List, Dict, Optional, Any
from dataclasses import dataclass
import logging
import random

from teenpatti.core.card import Deck
from teenpatti.core.hand import evaluate_hand, get_hand_description
from teenpatti.core.ledger import WagerLedger
from teenpatti.core.player import Player
from teenpatti.core.resolver import RoundOutcome, resolve_last_standing, resolve_showdown
from teenpatti.core.rules import (
    RoundPhase, ActionType, SeatKind, ConfigurationError,
    validate_seat_count, bet_amount, call_amount, raise_amount,
    get_dealer_after, get_first_to_act, next_seat_index,
    DEFAULT_BOOT_AMOUNT, DEFAULT_STARTING_CHIPS, DEFAULT_BOT_COUNT,
    ACTION_LOG_SIZE, BETTING_ACTIONS,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a seat action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


def default_players(
    num_bots: int = DEFAULT_BOT_COUNT,
    starting_chips: int = DEFAULT_STARTING_CHIPS,
    human_name: str = "You",
) -> List[Player]:
    """One human seat followed by ``num_bots`` automated seats."""
    players = [Player(player_id="0", name=human_name, kind=SeatKind.HUMAN, chips=starting_chips)]
    for i in range(1, num_bots + 1):
        players.append(Player(
            player_id=str(i),
            name=f"Bot {i}",
            kind=SeatKind.AUTOMATED,
            chips=starting_chips,
        ))
    return players


class TeenPattiGame:
    """
    Teen Patti round engine implementing a state machine.

    Usage:
        game = TeenPattiGame(num_bots=2, boot_amount=5)
        game.start_round()

        while game.is_round_running():
            player = game.current_player
            result = game.take_action(player.player_id, ActionType.CALL)

        outcome = game.outcome
    """

    def __init__(
        self,
        num_bots: int = DEFAULT_BOT_COUNT,
        boot_amount: int = DEFAULT_BOOT_AMOUNT,
        starting_chips: int = DEFAULT_STARTING_CHIPS,
        human_name: str = "You",
        players: Optional[List[Player]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a new table.

        Args:
            num_bots: Number of automated seats next to the human seat
            boot_amount: Boot every seat posts each round
            starting_chips: Chips every seat starts (and resets) with
            human_name: Display name of the human seat
            players: Explicit seats, overriding num_bots/human_name
            rng: Randomness for shuffling (defaults to the process-wide one)

        Raises:
            ConfigurationError: If the seats cannot be dealt from one deck
                or the boot is not positive
        """
        if players is None:
            players = default_players(num_bots, starting_chips, human_name)

        validate_seat_count(len(players))
        if boot_amount <= 0:
            raise ConfigurationError(f"Boot amount must be positive, got {boot_amount}")
        if len({p.player_id for p in players}) != len(players):
            raise ConfigurationError("Player ids must be unique")

        for i, player in enumerate(players):
            player.seat = i

        self.players: List[Player] = players
        self.boot_amount = boot_amount
        self.starting_chips = starting_chips
        self.rng = rng

        self.ledger = WagerLedger()
        self.deck: Optional[Deck] = None
        self.phase = RoundPhase.IDLE
        self.round_number = 0

        # Bumped whenever the round in play is replaced, so pending
        # automated decisions can tell they belong to an older round
        self.round_generation = 0
        # Applied actions in the current round
        self.actions_taken = 0

        self.dealer_index = 0
        self.active_index = get_first_to_act(self.num_players, self.dealer_index)
        self.current_stake = boot_amount

        self.action_log: Deque[str] = deque(maxlen=ACTION_LOG_SIZE)
        self.outcome: Optional[RoundOutcome] = None

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def pot(self) -> int:
        return self.ledger.pot

    @property
    def alive_count(self) -> int:
        """Number of seats that have not folded."""
        return sum(1 for p in self.players if not p.has_folded)

    @property
    def current_player(self) -> Optional[Player]:
        """The seat whose turn it is to act."""
        if self.phase != RoundPhase.BETTING:
            return None
        return self.players[self.active_index]

    @property
    def can_show(self) -> bool:
        return self.phase == RoundPhase.BETTING and self.alive_count == 2

    def is_round_running(self) -> bool:
        """Check if a round is currently in progress."""
        return self.phase in (RoundPhase.DEALT, RoundPhase.BETTING, RoundPhase.SHOW)

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def start_round(self, open_betting: bool = True) -> bool:
        """
        Start a new round.

        Only legal from IDLE or FINISHED. Resets the seats, moves the
        dealer, posts the boot, shuffles and deals.

        Args:
            open_betting: Move straight on to BETTING. Pass False to hold
                the round in DEALT until ``open_betting()`` is called.

        Returns:
            True if the round started, False otherwise
        """
        if self.phase not in (RoundPhase.IDLE, RoundPhase.FINISHED):
            logger.debug(f"Cannot start round during {self.phase.name}")
            return False

        self._clear_round()
        self.round_number += 1
        logger.info(f"Starting round #{self.round_number}")

        self.dealer_index = get_dealer_after(self.num_players, self.dealer_index)
        self.active_index = get_first_to_act(self.num_players, self.dealer_index)

        self._post_boot()
        self._deal_cards()

        self.phase = RoundPhase.DEALT
        if open_betting:
            self.open_betting()
        return True

    def open_betting(self) -> bool:
        """Move a dealt round into BETTING."""
        if self.phase != RoundPhase.DEALT:
            return False
        self.phase = RoundPhase.BETTING
        logger.debug(f"Betting open, {self.current_player.name} to act")
        return True

    def new_round(self) -> bool:
        """Clear a finished round back to IDLE. Chips and dealer are kept."""
        if self.phase not in (RoundPhase.IDLE, RoundPhase.FINISHED):
            return False
        self._clear_round()
        return True

    def reset_table(self) -> None:
        """Full reset from any phase: starting chips, dealer back to seat 0."""
        self._clear_round()
        for player in self.players:
            player.chips = self.starting_chips
        self.dealer_index = 0
        self.active_index = get_first_to_act(self.num_players, self.dealer_index)
        self.round_number = 0
        logger.info("Table reset")

    def _clear_round(self) -> None:
        for player in self.players:
            player.reset_for_new_round()
        self.ledger.reset()
        self.deck = None
        self.current_stake = self.boot_amount
        self.action_log.clear()
        self.outcome = None
        self.actions_taken = 0
        self.round_generation += 1
        self.phase = RoundPhase.IDLE

    def _post_boot(self) -> None:
        """Every seat posts the boot, or whatever it has left."""
        short = []
        for player in self.players:
            paid = self.ledger.place_bet(player, self.boot_amount)
            if paid < self.boot_amount:
                logger.warning(f"{player.name} short on boot: posted {paid} of {self.boot_amount}")
                short.append(f"{player.name} {paid}")

        if short:
            self._append_log(f"Boot posted: {self.boot_amount} each, short: {', '.join(short)}")
        else:
            self._append_log(f"Boot posted: {self.boot_amount} by each player")

    def _deal_cards(self) -> None:
        self.deck = Deck(shuffle=True, rng=self.rng)
        hands = self.deck.deal_hands(self.num_players, self.dealer_index)
        for player, hand in zip(self.players, hands):
            player.deal_cards(hand)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def take_action(self, player_id: str, action_type: ActionType) -> ActionResult:
        """
        Process an action from a seat.

        Args:
            player_id: Seat trying to act
            action_type: SEE_CARDS, FOLD, CALL, RAISE or SHOW

        Returns:
            ActionResult indicating success/failure and the chips moved
        """
        error = self._check_actor(player_id) or self._check_action(player_id, action_type)
        if error:
            logger.debug(f"Ignored {action_type.value} from {player_id}: {error}")
            return ActionResult(False, error)

        return self._execute_action(self.players[self.active_index], action_type)

    def apply_decision(
        self,
        player_id: str,
        action_type: ActionType,
        see_first: bool = False,
    ) -> ActionResult:
        """
        See cards (optionally) and take one action, as a single step.

        Nothing is applied unless the main action is legal.
        """
        error = self._check_actor(player_id) or self._check_action(player_id, action_type)
        if error:
            logger.debug(f"Ignored {action_type.value} from {player_id}: {error}")
            return ActionResult(False, error)

        player = self.players[self.active_index]
        if see_first and not player.has_seen and action_type != ActionType.SEE_CARDS:
            self._execute_action(player, ActionType.SEE_CARDS)
        return self._execute_action(player, action_type)

    def _check_actor(self, player_id: str) -> Optional[str]:
        if self.phase != RoundPhase.BETTING:
            return f"No betting in phase {self.phase.name}"
        player = self.players[self.active_index]
        if player.player_id != player_id:
            return "Not your turn"
        if player.has_folded:
            return "Player has folded"
        return None

    def _check_action(self, player_id: str, action_type: ActionType) -> Optional[str]:
        player = self.get_player(player_id)

        if action_type == ActionType.SEE_CARDS:
            if player.has_seen:
                return "Cards already seen"
        elif action_type in BETTING_ACTIONS:
            if player.chips <= 0:
                return "No chips left to bet"
        elif action_type == ActionType.SHOW:
            if self.alive_count != 2:
                return "Show needs exactly two players in the round"
        elif action_type != ActionType.FOLD:
            return f"Unknown action: {action_type}"

        return None

    def _execute_action(self, player: Player, action_type: ActionType) -> ActionResult:
        """Apply an action already known to be legal."""
        self.actions_taken += 1
        logger.debug(f"{player.name}: {action_type.value}")

        if action_type == ActionType.SEE_CARDS:
            player.see_cards()
            self._append_log(f"{player.name} sees cards")
            return ActionResult(True, "Saw cards", ActionType.SEE_CARDS, 0)

        elif action_type == ActionType.FOLD:
            player.fold()
            self._append_log(f"{player.name} folded")
            if self.alive_count <= 1:
                self._finish_by_last_standing()
            else:
                self._advance_turn()
            return ActionResult(True, "Folded", ActionType.FOLD, 0)

        elif action_type in BETTING_ACTIONS:
            requested = bet_amount(action_type, self.current_stake, player.is_blind)
            actual = self.ledger.place_bet(player, requested)

            if action_type == ActionType.RAISE:
                # A raise clamped by a short stack never lowers the stake
                self.current_stake = max(self.current_stake, actual)
                player.last_action = f"RAISE {actual}"
                self._append_log(f"{player.name} raises to {actual}")
                message = f"Raised to {actual}"
            else:
                player.last_action = f"CALL {actual}"
                self._append_log(f"{player.name} calls {actual}")
                message = f"Called {actual}"

            self._advance_turn()
            return ActionResult(True, message, action_type, actual)

        # SHOW
        player.last_action = "SHOW"
        self._append_log(f"{player.name} requests show")
        self._go_to_showdown()
        return ActionResult(True, "Show", ActionType.SHOW, 0)

    def _advance_turn(self) -> None:
        self.active_index = next_seat_index(self.players, self.active_index)

    def _finish_by_last_standing(self) -> None:
        self.outcome = resolve_last_standing(self.players, self.ledger)
        if not self.outcome.is_void:
            winner = self.get_player(self.outcome.winner_ids[0])
            self._append_log(f"{winner.name} wins pot by default")
        self.phase = RoundPhase.FINISHED
        logger.info(f"Round #{self.round_number} finished: {self.outcome.title}")

    def _go_to_showdown(self) -> None:
        self.phase = RoundPhase.SHOW
        self.outcome = resolve_showdown(self.players, self.ledger)
        self._append_log(self.outcome.title)
        self.phase = RoundPhase.FINISHED
        logger.info(f"Round #{self.round_number} finished at showdown: {self.outcome.text}")

    def _append_log(self, entry: str) -> None:
        """Most recent entry first; the deque drops the oldest."""
        self.action_log.appendleft(entry)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_legal_actions(self, player_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get legal actions for the specified seat (or the seat to act).

        Returns:
            List of action dicts with type and, for bets, the chips it costs
        """
        if player_id is None:
            player = self.current_player
            if player is None:
                return []
            player_id = player.player_id

        if self._check_actor(player_id):
            return []

        player = self.get_player(player_id)
        actions = []

        if not player.has_seen:
            actions.append({"type": ActionType.SEE_CARDS.value})

        actions.append({"type": ActionType.FOLD.value})

        if player.chips > 0:
            actions.append({
                "type": ActionType.CALL.value,
                "amount": min(call_amount(self.current_stake, player.is_blind), player.chips),
            })
            actions.append({
                "type": ActionType.RAISE.value,
                "amount": min(raise_amount(self.current_stake, player.is_blind), player.chips),
            })

        if self.alive_count == 2:
            actions.append({"type": ActionType.SHOW.value})

        return actions

    def _cards_visible(self, player: Player, viewer_id: Optional[str]) -> bool:
        if self.phase in (RoundPhase.SHOW, RoundPhase.FINISHED):
            return True
        return player.player_id == viewer_id and not player.is_blind

    def get_state(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Get the current round state.

        Hands are filtered: the viewer sees its own hand once it is no
        longer blind, and every hand is face up after the round ends.

        Args:
            for_player_id: If specified, include private info for this seat

        Returns:
            Round state dictionary
        """
        current = self.current_player
        public_info = {
            "phase": self.phase.name,
            "round_number": self.round_number,
            "pot": self.pot,
            "boot_amount": self.boot_amount,
            "current_stake": self.current_stake,
            "dealer_index": self.dealer_index,
            "active_index": self.active_index,
            "current_player": current.player_id if current else None,
            "players": [
                p.to_dict(show_cards=self._cards_visible(p, for_player_id))
                for p in self.players
            ],
            "action_log": list(self.action_log),
            "outcome": self.outcome.to_dict() if self.outcome else None,
        }

        private_info: Dict[str, Any] = {}
        if for_player_id:
            player = self.get_player(for_player_id)
            if player:
                visible = self._cards_visible(player, for_player_id) and bool(player.hand)
                private_info = {
                    "hand": [c.to_dict() for c in player.hand] if visible else [],
                    "hand_description": get_hand_description(player.hand) if visible else None,
                    "hand_rank": evaluate_hand(player.hand).to_dict() if visible else None,
                    "is_turn": current is not None and current.player_id == for_player_id,
                    "available_moves": [a["type"] for a in self.get_legal_actions(for_player_id)],
                    "call_amount": call_amount(self.current_stake, player.is_blind),
                    "raise_amount": raise_amount(self.current_stake, player.is_blind),
                    "can_show": self.can_show,
                }

        return {
            "public_info": public_info,
            "private_info": private_info,
        }

    def get_winners(self) -> List[Dict[str, Any]]:
        """Get winner information after the round is complete."""
        if self.phase != RoundPhase.FINISHED or self.outcome is None:
            return []

        winners = []
        for pid in self.outcome.winner_ids:
            player = self.get_player(pid)
            winners.append({
                "player_id": pid,
                "name": player.name,
                "amount": self.outcome.payouts.get(pid, 0),
                "chips": player.chips,
                "hand_type": evaluate_hand(player.hand).name if player.hand else None,
                "description": get_hand_description(player.hand),
            })
        return winners
