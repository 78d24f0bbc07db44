"""
Teen Patti Rules and Constants.

Table rules implemented by the engine:

1. Boot: every seat posts the boot before cards are dealt.

2. Blind and seen wagering: a blind seat calls for the current stake and
   raises for twice the stake. A seat that has seen its cards pays double:
   2x stake to call, 4x stake to raise.

3. A raise sets the current stake to the amount actually paid, so the
   stake only ever escalates.

4. Show: once exactly two seats remain, the seat to act may ask for a show
   and the two hands are compared.
"""

from enum import Enum, auto
from typing import Sequence


class RoundPhase(Enum):
    """Phases of a Teen Patti round."""
    IDLE = auto()      # No round in progress
    DEALT = auto()     # Cards assigned, betting not yet opened
    BETTING = auto()   # Seats act in turn
    SHOW = auto()      # Two hands being compared
    FINISHED = auto()  # Pot resolved


class ActionType(Enum):
    """Possible seat actions."""
    SEE_CARDS = "SEE_CARDS"
    FOLD = "FOLD"
    CALL = "CALL"
    RAISE = "RAISE"
    SHOW = "SHOW"


class SeatKind(Enum):
    """Who controls a seat."""
    HUMAN = "HUMAN"
    AUTOMATED = "AUTOMATED"


class ConfigurationError(ValueError):
    """Raised when a table cannot be built with the requested settings."""


# Default table settings
DEFAULT_BOOT_AMOUNT = 5
DEFAULT_STARTING_CHIPS = 1000
DEFAULT_BOT_COUNT = 2
MIN_SEATS = 2

CARDS_PER_HAND = 3
DECK_SIZE = 52
MAX_SEATS = DECK_SIZE // CARDS_PER_HAND

# Most-recent-first entries kept in the round's action log
ACTION_LOG_SIZE = 6

BETTING_ACTIONS = (ActionType.CALL, ActionType.RAISE)


def validate_seat_count(num_seats: int) -> None:
    """
    Check that a table of ``num_seats`` can be dealt from one deck.

    Raises:
        ConfigurationError: If fewer than two seats, or more seats than
            the deck can deal three cards to.
    """
    if num_seats < MIN_SEATS:
        raise ConfigurationError(f"A table needs at least {MIN_SEATS} seats, got {num_seats}")
    if CARDS_PER_HAND * num_seats > DECK_SIZE:
        raise ConfigurationError(
            f"{num_seats} seats need {CARDS_PER_HAND * num_seats} cards, "
            f"the deck only has {DECK_SIZE}"
        )


def call_amount(current_stake: int, is_blind: bool) -> int:
    """Chips a call costs: the stake when blind, double when seen."""
    return current_stake if is_blind else current_stake * 2


def raise_amount(current_stake: int, is_blind: bool) -> int:
    """Chips a raise costs: double the stake when blind, four times when seen."""
    return current_stake * 2 if is_blind else current_stake * 4


def bet_amount(action_type: ActionType, current_stake: int, is_blind: bool) -> int:
    """Requested chips for a CALL or RAISE."""
    if action_type == ActionType.CALL:
        return call_amount(current_stake, is_blind)
    if action_type == ActionType.RAISE:
        return raise_amount(current_stake, is_blind)
    raise ValueError(f"{action_type} is not a betting action")


def get_dealer_after(num_seats: int, dealer_index: int) -> int:
    """The dealer button moves one seat to the left every round."""
    return (dealer_index + 1) % num_seats


def get_first_to_act(num_seats: int, dealer_index: int) -> int:
    """The seat left of the dealer opens the betting."""
    return (dealer_index + 1) % num_seats


def next_seat_index(players: Sequence, current_index: int) -> int:
    """
    Get the next seat to act after ``current_index``.

    Folded seats are skipped. At most ``len(players)`` seats are looked
    at; if every other seat has folded the current index is returned.

    Args:
        players: Seats in seating order, each with a ``has_folded`` flag
        current_index: Seat that just acted

    Returns:
        Index of the next seat to act
    """
    num_seats = len(players)
    for step in range(1, num_seats + 1):
        candidate = (current_index + step) % num_seats
        if not players[candidate].has_folded:
            return candidate
    return current_index
