"""
Tests for the wager ledger and the table rules it relies on.
"""

import pytest
from teenpatti.core.ledger import WagerLedger
from teenpatti.core.player import Player
from teenpatti.core.rules import (
    ActionType, ConfigurationError,
    bet_amount, call_amount, raise_amount,
    get_dealer_after, get_first_to_act, next_seat_index, validate_seat_count,
)


class TestWagerLedger:
    """Tests for moving chips into the pot."""

    def test_place_bet(self, sample_player):
        ledger = WagerLedger()
        paid = ledger.place_bet(sample_player, 10)

        assert paid == 10
        assert sample_player.chips == 990
        assert sample_player.total_bet == 10
        assert ledger.pot == 10

    def test_bet_clamped_to_chips(self):
        """A short stack pays what it has, never going negative."""
        player = Player(player_id="p", name="Short", chips=7)
        ledger = WagerLedger()
        paid = ledger.place_bet(player, 20)

        assert paid == 7
        assert player.chips == 0
        assert ledger.pot == 7

    def test_bet_with_no_chips(self):
        """Nothing moves when the seat is broke."""
        player = Player(player_id="p", name="Broke", chips=0)
        ledger = WagerLedger()

        assert ledger.place_bet(player, 5) == 0
        assert player.total_bet == 0
        assert ledger.pot == 0

    def test_pot_equals_contributions(self):
        players = [Player(player_id=str(i), name=f"P{i}", chips=100) for i in range(3)]
        ledger = WagerLedger()
        for amount, player in zip((5, 10, 40), players):
            ledger.place_bet(player, amount)

        assert ledger.pot == 55
        assert ledger.contributions(players) == ledger.pot

    def test_award_and_reset(self, sample_player):
        ledger = WagerLedger()
        ledger.place_bet(sample_player, 50)
        ledger.award(sample_player, 50)
        assert sample_player.chips == 1000

        ledger.reset()
        assert ledger.pot == 0


class TestStakeRules:
    """Tests for blind and seen bet sizes."""

    def test_blind_amounts(self):
        assert call_amount(10, is_blind=True) == 10
        assert raise_amount(10, is_blind=True) == 20

    def test_seen_amounts(self):
        assert call_amount(10, is_blind=False) == 20
        assert raise_amount(10, is_blind=False) == 40

    def test_bet_amount(self):
        assert bet_amount(ActionType.CALL, 5, True) == 5
        assert bet_amount(ActionType.RAISE, 5, False) == 20

    def test_bet_amount_rejects_non_bets(self):
        with pytest.raises(ValueError):
            bet_amount(ActionType.FOLD, 5, True)


class TestSeating:
    """Tests for seat counts, the dealer button and turn order."""

    def test_seat_count_limits(self):
        validate_seat_count(2)
        validate_seat_count(17)
        with pytest.raises(ConfigurationError):
            validate_seat_count(1)
        with pytest.raises(ConfigurationError):
            validate_seat_count(18)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_seat_count(0)

    def test_dealer_rotation(self):
        assert get_dealer_after(3, 0) == 1
        assert get_dealer_after(3, 2) == 0
        assert get_first_to_act(3, 1) == 2
        assert get_first_to_act(3, 2) == 0

    def test_next_seat_skips_folded(self):
        players = [Player(player_id=str(i), name=f"P{i}") for i in range(4)]
        players[1].fold()
        players[2].fold()

        assert next_seat_index(players, 0) == 3
        assert next_seat_index(players, 3) == 0

    def test_next_seat_wraps(self):
        players = [Player(player_id=str(i), name=f"P{i}") for i in range(3)]
        assert next_seat_index(players, 2) == 0

    def test_next_seat_when_everyone_else_folded(self):
        """With no other live seat the current index comes back."""
        players = [Player(player_id=str(i), name=f"P{i}") for i in range(3)]
        players[0].fold()
        players[2].fold()

        assert next_seat_index(players, 1) == 1
