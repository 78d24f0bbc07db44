"""
Tests for the round state machine.
"""

import random

import pytest
from teenpatti.core.game import TeenPattiGame
from teenpatti.core.player import Player
from teenpatti.core.resolver import OutcomeKind
from teenpatti.core.rules import ActionType, ConfigurationError, RoundPhase, SeatKind


def legal_types(game, player_id):
    return [a["type"] for a in game.get_legal_actions(player_id)]


class TestTableSetup:
    """Tests for building a table."""

    def test_default_table(self, three_seat_game):
        game = three_seat_game
        assert game.num_players == 3
        assert game.players[0].kind == SeatKind.HUMAN
        assert game.players[0].name == "You"
        assert [p.name for p in game.players[1:]] == ["Bot 1", "Bot 2"]
        assert all(p.chips == 1000 for p in game.players)
        assert game.phase == RoundPhase.IDLE

    def test_too_few_seats(self):
        with pytest.raises(ConfigurationError):
            TeenPattiGame(num_bots=0)

    def test_too_many_seats(self):
        """17 seats fit in one deck, 18 do not."""
        assert TeenPattiGame(num_bots=16).num_players == 17
        with pytest.raises(ConfigurationError):
            TeenPattiGame(num_bots=17)

    def test_boot_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            TeenPattiGame(boot_amount=0)

    def test_duplicate_player_ids(self):
        players = [Player(player_id="a", name="A"), Player(player_id="a", name="B")]
        with pytest.raises(ConfigurationError):
            TeenPattiGame(players=players)


class TestRoundStart:
    """Tests for starting a round."""

    def test_start_round(self, three_seat_game):
        """Boot is posted, cards dealt, seat left of the new dealer acts."""
        game = three_seat_game
        assert game.start_round()

        assert game.phase == RoundPhase.BETTING
        assert game.round_number == 1
        assert game.dealer_index == 1
        assert game.active_index == 2
        assert game.current_player.player_id == "2"
        assert game.pot == 15
        assert game.current_stake == 5
        assert all(p.chips == 995 for p in game.players)
        assert all(len(p.hand) == 3 for p in game.players)
        assert all(p.is_blind for p in game.players)
        assert list(game.action_log) == ["Boot posted: 5 by each player"]

    def test_dealt_cards_are_unique(self, three_seat_game):
        three_seat_game.start_round()
        cards = [c for p in three_seat_game.players for c in p.hand]
        assert len(set(cards)) == 9

    def test_hold_in_dealt(self, three_seat_game):
        """A round can be held in DEALT until betting opens."""
        game = three_seat_game
        game.start_round(open_betting=False)

        assert game.phase == RoundPhase.DEALT
        assert game.current_player is None
        assert not game.take_action("2", ActionType.CALL).success

        assert game.open_betting()
        assert game.phase == RoundPhase.BETTING
        assert game.current_player.player_id == "2"

    def test_cannot_start_while_running(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        assert not game.start_round()
        assert game.round_number == 1

    def test_short_stack_boot(self):
        """A seat that cannot cover the boot posts what it has."""
        players = [
            Player(player_id="a", name="A", kind=SeatKind.HUMAN, chips=3),
            Player(player_id="b", name="B", chips=100),
        ]
        game = TeenPattiGame(players=players, rng=random.Random(1))
        game.start_round()

        assert players[0].chips == 0
        assert players[0].total_bet == 3
        assert game.pot == 8
        assert game.action_log[0] == "Boot posted: 5 each, short: A 3"

    def test_dealer_rotates_each_round(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.FOLD)
        game.take_action("0", ActionType.FOLD)
        assert game.phase == RoundPhase.FINISHED

        game.start_round()
        assert game.round_number == 2
        assert game.dealer_index == 2
        assert game.active_index == 0


class TestActions:
    """Tests for seat actions and stake arithmetic."""

    def test_scenario_blind_call_raise_fold(self, three_seat_game):
        """Call, raise and fold from the opening of a three-seat round."""
        game = three_seat_game
        game.start_round()

        result = game.take_action("2", ActionType.CALL)
        assert result.success
        assert result.amount == 5
        assert game.pot == 20
        assert game.active_index == 0

        result = game.take_action("0", ActionType.RAISE)
        assert result.amount == 10
        assert game.pot == 30
        assert game.current_stake == 10
        assert game.active_index == 1

        game.take_action("1", ActionType.FOLD)
        assert game.alive_count == 2
        assert game.active_index == 2
        assert game.can_show
        assert "SHOW" in legal_types(game, "2")
        assert list(game.action_log)[:3] == [
            "Bot 1 folded",
            "You raises to 10",
            "Bot 2 calls 5",
        ]

    def test_scenario_everyone_folds_to_one(self, three_seat_game):
        """The last seat standing takes the pot."""
        game = three_seat_game
        game.start_round()

        game.take_action("2", ActionType.FOLD)
        assert game.active_index == 0
        game.take_action("0", ActionType.FOLD)

        assert game.phase == RoundPhase.FINISHED
        assert game.outcome.kind == OutcomeKind.LAST_STANDING
        assert game.outcome.winner_ids == ["1"]
        assert game.players[1].chips == 1010
        assert game.action_log[0] == "Bot 1 wins pot by default"

        winners = game.get_winners()
        assert winners[0]["player_id"] == "1"
        assert winners[0]["amount"] == 15

    def test_see_cards_does_not_pass_turn(self, three_seat_game):
        game = three_seat_game
        game.start_round()

        result = game.take_action("2", ActionType.SEE_CARDS)
        assert result.success
        assert game.active_index == 2
        assert game.players[2].has_seen
        assert not game.players[2].is_blind
        assert "SEE_CARDS" not in legal_types(game, "2")

    def test_seen_call_pays_double(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.SEE_CARDS)

        result = game.take_action("2", ActionType.CALL)
        assert result.amount == 10
        assert game.current_stake == 5

    def test_seen_raise_pays_four_times(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.SEE_CARDS)

        result = game.take_action("2", ActionType.RAISE)
        assert result.amount == 20
        assert game.current_stake == 20

        # Blind seat now calls at the new stake
        assert game.take_action("0", ActionType.CALL).amount == 20

    def test_short_raise_never_lowers_stake(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.players[2].chips = 3

        result = game.take_action("2", ActionType.RAISE)
        assert result.amount == 3
        assert game.players[2].chips == 0
        assert game.current_stake == 5

    def test_legal_action_amounts_are_clamped(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.players[2].chips = 7

        actions = {a["type"]: a for a in game.get_legal_actions("2")}
        assert actions["CALL"]["amount"] == 5
        assert actions["RAISE"]["amount"] == 7

    def test_apply_decision_sees_then_acts(self, three_seat_game):
        game = three_seat_game
        game.start_round()

        result = game.apply_decision("2", ActionType.CALL, see_first=True)
        assert result.amount == 10
        assert game.players[2].has_seen
        assert game.actions_taken == 2
        assert list(game.action_log)[:2] == ["Bot 2 calls 10", "Bot 2 sees cards"]


class TestIllegalActions:
    """Illegal actions are rejected without touching the round."""

    def snapshot(self, game):
        return (
            game.phase, game.pot, game.active_index, game.current_stake,
            game.actions_taken, list(game.action_log),
            [(p.chips, p.total_bet, p.has_seen, p.has_folded) for p in game.players],
        )

    def test_action_before_round(self, three_seat_game):
        result = three_seat_game.take_action("0", ActionType.CALL)
        assert not result.success
        assert three_seat_game.phase == RoundPhase.IDLE

    def test_out_of_turn(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        before = self.snapshot(game)

        result = game.take_action("0", ActionType.CALL)
        assert not result.success
        assert result.message == "Not your turn"
        assert self.snapshot(game) == before

    def test_see_twice(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.SEE_CARDS)
        before = self.snapshot(game)

        result = game.take_action("2", ActionType.SEE_CARDS)
        assert not result.success
        assert self.snapshot(game) == before

    def test_show_with_three_seats(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        before = self.snapshot(game)

        assert not game.take_action("2", ActionType.SHOW).success
        assert "SHOW" not in legal_types(game, "2")
        assert self.snapshot(game) == before

    def test_bet_with_no_chips(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.players[2].chips = 0
        before = self.snapshot(game)

        assert not game.take_action("2", ActionType.CALL).success
        assert not game.take_action("2", ActionType.RAISE).success
        assert self.snapshot(game) == before
        assert legal_types(game, "2") == ["SEE_CARDS", "FOLD"]

    def test_apply_decision_rejected_applies_nothing(self, three_seat_game):
        game = three_seat_game
        game.start_round()

        result = game.apply_decision("0", ActionType.CALL, see_first=True)
        assert not result.success
        assert not game.players[0].has_seen

    def test_no_legal_actions_off_turn(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        assert game.get_legal_actions("0") == []
        assert legal_types(game, None)[0] == "SEE_CARDS"


class TestRoundLifecycle:
    """Tests for new_round and reset_table."""

    def test_new_round_only_when_finished(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        assert not game.new_round()

        game.take_action("2", ActionType.FOLD)
        game.take_action("0", ActionType.FOLD)
        generation = game.round_generation

        assert game.new_round()
        assert game.phase == RoundPhase.IDLE
        assert game.pot == 0
        assert game.outcome is None
        assert game.round_generation == generation + 1
        assert [p.chips for p in game.players] == [995, 1010, 995]
        assert all(p.hand == [] for p in game.players)

    def test_reset_table_mid_round(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.RAISE)
        generation = game.round_generation

        game.reset_table()
        assert game.phase == RoundPhase.IDLE
        assert game.round_number == 0
        assert game.dealer_index == 0
        assert game.pot == 0
        assert game.actions_taken == 0
        assert game.round_generation == generation + 1
        assert all(p.chips == 1000 for p in game.players)

    def test_action_log_keeps_six_entries(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        for _ in range(7):
            game.take_action(game.current_player.player_id, ActionType.CALL)

        assert len(game.action_log) == 6
        assert game.action_log[0] == "Bot 2 calls 5"

    def test_pot_and_chips_conserved(self):
        """Random play keeps the pot equal to contributions and chips whole."""
        rng = random.Random(2024)
        for _ in range(20):
            game = TeenPattiGame(num_bots=3, boot_amount=5, starting_chips=60, rng=rng)
            total = sum(p.chips for p in game.players)
            game.start_round()

            steps = 0
            while game.is_round_running() and steps < 500:
                player = game.current_player
                action = rng.choice(game.get_legal_actions(player.player_id))
                assert game.take_action(player.player_id, ActionType(action["type"])).success
                assert game.pot == game.ledger.contributions(game.players)
                assert all(p.chips >= 0 for p in game.players)
                steps += 1

            assert game.phase == RoundPhase.FINISHED
            assert sum(p.chips for p in game.players) == total


class TestStateView:
    """Tests for what each seat can see."""

    def test_blind_seat_sees_nothing(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        state = game.get_state(for_player_id="0")

        assert all("cards" not in p for p in state["public_info"]["players"])
        assert state["private_info"]["hand"] == []
        assert state["private_info"]["hand_rank"] is None
        assert state["private_info"]["call_amount"] == 5
        assert state["private_info"]["raise_amount"] == 10
        assert not state["private_info"]["is_turn"]

    def test_seen_seat_sees_only_own_hand(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.SEE_CARDS)

        own = game.get_state(for_player_id="2")
        players = own["public_info"]["players"]
        assert len(players[2]["cards"]) == 3
        assert "cards" not in players[0]
        assert len(own["private_info"]["hand"]) == 3
        assert own["private_info"]["hand_description"]
        assert own["private_info"]["is_turn"]
        assert own["private_info"]["call_amount"] == 10

        other = game.get_state(for_player_id="0")
        assert "cards" not in other["public_info"]["players"][2]

    def test_all_hands_face_up_after_round(self, three_seat_game):
        game = three_seat_game
        game.start_round()
        game.take_action("2", ActionType.FOLD)
        game.take_action("0", ActionType.FOLD)

        state = game.get_state(for_player_id="0")
        assert all(len(p["cards"]) == 3 for p in state["public_info"]["players"])
        assert state["public_info"]["phase"] == "FINISHED"
        assert state["public_info"]["current_player"] is None
        assert state["public_info"]["outcome"]["kind"] == "LAST_STANDING"
