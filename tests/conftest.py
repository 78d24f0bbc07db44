"""
Pytest configuration and shared fixtures for Teen Patti tests.
"""

import random

import pytest

from teenpatti.core.card import Card, Deck, Rank, Suit, parse_cards
from teenpatti.core.game import TeenPattiGame
from teenpatti.core.player import Player
from teenpatti.core.rules import SeatKind


class ScriptedRandom(random.Random):
    """
    Random source whose ``random()`` returns scripted values.

    Once the script runs out every roll returns 0.99, so no
    probability-gated branch fires.
    """

    def __init__(self, values=(), seed=0):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return 0.99


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(1))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample human seat with 1000 chips."""
    return Player(player_id="test_player", name="Tester", kind=SeatKind.HUMAN, chips=1000)


@pytest.fixture
def three_seat_game():
    """The default table: one human and two bots, boot 5."""
    return TeenPattiGame(num_bots=2, boot_amount=5, starting_chips=1000, rng=random.Random(42))


@pytest.fixture
def heads_up_game():
    """A two-seat table."""
    return TeenPattiGame(num_bots=1, boot_amount=5, starting_chips=1000, rng=random.Random(7))


@pytest.fixture
def set_hands():
    """Overwrite dealt hands, e.g. set_hands(game, {0: "A♠ A♥ A♦"})."""
    def _set(game, hands):
        for seat, cards in hands.items():
            game.players[seat].hand = parse_cards(cards)
    return _set


@pytest.fixture
def trail_of_aces():
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.ACE, Suit.DIAMONDS),
    ]


@pytest.fixture
def pure_sequence():
    """3-4-5 of spades."""
    return parse_cards("3♠ 4♠ 5♠")


@pytest.fixture
def low_sequence():
    """A-2-3, mixed suits."""
    return parse_cards("A♠ 2♥ 3♦")
