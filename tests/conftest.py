"""Pytest fixtures for blackjack table tests."""

import pytest
from decimal import Decimal
from random import Random

from blackjack_table.cards import Card, Shoe
from blackjack_table.hand import Hand
from blackjack_table.game import Table


class ScriptedShoe(Shoe):
    """Shoe that deals a fixed sequence of cards, for deterministic rounds."""

    def __init__(self, cards: list[str]) -> None:
        super().__init__(rng=Random(0))
        self._script = [Card.from_string(c) for c in cards]

    def draw(self) -> Card:
        if not self._script:
            raise IndexError("Cannot draw from empty shoe")
        self._cards_dealt += 1
        return self._script.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._script)


def make_hand(*cards: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    hand = Hand()
    for card in cards:
        hand.add_card(Card.from_string(card))
    return hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """An endless shoe with a seeded rng."""
    return Shoe(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_17_hand():
    """A hard 17 hand (A-6-10)."""
    return make_hand("AS", "6H", "10C")


@pytest.fixture
def bust_hand():
    """A busted hand (10-K-5)."""
    return make_hand("10S", "KH", "5C")


@pytest.fixture
def table(rng):
    """A single-player table with one round dealt."""
    t = Table(player_names=["Nick"], starting_bank=Decimal("100.0"), rng=rng)
    t.reset()
    return t


@pytest.fixture
def scripted_table():
    """
    Factory for tables dealt from a scripted shoe.

    Draw order for a round: first card to every hand in seat order, second
    card to every hand, dealer's face-up card, then the hole card reveal and
    any dealer hits.
    """

    def _make(cards: list[str], players: tuple[str, ...] = ("Nick",)) -> Table:
        t = Table(player_names=players, starting_bank=Decimal("100.0"), shoe=ScriptedShoe(cards))
        t.reset()
        return t

    return _make


@pytest.fixture
def hand_of():
    """Factory building a hand from card strings."""
    return make_hand
