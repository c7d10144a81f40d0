"""Single-table blackjack round engine - 100% UI-agnostic."""

from blackjack_table.cards import Card, Shoe, Rank, Suit
from blackjack_table.hand import Hand
from blackjack_table.outcome import Outcome, OutcomeKind, Settlement, resolve
from blackjack_table.game import Player, RoundInvariantError, RoundState, Table

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "Outcome",
    "OutcomeKind",
    "Settlement",
    "resolve",
    "Player",
    "RoundInvariantError",
    "RoundState",
    "Table",
]
