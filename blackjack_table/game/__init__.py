"""Round engine and state management."""

from blackjack_table.game.events import GameEvent, EventEmitter, EventType
from blackjack_table.game.state import RoundState
from blackjack_table.game.engine import Player, RoundInvariantError, Table

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "RoundState",
    "Player",
    "RoundInvariantError",
    "Table",
]
