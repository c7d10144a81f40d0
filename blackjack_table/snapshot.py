"""Pydantic views of the table for display collaborators."""

from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from blackjack_table.cards import Card
from blackjack_table.game.state import RoundState
from blackjack_table.hand import Hand
from blackjack_table.rules import BLACKJACK

if TYPE_CHECKING:
    from blackjack_table.game.engine import Player, Table


class CardView(BaseModel):
    """Card representation; a face-down card has no rank or suit."""

    model_config = ConfigDict(frozen=True)

    face_up: bool
    rank: str | None = None
    suit: str | None = None
    value: int = 0
    is_red: bool = False

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        if card.is_hidden:
            return cls(face_up=False)
        return cls(
            face_up=True,
            rank=str(card.rank),
            suit=str(card.suit),
            value=card.value,
            is_red=card.suit.is_red,
        )


class HandView(BaseModel):
    """Hand representation."""

    model_config = ConfigDict(frozen=True)

    cards: list[CardView]
    value: int
    is_soft: bool
    is_busted: bool
    value_string: str
    bet: Decimal
    outcome: str
    outcome_message: str

    @classmethod
    def from_hand(cls, hand: Hand) -> "HandView":
        total, soft = hand.real_value()
        return cls(
            cards=[CardView.from_card(card) for card in hand.cards],
            value=total,
            is_soft=soft,
            is_busted=total > BLACKJACK,
            value_string=hand.value_string(),
            bet=hand.bet,
            outcome=hand.outcome.kind.name,
            outcome_message=hand.outcome.display_string(),
        )


class PlayerView(BaseModel):
    """Player representation."""

    model_config = ConfigDict(frozen=True)

    name: str
    bank: Decimal
    hands: list[HandView]

    @classmethod
    def from_player(cls, player: "Player") -> "PlayerView":
        return cls(
            name=player.name,
            bank=player.bank,
            hands=[HandView.from_hand(hand) for hand in player.hands],
        )


class TableSnapshot(BaseModel):
    """Current table state."""

    model_config = ConfigDict(frozen=True)

    state: str
    players: list[PlayerView]
    dealer_hand: HandView
    dealer_hole_card_hidden: bool
    dealer_message: str
    active_index: tuple[int, int] | None
    can_hit: bool
    can_stand: bool

    @classmethod
    def from_table(cls, table: "Table") -> "TableSnapshot":
        """Build a snapshot; a table with no round dealt has no active hand."""
        active_index = None if table.state == RoundState.WAITING else table.active_index
        return cls(
            state=table.state.name,
            players=[PlayerView.from_player(player) for player in table.players],
            dealer_hand=HandView.from_hand(table.dealer_hand),
            dealer_hole_card_hidden=table.dealer_hand.has_hidden_card,
            dealer_message=table.dealer_display_string(),
            active_index=active_index,
            can_hit=table.can_hit,
            can_stand=table.can_stand,
        )
