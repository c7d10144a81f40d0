"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterator, TYPE_CHECKING

from blackjack_table.cards import Card
from blackjack_table.outcome import Outcome
from blackjack_table.rules import BLACKJACK

if TYPE_CHECKING:
    from blackjack_table.cards import Shoe


@dataclass
class Hand:
    """
    A blackjack hand with cached value calculation.

    ``value`` is the raw total with every ace counted as 11 and hidden cards
    counted as 0. It and ``number_of_aces`` are recomputed whenever the cards
    change, so they never go stale.
    """

    cards: list[Card] = field(default_factory=list)
    bet: Decimal = Decimal("0")
    outcome: Outcome = field(default_factory=Outcome.not_finished)
    value: int = field(default=0, init=False)
    number_of_aces: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._recompute()

    def _recompute(self) -> None:
        self.value = sum(card.value for card in self.cards)
        self.number_of_aces = sum(1 for card in self.cards if card.is_ace)

    def add_card(self, card: Card) -> None:
        """Add a face-up card to the hand."""
        self.cards.append(card)
        self._recompute()

    def add_hidden_card(self) -> None:
        """Add a face-down card; it contributes nothing until revealed."""
        self.cards.append(Card.hidden())
        self._recompute()

    def reveal(self, shoe: "Shoe") -> bool:
        """
        Flip every face-down card in the hand.

        Returns:
            True if any card was revealed
        """
        if not self.has_hidden_card:
            return False
        self.cards = [shoe.reveal(card) for card in self.cards]
        self._recompute()
        return True

    def real_value(self) -> tuple[int, bool]:
        """
        Calculate the best total and whether it is soft.

        Aces drop from 11 to 1 one at a time while the total is over 21. The
        hand is soft if an ace is still counted as 11 afterwards.
        """
        total = self.value
        aces = self.number_of_aces

        while total > BLACKJACK and aces > 0:
            total -= 10
            aces -= 1

        return total, aces > 0

    @property
    def total(self) -> int:
        """Return the real value without the soft flag."""
        return self.real_value()[0]

    @property
    def is_soft(self) -> bool:
        """Check if an ace is still counted as 11."""
        return self.real_value()[1]

    @property
    def is_busted(self) -> bool:
        """Check if the hand is over 21 after every ace reduction."""
        return self.total > BLACKJACK

    @property
    def has_hidden_card(self) -> bool:
        """Check if any card is still face down."""
        return any(card.is_hidden for card in self.cards)

    @property
    def up_cards(self) -> list[Card]:
        """Return the face-up cards."""
        return [card for card in self.cards if not card.is_hidden]

    def value_string(self) -> str:
        """Return the display value, e.g. 'soft 17' or '17'."""
        total, soft = self.real_value()
        if soft:
            return f"soft {total}"
        return str(total)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_busted:
            return f"{cards_str} (BUST)"
        return f"{cards_str} ({self.value_string()})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value}, bet={self.bet})"
