"""Hand outcomes and settlement against the dealer."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

from blackjack_table.rules import BLACKJACK, PUSH_MULTIPLIER, WIN_MULTIPLIER


class OutcomeKind(Enum):
    """Lifecycle and settlement tags for a hand."""

    NOT_FINISHED = auto()
    STAND = auto()
    DEALER_WINS = auto()
    DEALER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_BUSTS = auto()
    DEALER_BLACKJACK = auto()
    PLAYER_BLACKJACK = auto()
    PUSH = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class Outcome:
    """
    Outcome of a hand, carrying the totals it was settled with.

    NOT_FINISHED and STAND carry no totals. DEALER_BLACKJACK only carries the
    player total, PLAYER_BLACKJACK only the dealer total, and PUSH keeps the
    shared total in ``dealer_total``.
    """

    kind: OutcomeKind
    dealer_total: int | None = None
    player_total: int | None = None

    @classmethod
    def not_finished(cls) -> "Outcome":
        return cls(OutcomeKind.NOT_FINISHED)

    @classmethod
    def stand(cls) -> "Outcome":
        return cls(OutcomeKind.STAND)

    @classmethod
    def push(cls, total: int) -> "Outcome":
        return cls(OutcomeKind.PUSH, dealer_total=total)

    @property
    def is_finished(self) -> bool:
        """Check if the player is done acting on the hand."""
        return self.kind != OutcomeKind.NOT_FINISHED

    @property
    def is_final(self) -> bool:
        """Check if the hand has been settled against the dealer."""
        return self.kind not in (OutcomeKind.NOT_FINISHED, OutcomeKind.STAND)

    def display_string(self) -> str:
        """Return the message shown to the player for this outcome."""
        d, p = self.dealer_total, self.player_total
        messages = {
            OutcomeKind.DEALER_BUSTS: f"Dealer busts with {d}, you win with {p}!",
            OutcomeKind.DEALER_WINS: f"Dealer wins with {d} vs your {p}",
            OutcomeKind.PLAYER_BUSTS: f"You busted with {p}, dealer wins with {d}",
            OutcomeKind.PLAYER_WINS: f"You win with {p} vs the dealer's {d}!",
            OutcomeKind.DEALER_BLACKJACK: f"Dealer got a blackjack vs your {p}, dealer wins",
            OutcomeKind.PLAYER_BLACKJACK: f"You got a blackjack vs dealer's {d}, you win!",
            OutcomeKind.PUSH: f"Push, both you and the dealer have {d}",
        }
        return messages.get(self.kind, "")

    def __str__(self) -> str:
        return self.display_string() or str(self.kind)


@dataclass(frozen=True)
class Settlement:
    """Result of settling one hand: its outcome and what the bank receives."""

    outcome: Outcome
    bank_delta: Decimal


def resolve(dealer_total: int, player_total: int, bet: Decimal) -> Settlement:
    """
    Settle a player's hand against the dealer.

    The ante has already left the bank, so a loss credits nothing, a win
    credits twice the bet and a push returns the bet.

    Args:
        dealer_total: Dealer's real value after drawing
        player_total: Player's real value
        bet: Wager riding on the hand

    Returns:
        The settled outcome and the amount to add to the player's bank
    """
    player_busted = player_total > BLACKJACK
    dealer_busted = dealer_total > BLACKJACK

    if player_busted:
        # Player bust loses even when the dealer busts too
        return Settlement(
            Outcome(OutcomeKind.PLAYER_BUSTS, dealer_total, player_total), Decimal("0")
        )
    if dealer_busted:
        return Settlement(
            Outcome(OutcomeKind.DEALER_BUSTS, dealer_total, player_total),
            bet * WIN_MULTIPLIER,
        )
    if player_total < dealer_total:
        return Settlement(
            Outcome(OutcomeKind.DEALER_WINS, dealer_total, player_total), Decimal("0")
        )
    if player_total > dealer_total:
        return Settlement(
            Outcome(OutcomeKind.PLAYER_WINS, dealer_total, player_total),
            bet * WIN_MULTIPLIER,
        )
    return Settlement(Outcome.push(dealer_total), bet * PUSH_MULTIPLIER)
