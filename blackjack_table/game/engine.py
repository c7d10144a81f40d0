"""Blackjack table engine with state machine."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from random import Random
from typing import Callable, Iterator, Sequence, TYPE_CHECKING

from transitions import Machine

from blackjack_table.cards import Rank, Shoe
from blackjack_table.hand import Hand
from blackjack_table.outcome import Outcome, resolve
from blackjack_table.rules import (
    ANTE,
    BLACKJACK,
    DEALER_HITS_SOFT_17,
    DEALER_STANDS_ON,
    HANDS_PER_PLAYER,
)
from blackjack_table.game.events import EventEmitter, EventType, GameEvent
from blackjack_table.game.state import RoundState

if TYPE_CHECKING:
    from config import TableConfig
    from blackjack_table.snapshot import TableSnapshot


Seat = tuple[int, int]


class RoundInvariantError(RuntimeError):
    """Raised when the table's bookkeeping contradicts the round rules."""


@dataclass
class Player:
    """A seated player: name, bank and the hands in play this round."""

    name: str
    bank: Decimal = Decimal("0")
    hands: list[Hand] = field(default_factory=list)


class Table:
    """
    Single-table blackjack round engine.

    Owns the players, the dealer's hand and the active-hand cursor. Commands
    (``reset``, ``hit``, ``stand``) run to completion one at a time; invalid
    commands are no-ops that return False and emit INVALID_ACTION.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "start_round", "source": "*", "dest": "in_progress"},
        {"trigger": "settle_round", "source": "in_progress", "dest": "complete"},
    ]

    def __init__(
        self,
        player_names: Sequence[str] = ("Nick",),
        starting_bank: Decimal | float | str = Decimal("100.0"),
        rng: Random | None = None,
        shoe: Shoe | None = None,
    ) -> None:
        """
        Seat the players at a new table.

        Args:
            player_names: Names of the seated players, in turn order
            starting_bank: Bank every player starts with
            rng: Random number generator for reproducible rounds
            shoe: Card source; overrides ``rng`` when given
        """
        if not player_names:
            raise ValueError("Table needs at least one player")

        self.shoe = shoe or Shoe(rng=rng)
        self.players = [
            Player(name=name, bank=Decimal(str(starting_bank))) for name in player_names
        ]
        self.dealer_hand = Hand()
        self.events = EventEmitter()

        self._seats: list[Seat] = []
        self._cursor = 0

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @classmethod
    def from_config(cls, table_config: "TableConfig") -> "Table":
        """Build a table from configuration, applying its log level."""
        logging.getLogger("blackjack_table").setLevel(table_config.log_level)
        rng = Random(table_config.seed) if table_config.seed is not None else None
        return cls(
            player_names=table_config.player_names,
            starting_bank=table_config.starting_bank,
            rng=rng,
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def is_complete(self) -> bool:
        """Check if every hand has been settled."""
        return self.state == RoundState.COMPLETE

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    # Commands

    def reset(self) -> bool:
        """
        Discard the current round and deal a new one.

        Every player gets fresh hands, each anted from their bank. Cards go
        one to each hand, the dealer's hole card face down, a second to each
        hand, then the dealer's face-up card.
        """
        self._seats = []
        for player_index, player in enumerate(self.players):
            player.hands = []
            for hand_index in range(HANDS_PER_PLAYER):
                player.hands.append(Hand())
                self._seats.append((player_index, hand_index))
        self._cursor = 0
        self.dealer_hand = Hand()

        # The bank is never floored; players may play on credit
        for player_index, player in enumerate(self.players):
            for hand_index, hand in enumerate(player.hands):
                hand.bet += ANTE
                player.bank -= ANTE
                self.events.emit_new(
                    EventType.ANTE_PLACED,
                    player_index=player_index,
                    hand_index=hand_index,
                    amount=float(ANTE),
                    bank=float(player.bank),
                )

        self.start_round()  # Trigger state transition
        self.events.emit_new(
            EventType.ROUND_STARTED,
            players=[player.name for player in self.players],
            hands=len(self._seats),
        )

        for seat in self._seats:
            self._deal_card_to_seat(seat)
        self.dealer_hand.add_hidden_card()
        self.events.emit_new(EventType.CARD_DEALT, card="??", hand="dealer", hand_value=None)
        for seat in self._seats:
            self._deal_card_to_seat(seat)
        self._deal_card_to_dealer()

        return True

    def hit(self) -> bool:
        """Draw a card into the active hand if it is still open and under 21."""
        if self.state != RoundState.IN_PROGRESS:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot hit in current state",
                state=self.state.name,
            )
            return False

        seat = self.active_index
        hand = self.active_hand
        if not self.can_hit:
            # A busted hand stays active until the player stands
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot hit this hand",
                player_index=seat[0],
                hand_index=seat[1],
            )
            return False

        self._deal_card_to_seat(seat)
        self.events.emit_new(
            EventType.PLAYER_HIT,
            player_index=seat[0],
            hand_index=seat[1],
            hand_value=hand.total,
        )
        if hand.is_busted:
            self.events.emit_new(
                EventType.PLAYER_BUSTS,
                player_index=seat[0],
                hand_index=seat[1],
                hand_value=hand.total,
            )
        return True

    def stand(self) -> bool:
        """
        End the turn on the active hand and move to the next one.

        Standing on the last hand finishes the round and settles it.
        """
        if self.state != RoundState.IN_PROGRESS:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot stand in current state",
                state=self.state.name,
            )
            return False

        seat = self.active_index
        hand = self.active_hand
        if not hand.outcome.is_finished:
            hand.outcome = Outcome.stand()
        self.events.emit_new(
            EventType.PLAYER_STAND,
            player_index=seat[0],
            hand_index=seat[1],
            hand_value=hand.total,
        )

        next_seat = self.next_active_index()
        self._cursor += 1
        if next_seat is not None:
            self.events.emit_new(
                EventType.ACTIVE_HAND_CHANGED,
                player_index=next_seat[0],
                hand_index=next_seat[1],
            )
            return True

        self._end_round()
        return True

    def apply(self, action: str) -> bool:
        """
        Apply a user command by name.

        Args:
            action: One of "hit", "stand", "reset" or "restart"

        Returns:
            True if the command changed the table
        """
        commands: dict[str, Callable[[], bool]] = {
            "hit": self.hit,
            "stand": self.stand,
            "reset": self.reset,
            "restart": self.reset,
        }
        try:
            command = commands[action.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown action: {action}") from None
        return command()

    # Queries

    @property
    def active_index(self) -> Seat:
        """
        Return (player_index, hand_index) of the hand whose turn it is.

        Once the round is complete this keeps pointing at the last hand.
        """
        if not self._seats:
            raise RoundInvariantError("No round has been dealt")
        if self._cursor > len(self._seats):
            raise RoundInvariantError(f"Active hand cursor out of range: {self._cursor}")
        return self._seats[min(self._cursor, len(self._seats) - 1)]

    @property
    def active_hand(self) -> Hand:
        """Return the hand whose turn it is."""
        player_index, hand_index = self.active_index
        return self.players[player_index].hands[hand_index]

    def next_active_index(self) -> Seat | None:
        """Return the seat that plays after the active one, or None if it is the last."""
        following = self._cursor + 1
        if following < len(self._seats):
            return self._seats[following]
        return None

    def seats(self) -> Iterator[tuple[Seat, Hand]]:
        """Iterate over every dealt hand in turn order."""
        for player_index, hand_index in self._seats:
            yield (player_index, hand_index), self.players[player_index].hands[hand_index]

    @property
    def can_hit(self) -> bool:
        """Check if the active hand may take another card."""
        if self.state != RoundState.IN_PROGRESS:
            return False
        hand = self.active_hand
        return not hand.outcome.is_finished and hand.total < BLACKJACK

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == RoundState.IN_PROGRESS

    def bank_of(self, player_index: int) -> Decimal:
        """Return a player's bank balance."""
        return self.players[player_index].bank

    def dealer_display_string(self) -> str:
        """Describe the dealer's hand, hiding the hole card's value."""
        if not self.dealer_hand.cards:
            return ""
        if self.dealer_hand.has_hidden_card:
            up_cards = self.dealer_hand.up_cards
            if not up_cards:
                return "Dealer shows nothing yet"
            rank = up_cards[0].rank
            names = {
                Rank.ACE: "an Ace",
                Rank.KING: "a King",
                Rank.QUEEN: "a Queen",
                Rank.JACK: "a Jack",
                Rank.EIGHT: "an 8",
            }
            return f"Dealer shows {names.get(rank, f'a {rank}')}"
        return f"Dealer has {self.dealer_hand.value_string()}"

    def snapshot(self) -> "TableSnapshot":
        """Return a read-only view of the table for rendering."""
        from blackjack_table.snapshot import TableSnapshot

        return TableSnapshot.from_table(self)

    # Internals

    def _deal_card_to_seat(self, seat: Seat) -> None:
        player_index, hand_index = seat
        hand = self.players[player_index].hands[hand_index]
        card = self.shoe.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand=f"player {player_index} hand {hand_index}",
            hand_value=hand.total,
        )

    def _deal_card_to_dealer(self) -> None:
        card = self.shoe.draw()
        self.dealer_hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand="dealer",
            hand_value=None if self.dealer_hand.has_hidden_card else self.dealer_hand.total,
        )

    def _dealer_should_hit(self) -> bool:
        """Determine if dealer should hit."""
        value, soft = self.dealer_hand.real_value()
        if value < DEALER_STANDS_ON:
            return True
        if value == DEALER_STANDS_ON and soft and DEALER_HITS_SOFT_17:
            return True
        return False

    def _end_round(self) -> None:
        """Reveal the hole card, play the dealer out and settle every hand."""
        unfinished = [seat for seat, hand in self.seats() if not hand.outcome.is_finished]
        if unfinished:
            raise RoundInvariantError(f"Round ended with unfinished hands: {unfinished}")

        if self.dealer_hand.reveal(self.shoe):
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                card=str(self.dealer_hand.cards[0]),
                hand_value=self.dealer_hand.total,
            )

        while self._dealer_should_hit():
            self._deal_card_to_dealer()
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.total)

        dealer_total = self.dealer_hand.total
        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_total)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_total)

        for (player_index, hand_index), hand in self.seats():
            if hand.outcome.is_final:
                continue
            player = self.players[player_index]
            settlement = resolve(dealer_total, hand.total, hand.bet)
            hand.outcome = settlement.outcome
            player.bank += settlement.bank_delta
            hand.bet = Decimal("0")
            self.events.emit_new(
                EventType.HAND_SETTLED,
                player_index=player_index,
                hand_index=hand_index,
                outcome=settlement.outcome.kind.name,
                amount=float(settlement.bank_delta),
                bank=float(player.bank),
            )

        self.settle_round()
        self.events.emit_new(
            EventType.ROUND_ENDED,
            dealer_total=dealer_total,
            banks=[float(player.bank) for player in self.players],
        )
