"""Card and Shoe classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random


class Suit(Enum):
    """Card suits."""

    HEARTS = auto()
    SPADES = auto()
    CLUBS = auto()
    DIAMONDS = auto()
    HIDDEN = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HIDDEN: "?",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if the suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks with blackjack values."""

    HIDDEN = 0
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self == Rank.HIDDEN:
            return "?"
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10, hidden = 0)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


# Ranks and suits a shoe can actually produce
DRAWABLE_RANKS = tuple(rank for rank in Rank if rank != Rank.HIDDEN)
DRAWABLE_SUITS = tuple(suit for suit in Suit if suit != Suit.HIDDEN)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card, either fully visible or fully face down."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if (self.rank == Rank.HIDDEN) != (self.suit == Suit.HIDDEN):
            raise ValueError(f"Card cannot be partially hidden: {self.rank.name}, {self.suit.name}")

    def __str__(self) -> str:
        if self.is_hidden:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @classmethod
    def hidden(cls) -> "Card":
        """Create a face-down card."""
        return cls(Rank.HIDDEN, Suit.HIDDEN)

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_hidden(self) -> bool:
        """Check if this card is face down."""
        return self.rank == Rank.HIDDEN

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
            "A": Rank.ACE,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class Shoe:
    """
    An endless shoe that deals with replacement.

    Rank and suit are drawn independently and uniformly, so the shoe never
    runs out and never needs shuffling. Pass a seeded ``Random`` for
    reproducible rounds.
    """

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._cards_dealt = 0

    def draw(self) -> Card:
        """Draw a face-up card."""
        self._cards_dealt += 1
        return Card(self._rng.choice(DRAWABLE_RANKS), self._rng.choice(DRAWABLE_SUITS))

    def draw_hidden(self) -> Card:
        """Draw a face-down card."""
        return Card.hidden()

    def reveal(self, card: Card) -> Card:
        """Flip a face-down card, leaving a visible card unchanged."""
        if not card.is_hidden:
            return card
        return self.draw()

    @property
    def cards_dealt(self) -> int:
        """Return the number of face-up cards produced so far."""
        return self._cards_dealt
