"""Tests for Hand evaluation."""

from decimal import Decimal

from hypothesis import given, strategies as st

from blackjack_table.cards import Card, Rank, Suit, DRAWABLE_RANKS, DRAWABLE_SUITS
from blackjack_table.hand import Hand
from blackjack_table.outcome import OutcomeKind


@st.composite
def card_strategy(draw):
    """Generate a random face-up card."""
    rank = draw(st.sampled_from(DRAWABLE_RANKS))
    suit = draw(st.sampled_from(DRAWABLE_SUITS))
    return Card(rank, suit)


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert empty_hand.number_of_aces == 0
        assert empty_hand.real_value() == (0, False)
        assert empty_hand.bet == Decimal("0")
        assert empty_hand.outcome.kind == OutcomeKind.NOT_FINISHED

    def test_add_card_updates_cache(self, empty_hand):
        """Test the cached value and ace count follow the cards."""
        empty_hand.add_card(Card(Rank.ACE, Suit.SPADES))
        assert empty_hand.value == 11
        assert empty_hand.number_of_aces == 1

        empty_hand.add_card(Card(Rank.KING, Suit.HEARTS))
        assert empty_hand.value == 21
        assert empty_hand.number_of_aces == 1

    def test_soft_17(self, soft_17_hand):
        """Test A-6 is soft 17."""
        assert soft_17_hand.real_value() == (17, True)
        assert soft_17_hand.is_soft
        assert soft_17_hand.value_string() == "soft 17"

    def test_hard_17_after_ace_reduction(self, hard_17_hand):
        """Test A-6-10 drops the ace to 1 and is hard 17, not a bust."""
        assert hard_17_hand.value == 27
        assert hard_17_hand.real_value() == (17, False)
        assert not hard_17_hand.is_busted
        assert hard_17_hand.value_string() == "17"

    def test_ace_last_is_reduced(self, hand_of):
        """Test 10-7-A is hard 18."""
        hand = hand_of("10S", "7H", "AC")
        assert hand.value == 28
        assert hand.real_value() == (18, False)

    def test_bust_without_aces(self, bust_hand):
        """Test 10-K-5 busts at 25."""
        assert bust_hand.real_value() == (25, False)
        assert bust_hand.is_busted

    def test_multiple_aces(self, hand_of):
        """Test aces reduce one at a time."""
        assert hand_of("AS", "AH").real_value() == (12, True)
        assert hand_of("AS", "AH", "AC").real_value() == (13, True)
        assert hand_of("AS", "AH", "AC", "9D").real_value() == (12, False)

    def test_blackjack_total(self, hand_of):
        """Test A-K totals soft 21."""
        hand = hand_of("AS", "KH")
        assert hand.real_value() == (21, True)
        assert not hand.is_busted

    def test_hidden_card_contributes_nothing(self, hand_of):
        """Test the hole card stays out of the total until revealed."""
        hand = Hand()
        hand.add_hidden_card()
        hand.add_card(Card(Rank.NINE, Suit.CLUBS))
        assert hand.has_hidden_card
        assert hand.value == 9
        assert hand.number_of_aces == 0
        assert hand.up_cards == [Card(Rank.NINE, Suit.CLUBS)]
        assert len(hand) == 2

    def test_reveal_recomputes_value_and_aces(self, hand_of):
        """Test a revealed ace is counted and can be reduced."""

        class AceShoe:
            def reveal(self, card):
                return Card(Rank.ACE, Suit.HEARTS) if card.is_hidden else card

        hand = Hand()
        hand.add_hidden_card()
        hand.add_card(Card(Rank.ACE, Suit.SPADES))

        assert hand.reveal(AceShoe())
        assert not hand.has_hidden_card
        assert hand.value == 22
        assert hand.number_of_aces == 2
        assert hand.real_value() == (12, True)

    def test_reveal_without_hidden_card(self, soft_17_hand, shoe):
        """Test revealing a fully visible hand changes nothing."""
        cards = list(soft_17_hand.cards)
        assert not soft_17_hand.reveal(shoe)
        assert soft_17_hand.cards == cards

    def test_hand_from_cards(self):
        """Test constructing a hand with cards fills the cache."""
        hand = Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])
        assert hand.value == 17
        assert hand.number_of_aces == 1

    def test_str(self, soft_17_hand, bust_hand):
        """Test string representation."""
        assert str(soft_17_hand) == "A♠ 6♥ (soft 17)"
        assert str(bust_hand).endswith("(BUST)")


class TestHandProperties:
    """Property-based tests for hand valuation."""

    @given(st.lists(card_strategy(), min_size=1, max_size=8))
    def test_real_value_only_exceeds_21_without_soft_aces(self, cards):
        """Test a total over 21 means every ace is already counted as 1."""
        hand = Hand(cards=cards)
        total, soft = hand.real_value()
        if total > 21:
            assert not soft
            assert total == hand.value - 10 * hand.number_of_aces

    @given(st.lists(card_strategy(), min_size=1, max_size=8))
    def test_real_value_matches_reduction(self, cards):
        """Test the real value is the raw value less ten per reduced ace."""
        hand = Hand(cards=cards)
        total, soft = hand.real_value()
        reductions = (hand.value - total) // 10
        assert (hand.value - total) % 10 == 0
        assert 0 <= reductions <= hand.number_of_aces
        assert soft == (reductions < hand.number_of_aces)
        if soft:
            assert total <= 21

    @given(st.lists(card_strategy(), min_size=1, max_size=8))
    def test_cache_never_stale(self, cards):
        """Test the cache matches the cards after every addition."""
        hand = Hand()
        for card in cards:
            hand.add_card(card)
            assert hand.value == sum(c.value for c in hand.cards)
            assert hand.number_of_aces == sum(1 for c in hand.cards if c.is_ace)
