"""Fixed house rules for the table."""

from decimal import Decimal

# Wager taken from the bank for every hand dealt
ANTE = Decimal("5.0")

# Every player is dealt this many hands each round
HANDS_PER_PLAYER = 2

# Dealer draws below this total, and on a soft total equal to it (H17)
DEALER_STANDS_ON = 17
DEALER_HITS_SOFT_17 = True

BLACKJACK = 21

# Winning hands pay the stake back twice, a push returns it once
WIN_MULTIPLIER = Decimal("2")
PUSH_MULTIPLIER = Decimal("1")
