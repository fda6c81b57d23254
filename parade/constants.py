"""Game constants for Parade."""

# Game limits
MIN_PLAYERS = 2
MAX_PLAYERS = 6

# Table setup
HAND_SIZE = 5
INITIAL_PARADE_SIZE = 6
MIN_CARD_VALUE = 0
MAX_CARD_VALUE = 10

# End of game
FINAL_HAND_SIZE = 4  # Game ends once every hand is at or below this size
DISCARD_COUNT = 2

# Wager (blackjack) mode
MIN_BID = 10
TARGET_SCORE = 15
STARTING_BANKROLL = 1000
PARADE_WINNER_BONUS = 800

# Networking
DEFAULT_PORT = 5000
PORT_RETRY_LIMIT = 100
