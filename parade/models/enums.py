"""Enums for the game."""

from enum import Enum


class Color(str, Enum):
    """The six parade colours, in deck order."""

    RED = "red"
    BLUE = "blue"
    PURPLE = "purple"
    GREEN = "green"
    GREY = "grey"
    ORANGE = "orange"


class PlayerKind(str, Enum):
    """Who makes a player's decisions."""

    HUMAN = "human"
    AUTOMATED = "automated"


class GamePhase(str, Enum):
    """Turn engine states during the lifecycle."""

    INIT = "INIT"
    PLAYER_TURN = "PLAYER_TURN"
    END_CHECK = "END_CHECK"
    DISCARD = "DISCARD"
    DONE = "DONE"


class FinalRoundTrigger(str, Enum):
    """What latched the final round."""

    ALL_COLORS = "all_colors"
    EMPTY_DECK = "empty_deck"
