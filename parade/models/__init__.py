"""Game domain models."""

from parade.models.card import DECK_SIZE, Card, get_all_cards
from parade.models.deck import Deck
from parade.models.enums import Color, FinalRoundTrigger, GamePhase, PlayerKind
from parade.models.game import GameState
from parade.models.parade_line import ParadeLine
from parade.models.player import ColorTally, Player

__all__ = [
    "DECK_SIZE",
    "Card",
    "Color",
    "ColorTally",
    "Deck",
    "FinalRoundTrigger",
    "GamePhase",
    "GameState",
    "ParadeLine",
    "Player",
    "PlayerKind",
    "get_all_cards",
]
