"""Game engine: turn loop, scoring and the wager side game."""

from parade.engine.results import GameResult, RoundSettlement
from parade.engine.scoring import calculate_scores, get_winners
from parade.engine.turn_engine import TurnEngine
from parade.engine.wager import WagerExtension, resolve_round

__all__ = [
    "GameResult",
    "RoundSettlement",
    "TurnEngine",
    "WagerExtension",
    "calculate_scores",
    "get_winners",
    "resolve_round",
]
