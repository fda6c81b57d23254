"""Seating players and running local games."""

import logging
import random

from parade.config import Settings
from parade.constants import MAX_PLAYERS, MIN_PLAYERS
from parade.engine.results import GameResult
from parade.engine.turn_engine import TurnEngine
from parade.engine.wager import WagerExtension
from parade.models.deck import Deck
from parade.models.enums import PlayerKind
from parade.models.game import GameState
from parade.models.player import Player
from parade.net.channel import GameChannel
from parade.strategies.greedy_bot import GreedyBot
from parade.strategies.human import HumanStrategy

logger = logging.getLogger(__name__)

AI_NAME_PREFIX = "AI"


def ai_names(count: int, taken: list[str]) -> list[str]:
    """Name automated players "AI 1", "AI 2", ... skipping names already in use.

    Args:
        count: How many names to produce
        taken: Usernames already seated

    Returns:
        ``count`` unique names

    """
    names: list[str] = []
    number = 1
    while len(names) < count:
        candidate = f"{AI_NAME_PREFIX} {number}"
        if candidate not in taken:
            names.append(candidate)
        number += 1
    return names


def build_game(
    human_names: list[str],
    ai_count: int,
    channel: GameChannel,
    seed: int | None = None,
) -> GameState:
    """Seat humans in the given order, then automated players.

    Args:
        human_names: Humans in registration order
        ai_count: Automated players to add after them
        channel: Channel the humans answer on
        seed: Shuffle seed; None for a random deck

    Returns:
        Undealt game state

    Raises:
        ValueError: Seat count outside 2-6 or a duplicate username

    """
    total = len(human_names) + ai_count
    if not MIN_PLAYERS <= total <= MAX_PLAYERS:
        msg = f"A game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {total}"
        raise ValueError(msg)

    game = GameState(deck=Deck(random.Random(seed)))
    human_strategy = HumanStrategy(channel)
    for name in human_names:
        if not game.add_player(Player(username=name, kind=PlayerKind.HUMAN, strategy=human_strategy)):
            msg = f"Username {name!r} is already seated"
            raise ValueError(msg)

    for name in ai_names(ai_count, human_names):
        game.add_player(Player(username=name, kind=PlayerKind.AUTOMATED, strategy=GreedyBot()))

    logger.info("Seated %s", ", ".join(p.username for p in game.players))
    return game


def build_engine(game: GameState, channel: GameChannel, settings: Settings) -> TurnEngine:
    """Wire a turn engine, with the wager side game if enabled."""
    wager = None
    if settings.blackjack_mode:
        if game.human_players():
            wager = WagerExtension(game.players, channel)
        else:
            logger.warning("Blackjack mode needs a human player; playing without wagers")
    return TurnEngine(game, channel, wager=wager, think_time=settings.ai_think_time)


def play_solo(settings: Settings, channel: GameChannel) -> GameResult:
    """Run a single-player game: one local human against automated players."""
    if settings.ai_player_count < 1:
        msg = "Single-player mode needs at least one automated opponent"
        raise ValueError(msg)
    game = build_game([settings.username], settings.ai_player_count, channel, settings.seed)
    return build_engine(game, channel, settings).run()
