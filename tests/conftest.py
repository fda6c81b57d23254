"""Shared fixtures for the test suite."""

import random

import pytest
from factories import ScriptedChannel, make_player

from parade.models.deck import Deck
from parade.models.game import GameState


@pytest.fixture
def channel() -> ScriptedChannel:
    """Scripted channel with no answers queued."""
    return ScriptedChannel()


@pytest.fixture
def seeded_deck() -> Deck:
    """Deck shuffled with a fixed seed."""
    return Deck(random.Random(1234))


@pytest.fixture
def bot_game(seeded_deck: Deck) -> GameState:
    """Three automated players on a seeded deck."""
    game = GameState(deck=seeded_deck)
    for name in ("AI 1", "AI 2", "AI 3"):
        game.add_player(make_player(name))
    return game
