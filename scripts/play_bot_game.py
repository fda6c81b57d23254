#!/usr/bin/env python3
"""
CLI script to watch bots play Parade.

This script seats automated players only, simulates a number of complete
games, and prints each result plus a summary of who won how often.
"""

import argparse
import random
import sys
from collections import Counter
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parade.engine.turn_engine import TurnEngine
from parade.net.channel import ConsoleChannel
from parade.services.formatter import format_scores
from parade.services.table import build_game


class BotGameSimulator:
    """Simulates games between automated players."""

    def __init__(self, num_players: int = 4, seed: int | None = None, watch: bool = False):
        """
        Initialize simulator.

        Args:
            num_players: Number of players (2-6)
            seed: Seed for the first game; later games use seed + n
            watch: Print every broadcast of every game
        """
        if not (2 <= num_players <= 6):
            raise ValueError("Must have 2-6 players")

        self.num_players = num_players
        self.seed = seed
        self.watch = watch
        self.wins: Counter[str] = Counter()
        self.rounds: list[int] = []

    def _sink(self, text: str) -> None:
        if self.watch:
            print(text)

    def play_game(self, number: int) -> None:
        """Play one game and record the outcome."""
        seed = None if self.seed is None else self.seed + number
        channel = ConsoleChannel(self._sink, lambda: None)
        game = build_game([], self.num_players, channel, seed)
        result = TurnEngine(game, channel).run()

        print(f"\n{'='*60}")
        print(f"GAME {number + 1} (seed={seed}, {result.rounds_played} rounds, "
              f"final round by {result.final_round_trigger.value})")
        print(f"{'='*60}")
        print(format_scores(result.scores))
        print(f"  -> Winner(s): {', '.join(result.winners)}")

        self.wins.update(result.winners)
        self.rounds.append(result.rounds_played)

    def print_summary(self) -> None:
        """Print win counts across every simulated game."""
        print(f"\n{'='*60}")
        print(f"SUMMARY over {len(self.rounds)} game(s)")
        print(f"{'='*60}")
        for name, count in self.wins.most_common():
            print(f"  {name}: {count} win(s)")
        if self.rounds:
            print(f"  Average rounds: {sum(self.rounds) / len(self.rounds):.1f}")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Watch bots play Parade")
    parser.add_argument("--players", type=int, default=4, help="Number of bots (2-6)")
    parser.add_argument("--games", type=int, default=1, help="Games to simulate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    parser.add_argument("--watch", action="store_true", help="Print every turn")
    args = parser.parse_args()

    seed = args.seed if args.seed is not None else random.randrange(1_000_000)
    simulator = BotGameSimulator(num_players=args.players, seed=seed, watch=args.watch)
    for number in range(args.games):
        simulator.play_game(number)
    simulator.print_summary()


if __name__ == "__main__":
    main()
