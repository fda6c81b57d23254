"""Greedy bot that keeps its collection as cheap as possible."""

from collections import Counter

from parade.constants import DISCARD_COUNT
from parade.models.game import GameState
from parade.models.player import Player
from parade.strategies.base import BaseStrategy


class GreedyBot(BaseStrategy):
    """Automated player with a one-move lookahead.

    Playing: simulate every hand card against the current line and play the
    one whose collection adds the fewest points. Ties go to the earliest
    card in hand.

    Discarding: keep cards in the colours already collected most, bumping a
    colour's count each time a card of it is kept, so majorities get
    reinforced. With no colour overlap, keep the lowest value instead.
    """

    def choose_card(self, game: GameState, player: Player) -> int:
        """Play the card that collects the lowest point total."""
        if not player.hand:
            msg = "No cards to play"
            raise ValueError(msg)

        costs = [
            sum(card.value for card in game.parade_line.preview(candidate))
            for candidate in player.hand
        ]
        # min() returns the first index on ties
        return min(range(len(costs)), key=costs.__getitem__)

    def choose_discard(self, game: GameState, player: Player, chosen: list[int]) -> int:
        """Discard the first card not picked to keep."""
        keep = self.keep_indices(player, len(player.hand) - min(DISCARD_COUNT, len(player.hand)))
        for index in range(len(player.hand)):
            if index not in keep and index not in chosen:
                return index
        msg = "Nothing left to discard"
        raise ValueError(msg)

    @staticmethod
    def keep_indices(player: Player, keep_count: int) -> list[int]:
        """Choose which hand positions survive the final discard.

        Args:
            player: Player whose hand and collection drive the choice
            keep_count: How many cards to keep

        Returns:
            Kept 0-based hand indices, in the order they were picked

        """
        counts = Counter(card.color for card in player.collected)
        remaining = list(range(len(player.hand)))
        kept: list[int] = []

        for _ in range(min(keep_count, len(remaining))):
            best: int | None = None
            best_count = 0
            for index in remaining:
                color = player.hand[index].color
                if counts[color] > best_count:
                    best, best_count = index, counts[color]

            if best is None:
                best = min(remaining, key=lambda i: player.hand[i].value)
            else:
                counts[player.hand[best].color] += 1

            remaining.remove(best)
            kept.append(best)

        return kept
