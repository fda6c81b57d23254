"""Base class for all decision strategies."""

from abc import ABC, abstractmethod

from parade.models.game import GameState
from parade.models.player import Player


class BaseStrategy(ABC):
    """Abstract base class for turn and discard decisions.

    A strategy only proposes 0-based hand indices. The turn engine checks
    each proposal and asks again when it is out of range, so a strategy
    never mutates game state itself.
    """

    @abstractmethod
    def choose_card(self, game: GameState, player: Player) -> int:
        """Pick the hand position of the card to play this turn.

        Args:
            game: Current game state
            player: The player whose turn it is

        Returns:
            0-based hand index

        """

    @abstractmethod
    def choose_discard(self, game: GameState, player: Player, chosen: list[int]) -> int:
        """Pick one more hand position to discard at the end of the game.

        Args:
            game: Final game state
            player: The discarding player
            chosen: Positions already picked for discard

        Returns:
            0-based hand index, not already in ``chosen``

        """

    def __str__(self) -> str:
        """Return string representation."""
        return self.__class__.__name__
