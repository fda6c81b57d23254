"""Game model for managing table state."""

from dataclasses import dataclass, field

from parade.constants import HAND_SIZE, INITIAL_PARADE_SIZE, MAX_PLAYERS
from parade.models.deck import Deck
from parade.models.enums import FinalRoundTrigger, GamePhase
from parade.models.parade_line import ParadeLine
from parade.models.player import Player


@dataclass
class GameState:
    """Represents one game of Parade.

    Attributes:
        players: Players in seating order
        deck: Draw pile
        parade_line: Shared face-up line
        active_index: Seat whose turn it is
        round_number: Completed cycles back to seat 0, plus one
        final_round_latched: One-way flag set when an end condition is first met
        final_round_trigger: What set the latch
        phase: Current turn engine state

    """

    players: list[Player] = field(default_factory=list)
    deck: Deck = field(default_factory=Deck)
    parade_line: ParadeLine = field(default_factory=ParadeLine)
    active_index: int = 0
    round_number: int = 1
    final_round_latched: bool = False
    final_round_trigger: FinalRoundTrigger | None = None
    phase: GamePhase = GamePhase.INIT

    def add_player(self, player: Player) -> bool:
        """Seat a player at the next free position."""
        if len(self.players) >= MAX_PLAYERS:
            return False
        if self.get_player(player.username) is not None:
            return False

        player.index = len(self.players)
        self.players.append(player)
        return True

    def get_player(self, username: str) -> Player | None:
        """Get a player by username."""
        for player in self.players:
            if player.username == username:
                return player
        return None

    @property
    def active_player(self) -> Player:
        """The player whose turn it is."""
        return self.players[self.active_index]

    def deal(self) -> None:
        """Lay out the parade line, then five cards to each seat."""
        self.parade_line = ParadeLine(self.deck.deal(INITIAL_PARADE_SIZE))
        for player in self.players:
            player.hand = self.deck.deal(HAND_SIZE)
            player.collected = []
        self.active_index = 0
        self.round_number = 1
        self.final_round_latched = False
        self.final_round_trigger = None

    def total_cards(self) -> int:
        """Count every card on the table; always 66 for a full deck."""
        return (
            len(self.deck)
            + len(self.parade_line)
            + sum(len(p.hand) + len(p.collected) for p in self.players)
        )

    def human_players(self) -> list[Player]:
        """Players driven by a person, in seating order."""
        return [p for p in self.players if p.is_human]

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"Parade: {len(self.players)} players, Round {self.round_number}, "
            f"Deck {len(self.deck)}, Phase: {self.phase.value}"
        )
