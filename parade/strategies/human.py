"""Strategy that asks a person through a game channel."""

from parade.models.game import GameState
from parade.models.player import Player
from parade.net.channel import GameChannel
from parade.services.formatter import format_collection, format_hand
from parade.strategies.base import BaseStrategy

ORDINALS = {0: "1st", 1: "2nd"}


class HumanStrategy(BaseStrategy):
    """Relays each decision to the player's channel and waits for the answer.

    Answers are passed back unvalidated; the turn engine re-prompts for
    anything out of range. A ``SessionError`` from the channel propagates.
    """

    def __init__(self, channel: GameChannel, timeout: float | None = None) -> None:
        """Initialize with the channel the player answers on."""
        self.channel = channel
        self.timeout = timeout

    def choose_card(self, _game: GameState, player: Player) -> int:
        """Show the hand and ask for a 1-based card number."""
        self.channel.send(player.username, "Your hand:")
        self.channel.send(player.username, format_hand(player.hand))
        prompt = f"Choose a card to play (1-{len(player.hand)}): "
        return self.channel.await_choice(player.username, prompt, self.timeout) - 1

    def choose_discard(self, _game: GameState, player: Player, chosen: list[int]) -> int:
        """Ask for the next card to throw away."""
        if not chosen:
            self.channel.send(player.username, "Your collected cards:")
            self.channel.send(player.username, format_collection(player))
            self.channel.send(player.username, "Your hand:")
            self.channel.send(player.username, format_hand(player.hand))
        ordinal = ORDINALS.get(len(chosen), f"{len(chosen) + 1}th")
        prompt = f"Choose the {ordinal} card to discard (1-{len(player.hand)}): "
        return self.channel.await_choice(player.username, prompt, self.timeout) - 1
