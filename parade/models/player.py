"""Player model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from parade.constants import STARTING_BANKROLL
from parade.models.card import Card
from parade.models.enums import Color, PlayerKind

if TYPE_CHECKING:
    from parade.strategies.base import BaseStrategy


class ColorTally(NamedTuple):
    """How many cards of one colour a player holds and what they add up to."""

    count: int
    points: int


@dataclass(eq=False)
class Player:
    """Represents a seat at the table.

    Human and automated players share this type; ``strategy`` decides which
    card to play and which to discard, ``kind`` tags who is behind it.

    Attributes:
        username: Unique display name
        kind: Human or automated
        strategy: Decision maker for turns and the final discard
        index: Seat position (0 is first to play)
        hand: Cards in hand, in the order shown to the player
        collected: Cards taken from the parade line
        bankroll: Wager-mode money (humans only)
        wager: Amount staked on the current wager round

    """

    username: str
    kind: PlayerKind
    strategy: BaseStrategy
    index: int = 0
    hand: list[Card] = field(default_factory=list)
    collected: list[Card] = field(default_factory=list)
    bankroll: int = STARTING_BANKROLL
    wager: int = 0

    @property
    def is_human(self) -> bool:
        """Check if a person makes this player's choices."""
        return self.kind == PlayerKind.HUMAN

    def play_card(self, card_index: int) -> Card:
        """Remove and return the card at ``card_index`` (0-based)."""
        if not 0 <= card_index < len(self.hand):
            msg = f"Card index {card_index + 1} is outside 1-{len(self.hand)}"
            raise ValueError(msg)
        return self.hand.pop(card_index)

    def add_card(self, card: Card) -> None:
        """Add a drawn card to the hand."""
        self.hand.append(card)

    def add_to_collection(self, cards: list[Card]) -> None:
        """Take collected cards from the parade line."""
        self.collected.extend(cards)

    def discard_and_keep(self, discard_indices: list[int]) -> list[Card]:
        """Throw away the chosen hand cards and collect the rest.

        Args:
            discard_indices: Distinct 0-based hand positions to drop

        Returns:
            The discarded cards

        """
        if len(set(discard_indices)) != len(discard_indices):
            msg = "Discard choices must be different cards"
            raise ValueError(msg)
        if any(not 0 <= i < len(self.hand) for i in discard_indices):
            msg = f"Discard choices must be within 1-{len(self.hand)}"
            raise ValueError(msg)
        discarded = [card for i, card in enumerate(self.hand) if i in discard_indices]
        self.collected.extend(card for i, card in enumerate(self.hand) if i not in discard_indices)
        self.hand = []
        return discarded

    def color_tally(self) -> dict[Color, ColorTally]:
        """Count and sum collected cards per colour, every colour present."""
        tally = {color: ColorTally(0, 0) for color in Color}
        for card in self.collected:
            count, points = tally[card.color]
            tally[card.color] = ColorTally(count + 1, points + card.value)
        return tally

    def has_all_colors(self) -> bool:
        """Check if the collection spans all six colours."""
        return {card.color for card in self.collected} == set(Color)

    def modify_bankroll(self, change: int) -> None:
        """Add (or with a negative amount, remove) wager money."""
        self.bankroll += change

    def __str__(self) -> str:
        """Return string representation."""
        bot_str = " (AI)" if not self.is_human else ""
        return f"{self.username}{bot_str} - Hand: {len(self.hand)} Collected: {len(self.collected)}"
