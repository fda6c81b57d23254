"""Deck model for shuffling and drawing cards."""

import random

from parade.models.card import Card, get_all_cards


class Deck:
    """
    Represents the draw pile.

    The deck holds 66 cards: values 0-10 in each of six colours. It is
    shuffled once when created and only ever shrinks.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Fill and shuffle the deck.

        Args:
            rng: Random source; pass a seeded one for reproducible games

        """
        self.cards: list[Card] = get_all_cards()
        (rng or random.Random()).shuffle(self.cards)

    def draw(self) -> Card:
        """Remove and return the front card."""
        if not self.cards:
            msg = "Cannot draw from an empty deck"
            raise IndexError(msg)
        return self.cards.pop(0)

    def deal(self, count: int) -> list[Card]:
        """Draw ``count`` cards in order."""
        return [self.draw() for _ in range(count)]

    def is_empty(self) -> bool:
        """Check if the deck is exhausted."""
        return not self.cards

    def __len__(self) -> int:
        """Return the number of cards left."""
        return len(self.cards)
