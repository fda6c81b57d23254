"""Parade line model and the collection rule."""

from dataclasses import dataclass, field

from parade.models.card import Card


@dataclass
class ParadeLine:
    """The shared row of face-up cards, oldest first.

    Attributes:
        cards: Cards in play order; new cards join at the end

    """

    cards: list[Card] = field(default_factory=list)

    def _collectable_indices(self, played: Card) -> list[int]:
        """Indices of cards the played card would take.

        The last ``played.value`` cards are protected. Anything before them
        goes if it shares the played card's colour or has a value no higher.
        """
        unprotected = max(len(self.cards) - played.value, 0)
        return [
            i
            for i in range(unprotected)
            if self.cards[i].color == played.color or self.cards[i].value <= played.value
        ]

    def preview(self, played: Card) -> list[Card]:
        """Return what ``collect`` would take, without touching the line."""
        return [self.cards[i] for i in self._collectable_indices(played)]

    def collect(self, played: Card) -> list[Card]:
        """Play a card onto the line.

        Args:
            played: Card leaving a player's hand

        Returns:
            Collected cards in their original line order (possibly empty)

        """
        taken = set(self._collectable_indices(played))
        collected = [card for i, card in enumerate(self.cards) if i in taken]
        self.cards = [card for i, card in enumerate(self.cards) if i not in taken]
        self.cards.append(played)
        return collected

    def __len__(self) -> int:
        """Return the number of cards in the line."""
        return len(self.cards)
