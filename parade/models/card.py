"""Card model."""

from dataclasses import dataclass

from parade.constants import MAX_CARD_VALUE, MIN_CARD_VALUE
from parade.models.enums import Color


@dataclass(frozen=True)
class Card:
    """A face value and a colour.

    Attributes:
        value: Card value (0-10)
        color: One of the six parade colours

    """

    value: int
    color: Color

    def __post_init__(self) -> None:
        """Reject values outside the printed range."""
        if not MIN_CARD_VALUE <= self.value <= MAX_CARD_VALUE:
            msg = f"Card value must be {MIN_CARD_VALUE}-{MAX_CARD_VALUE}, got {self.value}"
            raise ValueError(msg)

    def __str__(self) -> str:
        """Return string representation."""
        return f"[{self.value} {self.color.value}]"


def get_all_cards() -> list[Card]:
    """Build one card per (colour, value) pair, in colour then value order."""
    return [
        Card(value, color)
        for color in Color
        for value in range(MIN_CARD_VALUE, MAX_CARD_VALUE + 1)
    ]


DECK_SIZE = len(Color) * (MAX_CARD_VALUE - MIN_CARD_VALUE + 1)
