"""Plain-text rendering of game state for players.

Everything here returns a string for a display sink. Nothing in here knows
about terminals or sockets.
"""

from collections.abc import Iterable, Mapping

from parade.models.card import Card
from parade.models.enums import Color
from parade.models.player import Player

EMPTY_COLLECTION = "(no cards collected)"


def format_cards(cards: Iterable[Card]) -> str:
    """Render cards on one line."""
    return " ".join(str(card) for card in cards) or "(empty)"


def format_hand(cards: list[Card]) -> str:
    """Render a hand with the 1-based numbers players type."""
    return "  ".join(f"{i}) {card}" for i, card in enumerate(cards, start=1))


def format_collection(player: Player) -> str:
    """Render collected cards grouped by colour."""
    if not player.collected:
        return EMPTY_COLLECTION
    lines = []
    for color in Color:
        cards = sorted((c for c in player.collected if c.color == color), key=lambda c: c.value)
        if cards:
            lines.append(f"  {color.value:<6} {format_cards(cards)}")
    return "\n".join(lines)


def turn_banner(username: str, round_number: int, final_round: bool) -> str:
    """Header shown at the start of each turn."""
    label = "Final Turn" if final_round else f"Turn {round_number}"
    return f"===== {username} | {label} ====="


def format_scores(scores: Mapping[str, int]) -> str:
    """One line per player with their final score."""
    return "\n".join(f"{name}'s score: {score}" for name, score in scores.items())


def format_winners(winners: list[str], player_count: int) -> str:
    """Announce the parade winner(s)."""
    names = ", ".join(winners)
    if len(winners) == player_count:
        return "Oh no, a massive tie"
    if len(winners) == 1:
        return f"{names} has won parade"
    return f"{names} have won parade!"


def format_bankrolls(players: Iterable[Player]) -> str:
    """Bankroll table for wager mode."""
    rows = [f" >>> {p.username}: ${p.bankroll}" for p in players]
    return "\n".join(["===== BANKROLLS =====", *rows])
