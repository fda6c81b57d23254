"""Final scoring under the colour-majority rule.

Each player's collected cards are tallied per colour as (count, points).
For every colour a player either scores the points (face values) or, when
they hold the majority, scores the count instead. Lowest total wins.

Two players: a majority only counts when it leads by two or more cards.
Three or more: everyone holding the maximum count scores count, unless
every player shares that maximum, in which case nobody does.
"""

from parade.models.enums import Color
from parade.models.player import ColorTally, Player


def _score_two_players(
    first: dict[Color, ColorTally], second: dict[Color, ColorTally]
) -> tuple[int, int]:
    total_first = total_second = 0
    for color in Color:
        a, b = first[color], second[color]
        if abs(a.count - b.count) <= 1:
            total_first += a.points
            total_second += b.points
        elif a.count > b.count:
            total_first += a.count
            total_second += b.points
        else:
            total_first += a.points
            total_second += b.count
    return total_first, total_second


def _score_many_players(tallies: list[dict[Color, ColorTally]]) -> list[int]:
    totals = [0] * len(tallies)
    for color in Color:
        counts = [tally[color].count for tally in tallies]
        top = max(counts)
        shared_by_all = all(count == top for count in counts)
        for seat, tally in enumerate(tallies):
            if tally[color].count == top and not shared_by_all:
                totals[seat] += tally[color].count
            else:
                totals[seat] += tally[color].points
    return totals


def calculate_scores(players: list[Player]) -> dict[str, int]:
    """Score every player.

    Args:
        players: Players in seating order, collections final

    Returns:
        Username to total score, in seating order

    """
    if len(players) < 2:
        msg = "Scoring needs at least two players"
        raise ValueError(msg)

    tallies = [player.color_tally() for player in players]
    if len(players) == 2:
        totals = list(_score_two_players(tallies[0], tallies[1]))
    else:
        totals = _score_many_players(tallies)
    return {player.username: total for player, total in zip(players, totals, strict=True)}


def get_winners(scores: dict[str, int]) -> list[str]:
    """Players with the strictly lowest score; ties all win."""
    if not scores:
        return []
    lowest = min(scores.values())
    return [name for name, score in scores.items() if score == lowest]
