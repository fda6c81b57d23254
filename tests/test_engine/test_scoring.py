"""Tests for final scoring and winner selection."""

import random

import pytest
from factories import make_card, make_player
from hypothesis import given, settings
from hypothesis import strategies as st

from parade.engine.scoring import calculate_scores, get_winners
from parade.models.card import get_all_cards


def reds(*values):
    return [make_card(v, "red") for v in values]


class TestTwoPlayerScoring:
    """Two players: a majority needs a lead of two or more cards."""

    def test_equal_counts_score_points(self):
        """Counts (3,3) leave both players on face values."""
        a = make_player("A", collected=reds(1, 2, 3))
        b = make_player("B", collected=reds(4, 5, 6))
        assert calculate_scores([a, b]) == {"A": 6, "B": 15}

    def test_lead_of_one_scores_points(self):
        """Counts (3,2) are still close enough to score face values."""
        a = make_player("A", collected=reds(7, 8, 9))
        b = make_player("B", collected=reds(1, 2))
        assert calculate_scores([a, b]) == {"A": 24, "B": 3}

    def test_majority_scores_count(self):
        """Counts (5,2): the player with five scores 5, the other scores points."""
        a = make_player("A", collected=reds(6, 7, 8, 9, 10))
        b = make_player("B", collected=reds(4, 5))
        assert calculate_scores([a, b]) == {"A": 5, "B": 9}

    def test_second_player_majority(self):
        """The majority rule applies the same way to the second seat."""
        a = make_player("A", collected=[])
        b = make_player("B", collected=[make_card(v, "blue") for v in (8, 9)])
        assert calculate_scores([a, b]) == {"A": 0, "B": 2}

    def test_colours_add_up(self):
        """Totals sum across colours."""
        a = make_player("A", collected=[*reds(6, 7, 8), make_card(4, "green")])
        b = make_player("B", collected=[make_card(3, "green")])
        assert calculate_scores([a, b]) == {"A": 3 + 4, "B": 3}


class TestManyPlayerScoring:
    """Three or more players: the holders of the maximum count score count."""

    def test_unique_maximum(self):
        """A single leader scores its count."""
        a = make_player("A", collected=reds(8, 9))
        b = make_player("B", collected=reds(3))
        c = make_player("C", collected=[])
        assert calculate_scores([a, b, c]) == {"A": 2, "B": 3, "C": 0}

    def test_universal_zero_tie(self):
        """Everyone at zero of a colour means no penalty anywhere."""
        players = [make_player(n, collected=[]) for n in "ABC"]
        assert calculate_scores(players) == {"A": 0, "B": 0, "C": 0}

    def test_universal_tie(self):
        """Everyone sharing the maximum scores face values."""
        a = make_player("A", collected=reds(1, 2))
        b = make_player("B", collected=reds(3, 4))
        c = make_player("C", collected=reds(5, 6))
        assert calculate_scores([a, b, c]) == {"A": 3, "B": 7, "C": 11}

    def test_all_but_one_share_maximum(self):
        """When n-1 players share the maximum, each of them scores count."""
        a = make_player("A", collected=reds(9, 10))
        b = make_player("B", collected=reds(7, 8))
        c = make_player("C", collected=reds(5))
        assert calculate_scores([a, b, c]) == {"A": 2, "B": 2, "C": 5}

    def test_seating_order_preserved(self):
        """Scores come back in seating order."""
        players = [make_player(n) for n in ("Zed", "Amy", "Mo", "Kit")]
        assert list(calculate_scores(players)) == ["Zed", "Amy", "Mo", "Kit"]

    def test_needs_two_players(self):
        """A lone player cannot be scored."""
        with pytest.raises(ValueError):
            calculate_scores([make_player("A")])


class TestWinners:
    """Lowest total wins; ties all win."""

    def test_single_winner(self):
        """Test the lowest score wins."""
        assert get_winners({"A": 10, "B": 3, "C": 7}) == ["B"]

    def test_tied_winners(self):
        """Two players on the lowest total both win."""
        assert get_winners({"A": 4, "B": 9, "C": 4}) == ["A", "C"]

    def test_everyone_ties(self):
        """Test a full tie returns every player."""
        assert get_winners({"A": 1, "B": 1}) == ["A", "B"]

    def test_empty(self):
        """Test no scores means no winners."""
        assert get_winners({}) == []


class TestScoringProperties:
    """Property tests over random collections."""

    @given(seed=st.integers(0, 100000), players=st.integers(2, 6))
    @settings(max_examples=100, deadline=None)
    def test_score_bounded_by_points(self, seed, players):
        """A player never scores more than the face value plus count of their cards."""
        rng = random.Random(seed)
        cards = get_all_cards()
        rng.shuffle(cards)
        seats = [make_player(f"P{i}", collected=cards[i::players][: rng.randint(0, 11)]) for i in range(players)]
        scores = calculate_scores(seats)
        for player in seats:
            total = sum(c.value for c in player.collected) + len(player.collected)
            assert 0 <= scores[player.username] <= total
        assert get_winners(scores)
