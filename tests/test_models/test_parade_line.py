"""Tests for the parade line collection rule."""

from factories import make_card
from hypothesis import given, settings
from hypothesis import strategies as st

from parade.models.card import Card
from parade.models.enums import Color
from parade.models.parade_line import ParadeLine


def worked_line() -> ParadeLine:
    return ParadeLine(
        [
            make_card(5, "red"),
            make_card(3, "blue"),
            make_card(0, "green"),
            make_card(7, "orange"),
            make_card(2, "grey"),
            make_card(9, "purple"),
        ]
    )


cards_strategy = st.builds(
    Card, st.integers(min_value=0, max_value=10), st.sampled_from(list(Color))
)


class TestCollection:
    """Test which cards a played card takes from the line."""

    def test_worked_example(self):
        """A red 2 protects the last two cards and takes the red 5 and the green 0."""
        line = worked_line()
        collected = line.collect(make_card(2, "red"))

        assert collected == [make_card(5, "red"), make_card(0, "green")]
        assert line.cards == [
            make_card(3, "blue"),
            make_card(7, "orange"),
            make_card(2, "grey"),
            make_card(9, "purple"),
            make_card(2, "red"),
        ]

    def test_value_equal_to_length_collects_nothing(self):
        """With v == n every card is protected."""
        line = worked_line()
        played = make_card(6, "red")
        assert line.collect(played) == []
        assert len(line) == 7
        assert line.cards[-1] == played

    def test_value_above_length_collects_nothing(self):
        """With v > n every card is protected."""
        line = ParadeLine([make_card(0, "red"), make_card(0, "blue")])
        assert line.collect(make_card(10, "red")) == []
        assert len(line) == 3

    def test_zero_scans_whole_line(self):
        """A 0 protects nothing and takes zeros and its own colour."""
        line = ParadeLine(
            [
                make_card(4, "blue"),
                make_card(0, "green"),
                make_card(9, "red"),
                make_card(1, "blue"),
            ]
        )
        collected = line.collect(make_card(0, "blue"))
        assert collected == [make_card(4, "blue"), make_card(0, "green"), make_card(1, "blue")]
        assert line.cards == [make_card(9, "red"), make_card(0, "blue")]

    def test_protected_zone_ignores_matches(self):
        """Same-colour cards inside the protected zone stay."""
        line = ParadeLine([make_card(8, "grey"), make_card(1, "red"), make_card(1, "red")])
        collected = line.collect(make_card(2, "red"))
        assert collected == []
        assert len(line) == 4

    def test_empty_line(self):
        """Playing onto an empty line just starts it."""
        line = ParadeLine()
        assert line.collect(make_card(0, "red")) == []
        assert line.cards == [make_card(0, "red")]

    def test_preview_does_not_mutate(self):
        """Previewing gives the same answer as collecting, without side effects."""
        line = worked_line()
        before = list(line.cards)
        preview = line.preview(make_card(2, "red"))
        assert line.cards == before
        assert preview == line.collect(make_card(2, "red"))


class TestCollectionProperties:
    """Property tests for the collection rule."""

    @given(cards=st.lists(cards_strategy, max_size=15), played=cards_strategy)
    @settings(max_examples=200, deadline=None)
    def test_cards_are_conserved(self, cards, played):
        """Collected plus remaining equals the old line plus the played card."""
        line = ParadeLine(list(cards))
        collected = line.collect(played)
        assert len(collected) + len(line) == len(cards) + 1
        assert line.cards[-1] == played

    @given(cards=st.lists(cards_strategy, max_size=15), played=cards_strategy)
    @settings(max_examples=200, deadline=None)
    def test_protected_tail_survives(self, cards, played):
        """The last v cards of the old line are never collected."""
        line = ParadeLine(list(cards))
        protected = cards[len(cards) - min(played.value, len(cards)) :]
        line.collect(played)
        assert line.cards[len(line) - 1 - len(protected) : -1] == protected

    @given(cards=st.lists(cards_strategy, max_size=15), played=cards_strategy)
    @settings(max_examples=200, deadline=None)
    def test_collected_cards_qualify(self, cards, played):
        """Everything collected matches the colour or is no higher in value."""
        collected = ParadeLine(list(cards)).collect(played)
        assert all(c.color == played.color or c.value <= played.value for c in collected)
