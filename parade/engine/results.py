"""Result models returned by the engine."""

from pydantic import BaseModel, Field

from parade.models.enums import FinalRoundTrigger


class RoundSettlement(BaseModel):
    """Outcome of one wager round."""

    round_number: int
    round_scores: dict[str, int]
    winners: list[str] = Field(default_factory=list)
    bankroll_changes: dict[str, int] = Field(default_factory=dict)

    @property
    def is_push(self) -> bool:
        """True when nobody won and no money moved."""
        return not self.winners


class GameResult(BaseModel):
    """Final outcome of a game."""

    scores: dict[str, int]
    winners: list[str]
    final_round_trigger: FinalRoundTrigger | None = None
    rounds_played: int
    bankrolls: dict[str, int] | None = None
    wager_winners: list[str] | None = None
    settlements: list[RoundSettlement] = Field(default_factory=list)
