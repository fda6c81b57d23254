"""Side wagers layered on the parade turn loop (blackjack mode).

Once per round each human stakes part of their bankroll. When the round
ends, whoever collected a point total closest to the target without going
over wins their own stake; everyone else loses theirs. Stakes are never
pooled.
"""

import logging

from parade.constants import MIN_BID, PARADE_WINNER_BONUS, TARGET_SCORE
from parade.engine.results import RoundSettlement
from parade.models.card import Card
from parade.models.player import Player
from parade.net.channel import GameChannel
from parade.services.formatter import format_bankrolls

logger = logging.getLogger(__name__)


def resolve_round(round_scores: dict[str, int], target: int = TARGET_SCORE) -> list[str]:
    """Pick the round winners.

    Args:
        round_scores: Points each player collected this round
        target: Score to get closest to without exceeding

    Returns:
        Winning usernames; empty when everyone busted or everyone tied

    """
    gaps = {name: target - score for name, score in round_scores.items() if score <= target}
    if not gaps:
        return []
    best = min(gaps.values())
    winners = [name for name, gap in gaps.items() if gap == best]
    if len(winners) == len(round_scores):
        return []
    return winners


class WagerExtension:
    """Tracks wagers, round collections and bankrolls for human players."""

    def __init__(
        self,
        players: list[Player],
        channel: GameChannel,
        min_bid: int = MIN_BID,
        target: int = TARGET_SCORE,
        parade_bonus: int = PARADE_WINNER_BONUS,
        timeout: float | None = None,
    ) -> None:
        """Initialize with the human players who take part."""
        self.players = [p for p in players if p.is_human]
        self.channel = channel
        self.min_bid = min_bid
        self.target = target
        self.parade_bonus = parade_bonus
        self.timeout = timeout
        self.round_open = False
        self._round_cards: dict[str, list[Card]] = {}
        self.settlements: list[RoundSettlement] = []

    def collect_wagers(self) -> dict[str, int]:
        """Ask every human for a stake and open a new round.

        Returns:
            Username to wager

        """
        wagers: dict[str, int] = {}
        for player in self.players:
            self.channel.broadcast(f"\n{player.username}'s turn to place a bet.")
            self.channel.send(player.username, f"Your current bankroll is ${player.bankroll}")
            player.wager = self._ask_wager(player)
            wagers[player.username] = player.wager

        self.channel.broadcast("ALL BETS ARE IN!!!!!")
        for name, amount in wagers.items():
            self.channel.broadcast(f"|| {name} has placed the bet {amount}. ||")

        self.round_open = True
        self._round_cards = {p.username: [] for p in self.players}
        return wagers

    def _ask_wager(self, player: Player) -> int:
        if player.bankroll < self.min_bid:
            self.channel.send(
                player.username,
                "You don't have enough money to play blackjack anymore :-(. Focus on parade!",
            )
            return 0

        prompt = f"ENTER YOUR WAGER (${self.min_bid} to ${player.bankroll}):"
        while True:
            amount = self.channel.await_choice(player.username, prompt, self.timeout)
            if self.min_bid <= amount <= player.bankroll:
                return amount
            if amount > player.bankroll:
                self.channel.send(
                    player.username, f"You cannot wager more than your bankroll, ${player.bankroll}."
                )
            else:
                self.channel.send(
                    player.username,
                    f"PLEASE ENTER A WAGER BETWEEN ${self.min_bid} AND ${player.bankroll}.",
                )

    def record(self, player: Player, collected: list[Card]) -> None:
        """Note what a player collected on their turn this round."""
        if self.round_open and player.username in self._round_cards:
            self._round_cards[player.username].extend(collected)

    def settle_round(self, round_number: int) -> RoundSettlement:
        """Pay out the round that just finished."""
        round_scores = {
            name: sum(card.value for card in cards) for name, cards in self._round_cards.items()
        }
        winners = resolve_round(round_scores, self.target)

        self.channel.broadcast("\n===== ROUND IS OVER !! =====")
        self.channel.broadcast(f"Target score: {self.target}")
        changes: dict[str, int] = {}
        if not winners:
            if all(score > self.target for score in round_scores.values()):
                self.channel.broadcast("All players busted! No winners this round.")
            else:
                self.channel.broadcast("There is a Tie! Nobody wins this round.")
        else:
            best = round_scores[winners[0]]
            self.channel.broadcast(f"{', '.join(winners)} wins with a BlackJack score of {best}!")
            for player in self.players:
                won = player.username in winners
                change = player.wager if won else -player.wager
                player.modify_bankroll(change)
                changes[player.username] = change
                verb = "wins" if won else "loses"
                self.channel.broadcast(f"{player.username} {verb} ${abs(change)}")

        self.channel.broadcast(format_bankrolls(self.players))
        settlement = RoundSettlement(
            round_number=round_number,
            round_scores=round_scores,
            winners=winners,
            bankroll_changes=changes,
        )
        self.settlements.append(settlement)
        logger.info("Wager round %d settled: winners=%s", round_number, winners or "none")
        self._close_round()
        return settlement

    def void_round(self) -> None:
        """Drop an unfinished round; stakes are returned untouched."""
        if not self.round_open:
            return
        self.channel.broadcast("This betting round was cut short. All bets are returned.")
        logger.info("Wager round voided")
        self._close_round()

    def _close_round(self) -> None:
        self.round_open = False
        self._round_cards = {}
        for player in self.players:
            player.wager = 0

    def award_parade_bonus(self, parade_winners: list[str]) -> None:
        """Pay the one-off bonus to human parade winners."""
        names = [p.username for p in self.players if p.username in parade_winners]
        if not names:
            return
        self.channel.broadcast(
            f"{', '.join(names)} wins an extra {self.parade_bonus} for winning parade!"
        )
        for player in self.players:
            if player.username in names:
                player.modify_bankroll(self.parade_bonus)

    def bankrolls(self) -> dict[str, int]:
        """Username to bankroll, in seating order."""
        return {p.username: p.bankroll for p in self.players}

    def overall_winners(self) -> list[str]:
        """Humans holding the highest bankroll."""
        if not self.players:
            return []
        top = max(p.bankroll for p in self.players)
        return [p.username for p in self.players if p.bankroll == top]
