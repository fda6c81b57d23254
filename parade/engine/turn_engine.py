"""Turn engine: the Parade state machine.

States run INIT -> PLAYER_TURN -> END_CHECK -> (PLAYER_TURN | DISCARD) -> DONE.

- INIT deals six cards to the parade line and five to each hand.
- PLAYER_TURN asks the active player's strategy for a card, re-asking until
  the index is inside the hand, plays it into the line and collects. A
  replacement is drawn unless the final round has started or the deck is
  empty.
- END_CHECK latches the final round the first time a collection spans all
  six colours or the deck runs out. Latching never ends the game on the
  same turn, and play restarts from seat 0. Once latched, the game ends
  when every hand is down to four cards.
- DISCARD has each player drop two hand cards and collect the rest, then
  the collections are scored.
"""

import logging
import time
from collections.abc import Callable

from parade.constants import DISCARD_COUNT, FINAL_HAND_SIZE
from parade.engine import scoring
from parade.engine.results import GameResult
from parade.engine.wager import WagerExtension
from parade.models.card import Card
from parade.models.enums import FinalRoundTrigger, GamePhase
from parade.models.game import GameState
from parade.models.player import Player
from parade.net.channel import GameChannel
from parade.net.protocol import Message
from parade.services.formatter import (
    format_cards,
    format_collection,
    format_scores,
    format_winners,
    turn_banner,
)

logger = logging.getLogger(__name__)


class TurnEngine:
    """Runs one game from the deal to the final scores.

    The engine is single-threaded: it owns ``game`` and handles exactly one
    active player at a time, blocking on human input and never on automated
    players.
    """

    def __init__(
        self,
        game: GameState,
        channel: GameChannel,
        wager: WagerExtension | None = None,
        think_time: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the engine.

        Args:
            game: Table with players seated; dealt by ``start``
            channel: Where text goes and human input comes from
            wager: Optional blackjack side game
            think_time: Pause before an automated move is announced
            sleep: Sleep function, swappable in tests

        """
        self.game = game
        self.channel = channel
        self.wager = wager
        self.think_time = think_time
        self._sleep = sleep
        self._card_total = game.total_cards()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> GameResult:
        """Play the whole game and return the result."""
        self.start()
        while not self.play_turn():
            pass
        return self.finish()

    def start(self) -> None:
        """Deal the table."""
        self.game.phase = GamePhase.INIT
        self.game.deal()
        logger.info(
            "Game started: %s",
            ", ".join(f"{p.username} ({p.kind.value})" for p in self.game.players),
        )
        self._check_conservation()

    def play_turn(self) -> bool:
        """Play the active player's turn and run the end check.

        Returns:
            True once the game has reached the discard step

        """
        game = self.game
        self.channel.ensure_connected()

        if self.wager is not None and game.active_index == 0 and not self.wager.round_open:
            self.wager.collect_wagers()

        game.phase = GamePhase.PLAYER_TURN
        player = game.active_player
        self._show_table(player)
        collected = self._take_turn(player)

        if self.wager is not None:
            self.wager.record(player, collected)
            if game.active_index == len(game.players) - 1 and self.wager.round_open:
                self.wager.settle_round(game.round_number)

        game.phase = GamePhase.END_CHECK
        self._check_conservation()
        return self._end_check()

    def finish(self) -> GameResult:
        """Run the discard step, score, and announce the result."""
        game = self.game
        game.phase = GamePhase.DISCARD
        if self.wager is not None:
            self.wager.void_round()

        self.channel.clear()
        self._show_collections()
        for player in game.players:
            self.channel.broadcast(turn_banner(player.username, game.round_number, final_round=True))
            self.channel.broadcast(f"{player.username}: Discard {DISCARD_COUNT} cards!")
            discards = self._obtain_discards(player)
            dropped = player.discard_and_keep(discards)
            logger.debug("%s discarded %s", player.username, format_cards(dropped))

        self.channel.clear()
        self._show_collections()
        scores = scoring.calculate_scores(game.players)
        winners = scoring.get_winners(scores)
        self.channel.broadcast(format_scores(scores))
        self.channel.broadcast(format_winners(winners, len(game.players)))

        result = GameResult(
            scores=scores,
            winners=winners,
            final_round_trigger=game.final_round_trigger,
            rounds_played=game.round_number,
        )
        if self.wager is not None:
            result = self._finish_wagers(result)

        game.phase = GamePhase.DONE
        logger.info("Game over: scores=%s winners=%s", scores, winners)
        return result

    # ------------------------------------------------------------------
    # Turn steps
    # ------------------------------------------------------------------

    def _take_turn(self, player: Player) -> list[Card]:
        card = self._obtain_card(player)
        self.channel.broadcast(f"{player.username} has chosen:")
        self.channel.broadcast(format_cards([card]))

        collected = self.game.parade_line.collect(card)
        player.add_to_collection(collected)
        if collected:
            self.channel.broadcast(f"{player.username} collected {format_cards(collected)}")

        if not self.game.final_round_latched and not self.game.deck.is_empty():
            player.add_card(self.game.deck.draw())
            if player.is_human:
                self.channel.send(player.username, "A new card has been added to your hand!")
        return collected

    def _obtain_card(self, player: Player) -> Card:
        """Ask until the strategy names a card that is in the hand."""
        if not player.is_human and self.think_time:
            self._sleep(self.think_time)
        while True:
            choice = player.strategy.choose_card(self.game, player)
            try:
                return player.play_card(choice)
            except ValueError:
                if not player.is_human:
                    raise
                logger.debug("%s picked out-of-range card %d", player.username, choice + 1)
                self.channel.send(player.username, Message.INVALID_RANGE.format(upper=len(player.hand)))

    def _obtain_discards(self, player: Player) -> list[int]:
        count = min(DISCARD_COUNT, len(player.hand))
        chosen: list[int] = []
        while len(chosen) < count:
            choice = player.strategy.choose_discard(self.game, player, list(chosen))
            if not 0 <= choice < len(player.hand):
                problem = Message.INVALID_RANGE.format(upper=len(player.hand))
            elif choice in chosen:
                problem = Message.DUPLICATE_DISCARD
            else:
                chosen.append(choice)
                continue
            if not player.is_human:
                msg = f"{player.strategy} proposed an invalid discard {choice}"
                raise ValueError(msg)
            self.channel.send(player.username, problem)
        return chosen

    def _end_check(self) -> bool:
        game = self.game
        if not game.final_round_latched:
            trigger = None
            for player in game.players:
                if player.has_all_colors():
                    trigger = FinalRoundTrigger.ALL_COLORS
                    self.channel.broadcast(
                        f"\nFinal Round begins! {player.username} has collected all colors!"
                    )
                    break
            if trigger is None and game.deck.is_empty():
                trigger = FinalRoundTrigger.EMPTY_DECK
                self.channel.broadcast("\nFinal Round begins! The deck is empty!")
            if trigger is not None:
                self._latch_final_round(trigger)
                return False
        elif all(len(p.hand) <= FINAL_HAND_SIZE for p in game.players):
            return True

        game.active_index = (game.active_index + 1) % len(game.players)
        if game.active_index == 0:
            game.round_number += 1
        return False

    def _latch_final_round(self, trigger: FinalRoundTrigger) -> None:
        """Set the one-way latch and restart the rotation at seat 0."""
        game = self.game
        game.final_round_latched = True
        game.final_round_trigger = trigger
        logger.info(
            "Final round latched by %s after %s's turn (round %d)",
            trigger.value,
            game.active_player.username,
            game.round_number,
        )
        if self.wager is not None:
            self.wager.void_round()
        game.active_index = 0
        game.round_number += 1

    def _finish_wagers(self, result: GameResult) -> GameResult:
        wager = self.wager
        wager.award_parade_bonus(result.winners)
        for name, bankroll in wager.bankrolls().items():
            self.channel.broadcast(f"{name} has ended with the amount of money {bankroll}")
        overall = wager.overall_winners()
        if overall:
            self.channel.broadcast(
                f"Congratulations {', '.join(overall)} for winning blackjack parade "
                f"with {wager.bankrolls()[overall[0]]}"
            )
        return result.model_copy(
            update={
                "bankrolls": wager.bankrolls(),
                "wager_winners": overall,
                "settlements": list(wager.settlements),
            }
        )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def _show_table(self, player: Player) -> None:
        game = self.game
        self.channel.clear()
        self.channel.broadcast(
            turn_banner(player.username, game.round_number, game.final_round_latched)
        )
        self.channel.broadcast("\nCurrent Parade Line:")
        self.channel.broadcast(format_cards(game.parade_line.cards))
        self._show_collections()
        self.channel.broadcast(f"{player.username}'s turn.")

    def _show_collections(self) -> None:
        for player in self.game.players:
            self.channel.broadcast(f"{player.username}'s collected cards")
            self.channel.broadcast(format_collection(player))

    def _check_conservation(self) -> None:
        total = self.game.total_cards()
        if total != self._card_total:
            msg = f"Card count drifted to {total}, expected {self._card_total}"
            raise RuntimeError(msg)
