"""Multiplayer host: accepts players, then runs one game over the network."""

import logging

from parade.config import Settings
from parade.engine.results import GameResult
from parade.net.errors import SessionError
from parade.net.protocol import Message, Token
from parade.net.server import SessionTransport
from parade.services.table import build_engine, build_game

logger = logging.getLogger(__name__)


class ParadeHost:
    """Runs a networked game from start to finish.

    Humans are seated in the order they registered, followed by the
    automated players. Any session failure ends the game for everyone.
    """

    def __init__(self, settings: Settings, transport: SessionTransport | None = None) -> None:
        """Initialize the host.

        Args:
            settings: Table size, port and mode
            transport: Prebuilt transport, mainly for tests

        """
        self.settings = settings
        self.transport = transport or SessionTransport(settings)

    def serve(self, join_timeout: float | None = None) -> GameResult:
        """Bind, wait for every human, play, and close.

        Args:
            join_timeout: Seconds to wait for players; None waits forever

        Returns:
            The game result

        Raises:
            SessionError: A player left, while joining or during play, or broke the protocol
            TimeoutError: Not every player joined within ``join_timeout``
            BindError: No port could be bound

        """
        try:
            if self.transport.port_bound is None:
                self.transport.bind()
            self.transport.start_accepting()
            logger.info(
                "Waiting for %d player(s) on port %d",
                self.settings.human_player_count,
                self.transport.port_bound,
            )
            try:
                result = self._play(join_timeout)
            except SessionError as e:
                logger.error("Game aborted: %s", e)
                self._announce_abort(e)
                raise
            self.transport.broadcast(Message.GAME_OVER)
            return result
        finally:
            self.transport.close()

    def _play(self, join_timeout: float | None) -> GameResult:
        usernames = self.transport.wait_for_players(join_timeout)
        game = build_game(
            usernames,
            self.settings.ai_player_count,
            self.transport,
            self.settings.seed,
        )
        return build_engine(game, self.transport, self.settings).run()

    def _announce_abort(self, error: SessionError) -> None:
        self.transport.broadcast(Message.PLAYER_LEFT.format(username=error.username))
        self.transport.broadcast(Token.GAME_ENDED)
