"""Line-based TCP transport for multiplayer games."""

from __future__ import annotations

import logging
import queue
import socket
import threading
import time

from parade.config import Settings
from parade.net.errors import BindError, ChoiceTimeoutError, PlayerDisconnectedError, SessionError
from parade.net.protocol import Message, Token, is_disconnect_notice, parse_choice, taken_reply
from parade.net.registry import SessionRegistry
from parade.net.session import PlayerSession

logger = logging.getLogger(__name__)

# How often a blocked await wakes up to notice another player leaving
POLL_INTERVAL = 0.2


class SessionTransport:
    """Accepts player connections and carries turn traffic.

    Handles:
    - Port binding, moving to the next port when one is taken
    - Username handshake with first-come uniqueness
    - Broadcast and targeted sends
    - Blocking ``await_choice`` for the engine thread
    - Fail-fast shutdown when any player leaves
    """

    def __init__(self, settings: Settings, capacity: int | None = None) -> None:
        """Initialize the transport.

        Args:
            settings: Host, first port and retry limit come from here
            capacity: Seats to fill; defaults to the configured human count

        """
        self.host = settings.host
        self.port = settings.port
        self.port_retry_limit = settings.port_retry_limit
        self.port_bound: int | None = None
        self.registry = SessionRegistry(
            capacity if capacity is not None else settings.human_player_count
        )
        self._listener: socket.socket | None = None
        self._accept_thread: threading.Thread | None = None
        self._closing = threading.Event()
        self._failure_lock = threading.Lock()
        self._failure: SessionError | None = None
        self._announced = threading.Semaphore(0)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def bind(self) -> int:
        """Open the listening socket.

        Returns:
            The port actually bound

        Raises:
            BindError: No port in the retry window was free

        """
        first = self.port
        for attempt in range(self.port_retry_limit):
            port = first + attempt if first else 0
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            try:
                listener.bind((self.host, port))
            except OSError as e:
                listener.close()
                logger.info("Port %d unavailable (%s), trying %d", port, e, port + 1)
                continue
            listener.listen()
            self._listener = listener
            self.port_bound = listener.getsockname()[1]
            logger.info("Server listening on %s:%d", self.host, self.port_bound)
            return self.port_bound

        msg = f"No free port in {first}-{first + self.port_retry_limit - 1}"
        raise BindError(msg)

    def start_accepting(self) -> None:
        """Accept connections on a background thread until closed."""
        if self._listener is None:
            self.bind()
        self._accept_thread = threading.Thread(
            target=self._accept_loop, name="accept", daemon=True
        )
        self._accept_thread.start()

    def wait_for_players(self, timeout: float | None = None) -> list[str]:
        """Block until every seat is registered.

        Returns:
            Usernames in registration order

        Raises:
            PlayerDisconnectedError: A registered player left while others joined
            TimeoutError: ``timeout`` ran out first

        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while not self.registry.wait_until_full(self._poll_wait(deadline)):
            self.ensure_connected()
            if deadline is not None and time.monotonic() >= deadline:
                self._lobby_timeout()
        for _ in range(self.registry.capacity):
            while not self._announced.acquire(timeout=self._poll_wait(deadline)):
                self.ensure_connected()
                if deadline is not None and time.monotonic() >= deadline:
                    self._lobby_timeout()
        self.ensure_connected()
        self.broadcast(Message.ALL_JOINED)
        return self.registry.usernames()

    @staticmethod
    def _poll_wait(deadline: float | None) -> float:
        if deadline is None:
            return POLL_INTERVAL
        return max(min(POLL_INTERVAL, deadline - time.monotonic()), 0)

    def _lobby_timeout(self) -> None:
        msg = f"Only {len(self.registry)} of {self.registry.capacity} players joined"
        raise TimeoutError(msg)

    def close(self) -> None:
        """Close every session and the listener."""
        self._closing.set()
        for session in self.registry.clear():
            session.close()
        if self._listener is not None:
            try:
                self._listener.close()
            except OSError:
                logger.debug("Listener already closed")
            self._listener = None
        logger.info("Transport closed")

    # ------------------------------------------------------------------
    # Accept and handshake
    # ------------------------------------------------------------------

    def _accept_loop(self) -> None:
        while not self._closing.is_set():
            listener = self._listener
            if listener is None:
                return
            try:
                conn, addr = listener.accept()
            except OSError:
                if not self._closing.is_set():
                    logger.exception("Accept failed")
                return
            logger.info("Connection from %s:%s", addr[0], addr[1])
            threading.Thread(
                target=self._handle_client, args=(conn, addr), daemon=True
            ).start()

    def _handle_client(self, conn: socket.socket, addr: tuple) -> None:
        session = PlayerSession(conn, addr, on_gone=self._on_session_gone)

        while True:
            if self.registry.is_full():
                self._reject(session, Message.GAME_FULL)
                return
            line = session.read_line()
            if line is None:
                logger.info("%s left before registering", session.label)
                session.close()
                return
            username = line.strip()
            if username and self.registry.register(session, username):
                break
            if self.registry.is_full():
                self._reject(session, Message.GAME_FULL)
                return
            try:
                session.send(taken_reply(username))
            except OSError:
                session.close()
                return

        logger.info("Registered %s from %s:%s", username, addr[0], addr[1])
        session.start_reading()
        self.broadcast(f"{username} joined the game!")
        if not self.registry.is_full():
            self.broadcast(Message.WAITING)
        self._announced.release()

    @staticmethod
    def _reject(session: PlayerSession, reason: str) -> None:
        try:
            session.send(reason)
        except OSError:
            logger.debug("Could not tell %s: %s", session.label, reason)
        session.close()

    def _on_session_gone(self, session: PlayerSession) -> None:
        if self._closing.is_set():
            return
        self._record_failure(PlayerDisconnectedError(session.label, "connection lost"))

    def _record_failure(self, error: SessionError) -> None:
        with self._failure_lock:
            if self._failure is None:
                self._failure = error
                logger.warning("Session failure: %s", error)

    # ------------------------------------------------------------------
    # GameChannel
    # ------------------------------------------------------------------

    def broadcast(self, text: str) -> None:
        """Send text to every registered session."""
        logger.debug("broadcast: %s", text)
        for session in self.registry.snapshot():
            self._write(session, text)

    def send(self, username: str, text: str) -> None:
        """Send text to one session."""
        session = self.registry.get(username)
        if session is None:
            logger.warning("No session for %s", username)
            return
        self._write(session, text)

    def clear(self) -> None:
        """Tell every client to clear its display."""
        self.broadcast(Token.CLEAR_CONSOLE)

    def _write(self, session: PlayerSession, text: str) -> None:
        try:
            session.send(text)
        except OSError:
            self._record_failure(PlayerDisconnectedError(session.label, "write failed"))

    def ensure_connected(self) -> None:
        """Raise the first recorded session failure, if any."""
        with self._failure_lock:
            failure = self._failure
        if failure is not None:
            raise failure

    def await_choice(
        self, username: str, prompt: str | None = None, timeout: float | None = None
    ) -> int:
        """Wait for one integer line from ``username``.

        Lines that arrived before the prompt are stale and dropped, except
        that a stale end of stream or disconnect notice still counts.

        Args:
            username: Whose input to wait for
            prompt: Sent to the player after stale input is dropped
            timeout: Seconds to wait; None waits forever

        Returns:
            The integer sent (1-based, unvalidated)

        Raises:
            PlayerDisconnectedError: The player, or anyone else, left
            ProtocolError: The player sent something that is not an integer
            ChoiceTimeoutError: ``timeout`` ran out

        """
        session = self.registry.get(username)
        if session is None:
            raise PlayerDisconnectedError(username, "not connected")

        for stale in session.drain():
            if stale is None or is_disconnect_notice(stale):
                parse_choice(username, stale)
            logger.debug("Dropping stale input from %s: %r", username, stale)

        if prompt:
            self.send(username, prompt)

        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            self.ensure_connected()
            wait = POLL_INTERVAL
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise ChoiceTimeoutError(username, f"no answer within {timeout}s")
                wait = min(wait, remaining)
            try:
                line = session.next_line(timeout=wait)
            except queue.Empty:
                continue
            logger.debug("Message received from %s: %r", username, line)
            return parse_choice(username, line)
