"""Client side of the line protocol."""

from __future__ import annotations

import contextlib
import logging
import socket
import threading
from collections.abc import Callable

from parade.net.channel import DisplaySink, LineSource
from parade.net.protocol import (
    ENCODING,
    Token,
    disconnect_notice,
    is_taken_reply,
)

logger = logging.getLogger(__name__)


class ParadeClient:
    """Connects to a host, registers a username and relays turns.

    Server lines are rendered by a listener thread. Whatever the user types
    is checked for being an integer before it goes on the wire, so the
    server only ever sees integers (or the disconnect notice).
    """

    def __init__(
        self,
        sink: DisplaySink,
        clear_display: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            sink: Where server text is rendered
            clear_display: Called for CLEAR_CONSOLE

        """
        self._sink = sink
        self._clear_display = clear_display
        self._sock: socket.socket | None = None
        self._rfile = None
        self._write_lock = threading.Lock()
        self._listener: threading.Thread | None = None
        self.connected = threading.Event()
        self.username: str | None = None

    def connect(self, host: str, port: int, timeout: float | None = None) -> None:
        """Open the connection."""
        self._sock = socket.create_connection((host, port), timeout=timeout)
        self._sock.settimeout(None)
        self._rfile = self._sock.makefile("r", encoding=ENCODING, newline="\n")
        self.connected.set()
        logger.info("Connected to %s:%d", host, port)

    def _read_line(self) -> str | None:
        try:
            line = self._rfile.readline()
        except (OSError, ValueError):
            return None
        return line.rstrip("\r\n") if line else None

    def _write_line(self, text: str) -> None:
        with self._write_lock:
            self._sock.sendall((text + "\n").encode(ENCODING))

    def register(self, username: str) -> bool:
        """Try to claim a username.

        Returns:
            True once the server accepts; False if the name is taken

        Raises:
            ConnectionError: The server closed the connection

        """
        self._write_line(username)
        reply = self._read_line()
        if reply is None:
            self.close()
            msg = "Server closed the connection during registration"
            raise ConnectionError(msg)
        if is_taken_reply(username, reply):
            return False
        self.username = username
        self._render(reply)
        return True

    def _render(self, line: str) -> None:
        if line == Token.CLEAR_CONSOLE:
            if self._clear_display is not None:
                self._clear_display()
        else:
            self._sink(line)

    def start_listening(self) -> threading.Thread:
        """Render server lines on a daemon thread until the game ends."""
        self._listener = threading.Thread(target=self._listen, name="listener", daemon=True)
        self._listener.start()
        return self._listener

    def _listen(self) -> None:
        while self.connected.is_set():
            line = self._read_line()
            if line is None:
                if self.connected.is_set():
                    self._sink("Server has disconnected. Please press Ctrl+C to quit the game.")
                break
            self._render(line)
            if Token.GAME_ENDED in line:
                break
        self.close()

    def send_choice(self, text: str) -> bool:
        """Send one typed line if it is an integer.

        Returns:
            False if the text was rejected locally

        """
        try:
            number = int(text.strip())
        except ValueError:
            self._sink("Invalid input! Please enter an integer.")
            return False
        self._write_line(str(number))
        return True

    def run_input_loop(self, read_line: LineSource) -> None:
        """Forward user input until it runs out or the game ends."""
        try:
            while self.connected.is_set():
                text = read_line()
                if text is None:
                    break
                if not self.connected.is_set():
                    break
                self.send_choice(text)
        except OSError:
            logger.exception("Lost connection while sending")
        finally:
            self.disconnect()

    def disconnect(self) -> None:
        """Tell the server we are leaving, then close."""
        if self.connected.is_set() and self.username:
            with contextlib.suppress(OSError):
                self._write_line(disconnect_notice(self.username))
        self.close()

    def close(self) -> None:
        """Close the socket; safe to call more than once."""
        self.connected.clear()
        if self._sock is not None:
            with contextlib.suppress(OSError):
                self._sock.shutdown(socket.SHUT_RDWR)
            with contextlib.suppress(OSError):
                self._sock.close()
