"""Channels the turn engine talks through.

The engine never touches sockets or stdin directly. It broadcasts text,
sends private text, and asks a named player for an integer through a
``GameChannel``. ``SessionTransport`` implements one over the network;
``ConsoleChannel`` implements one for a single local player.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from parade.net.errors import PlayerDisconnectedError
from parade.net.protocol import Message, Token

logger = logging.getLogger(__name__)

DisplaySink = Callable[[str], None]
LineSource = Callable[[], str | None]


class GameChannel(Protocol):
    """Everything the engine needs from the outside world."""

    def broadcast(self, text: str) -> None:
        """Show text to every participant."""

    def send(self, username: str, text: str) -> None:
        """Show text to one participant."""

    def clear(self) -> None:
        """Ask every participant to clear their display."""

    def await_choice(
        self, username: str, prompt: str | None = None, timeout: float | None = None
    ) -> int:
        """Block until ``username`` sends an integer.

        Args:
            username: Whose input to wait for
            prompt: Text sent to that player right before waiting
            timeout: Seconds to wait; None waits forever

        Raises:
            SessionError: When the player can no longer answer

        """
        ...

    def ensure_connected(self) -> None:
        """Raise a ``SessionError`` if any participant has already gone."""


class ConsoleChannel:
    """Channel for one local human sitting at the terminal.

    Malformed input is re-prompted here, since there is no remote peer to
    drop. End of input is a disconnect.
    """

    def __init__(
        self,
        sink: DisplaySink,
        read_line: LineSource,
        clear_display: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the channel.

        Args:
            sink: Where rendered text goes
            read_line: Returns the next input line, or None at end of input
            clear_display: Clears the screen; CLEAR_CONSOLE is dropped if None

        """
        self._sink = sink
        self._read_line = read_line
        self._clear_display = clear_display

    def broadcast(self, text: str) -> None:
        """Render text locally."""
        self._sink(text)

    def send(self, _username: str, text: str) -> None:
        """Render text locally; there is only one reader."""
        self._sink(text)

    def clear(self) -> None:
        """Clear the local display."""
        if self._clear_display is not None:
            self._clear_display()
        else:
            logger.debug("Dropping %s, no clear handler", Token.CLEAR_CONSOLE)

    def await_choice(
        self, username: str, prompt: str | None = None, timeout: float | None = None
    ) -> int:
        """Read lines until one parses as an integer."""
        if timeout is not None:
            logger.debug("Console input ignores timeout=%s", timeout)
        while True:
            if prompt:
                self._sink(prompt)
            line = self._read_line()
            if line is None:
                raise PlayerDisconnectedError(username, "input closed")
            try:
                return int(line.strip())
            except ValueError:
                self._sink(Message.INVALID_NUMBER)

    def ensure_connected(self) -> None:
        """A local console never drops."""
