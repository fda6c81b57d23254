"""One connected client and the thread that reads from it."""

from __future__ import annotations

import contextlib
import logging
import queue
import socket
import threading
from collections.abc import Callable

from parade.net.protocol import ENCODING, is_disconnect_notice

logger = logging.getLogger(__name__)


class PlayerSession:
    """A client socket with a dedicated reader thread.

    The reader pushes every line into a queue; ``None`` in the queue marks
    end of stream. The engine thread pulls from the queue, so reads and
    game state never share a thread.
    """

    def __init__(
        self,
        conn: socket.socket,
        addr: tuple,
        on_gone: Callable[[PlayerSession], None] | None = None,
    ) -> None:
        """Wrap an accepted connection.

        Args:
            conn: Accepted socket
            addr: Peer address, for logs
            on_gone: Called once from the reader thread when the peer leaves

        """
        self.conn = conn
        self.addr = addr
        self.username: str | None = None
        self._on_gone = on_gone
        self._rfile = conn.makefile("r", encoding=ENCODING, newline="\n")
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._write_lock = threading.Lock()
        self._closed = threading.Event()
        self._reader: threading.Thread | None = None

    @property
    def label(self) -> str:
        """Username once registered, peer address before."""
        if self.username:
            return self.username
        return f"{self.addr[0]}:{self.addr[1]}" if self.addr else "?"

    def read_line(self) -> str | None:
        """Blocking read of one line; None at end of stream."""
        try:
            line = self._rfile.readline()
        except (OSError, ValueError):
            return None
        if not line:
            return None
        return line.rstrip("\r\n")

    def start_reading(self) -> None:
        """Hand further reads to a daemon thread."""
        self._reader = threading.Thread(
            target=self._read_loop, name=f"session-{self.label}", daemon=True
        )
        self._reader.start()

    def _read_loop(self) -> None:
        while True:
            line = self.read_line()
            self._lines.put(line)
            if line is None or is_disconnect_notice(line):
                break
        if not self._closed.is_set():
            logger.info("Session %s ended (%s)", self.label, "eof" if line is None else line)
            if self._on_gone is not None:
                self._on_gone(self)

    def next_line(self, timeout: float | None = None) -> str | None:
        """Next queued line.

        Raises:
            queue.Empty: Nothing arrived within ``timeout``

        """
        return self._lines.get(timeout=timeout)

    def drain(self) -> list[str | None]:
        """Remove and return everything queued so far."""
        pending: list[str | None] = []
        while True:
            try:
                pending.append(self._lines.get_nowait())
            except queue.Empty:
                return pending

    def send(self, text: str) -> None:
        """Write text followed by a newline.

        Raises:
            OSError: The peer is gone

        """
        data = (text + "\n").encode(ENCODING)
        with self._write_lock:
            self.conn.sendall(data)

    def close(self) -> None:
        """Shut the socket down; safe to call more than once."""
        if self._closed.is_set():
            return
        self._closed.set()
        with contextlib.suppress(OSError):
            self.conn.shutdown(socket.SHUT_RDWR)
        with contextlib.suppress(OSError):
            self._rfile.close()
        with contextlib.suppress(OSError):
            self.conn.close()
