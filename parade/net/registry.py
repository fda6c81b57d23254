"""Lock-guarded registry of connected player sessions."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from parade.net.session import PlayerSession


class SessionRegistry:
    """Owns the set of registered sessions.

    The accept side adds to it and the broadcast side reads from it, on
    different threads, so every access goes through one condition lock.
    Readers get snapshots, never the live list.
    """

    def __init__(self, capacity: int) -> None:
        """Initialize an empty registry that holds at most ``capacity`` sessions."""
        self.capacity = capacity
        self._sessions: list[PlayerSession] = []
        # RLock underneath: register calls is_taken while holding it
        self._changed = threading.Condition()

    def register(self, session: PlayerSession, username: str) -> bool:
        """Claim ``username`` for ``session`` if nobody holds it yet.

        Returns:
            False when the name is taken or the table is already full

        """
        with self._changed:
            if len(self._sessions) >= self.capacity:
                return False
            if self.is_taken(username):
                return False
            session.username = username
            self._sessions.append(session)
            self._changed.notify_all()
            return True

    def is_taken(self, username: str) -> bool:
        """Check if a registered session already uses ``username``."""
        with self._changed:
            return any(s.username == username for s in self._sessions)

    def is_full(self) -> bool:
        """Check if every seat has been claimed."""
        with self._changed:
            return len(self._sessions) >= self.capacity

    def get(self, username: str) -> PlayerSession | None:
        """Get a session by username."""
        with self._changed:
            for session in self._sessions:
                if session.username == username:
                    return session
            return None

    def snapshot(self) -> list[PlayerSession]:
        """Copy of the sessions in registration order."""
        with self._changed:
            return list(self._sessions)

    def usernames(self) -> list[str]:
        """Registered names in registration order."""
        return [s.username for s in self.snapshot() if s.username is not None]

    def wait_until_full(self, timeout: float | None = None) -> bool:
        """Block until every seat is claimed.

        Returns:
            False if ``timeout`` ran out first

        """
        with self._changed:
            return self._changed.wait_for(
                lambda: len(self._sessions) >= self.capacity, timeout=timeout
            )

    def clear(self) -> list[PlayerSession]:
        """Empty the registry and hand back what was in it."""
        with self._changed:
            sessions, self._sessions = self._sessions, []
            self._changed.notify_all()
            return sessions

    def __len__(self) -> int:
        """Return the number of registered sessions."""
        with self._changed:
            return len(self._sessions)
