"""Session error taxonomy.

Every ``SessionError`` ends the multiplayer session for everyone. Input
that is merely out of range is not an error at this layer; the turn engine
re-prompts for it.
"""


class SessionError(Exception):
    """A participant's connection can no longer be used."""

    def __init__(self, username: str, reason: str) -> None:
        """Record who failed and why."""
        super().__init__(f"{username}: {reason}")
        self.username = username
        self.reason = reason


class PlayerDisconnectedError(SessionError):
    """End of stream, a closed socket, or an explicit disconnect notice."""


class ProtocolError(SessionError):
    """A non-integer payload where an integer was required."""


class ChoiceTimeoutError(SessionError):
    """No choice arrived within the requested timeout."""


class BindError(OSError):
    """Every port in the retry window was already in use."""
