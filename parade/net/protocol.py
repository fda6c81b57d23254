"""Wire protocol: newline-delimited UTF-8 text, one line per message."""

from enum import StrEnum

from parade.net.errors import PlayerDisconnectedError, ProtocolError

ENCODING = "utf-8"

__all__ = [
    "ENCODING",
    "Message",
    "Token",
    "disconnect_notice",
    "is_disconnect_notice",
    "is_taken_reply",
    "parse_choice",
    "taken_reply",
]


class Token(StrEnum):
    """Reserved strings with protocol meaning."""

    CLEAR_CONSOLE = "CLEAR_CONSOLE"
    DISCONNECT = "DISCONNECT"
    GAME_ENDED = "Game ended"


class Message(StrEnum):
    """Fixed texts sent to players."""

    ALL_JOINED = "All players have joined!"
    WAITING = "waiting for more players to join..."
    GAME_FULL = "Game already in progress"
    INVALID_NUMBER = "Invalid input! Please enter a valid number."
    INVALID_RANGE = "Invalid choice! Please enter a number between 1 and {upper}"
    DUPLICATE_DISCARD = "Invalid choice! Please choose a different card."
    GAME_OVER = "Game ended. Press Ctrl + C to exit!"
    PLAYER_LEFT = "{username} has disconnected. Game ends!"


def taken_reply(username: str) -> str:
    """Handshake reply telling a client to pick another name."""
    return f"{username} is taken!"


def is_taken_reply(username: str, line: str) -> bool:
    """Check a handshake reply against the rejection text."""
    return line == taken_reply(username)


def disconnect_notice(username: str) -> str:
    """Courtesy line a client sends before closing."""
    return f"{username} DISCONNECTED"


def is_disconnect_notice(line: str) -> bool:
    """Check if a client line announces it is leaving."""
    return Token.DISCONNECT in line


def parse_choice(username: str, line: str | None) -> int:
    """Turn one client line into the integer it carries.

    Args:
        username: Sender, for error reporting
        line: Raw line without its newline; None means end of stream

    Returns:
        The integer the client sent (still 1-based)

    Raises:
        PlayerDisconnectedError: On end of stream or a disconnect notice
        ProtocolError: On an empty or non-integer line

    """
    if line is None:
        raise PlayerDisconnectedError(username, "connection closed")
    if is_disconnect_notice(line):
        raise PlayerDisconnectedError(username, "left the game")
    text = line.strip()
    if not text:
        raise ProtocolError(username, "empty message")
    try:
        return int(text)
    except ValueError:
        raise ProtocolError(username, f"expected an integer, got {text!r}") from None
