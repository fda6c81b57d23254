"""Networking: line protocol, sessions, server transport and client."""

from parade.net.channel import ConsoleChannel, DisplaySink, GameChannel
from parade.net.errors import (
    BindError,
    ChoiceTimeoutError,
    PlayerDisconnectedError,
    ProtocolError,
    SessionError,
)

__all__ = [
    "BindError",
    "ChoiceTimeoutError",
    "ConsoleChannel",
    "DisplaySink",
    "GameChannel",
    "PlayerDisconnectedError",
    "ProtocolError",
    "SessionError",
]
