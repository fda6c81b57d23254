"""Command line entry point: ``parade host | join | solo``."""

import argparse
import logging
import sys

from pydantic import ValidationError
from rich.console import Console

from parade.config import Settings
from parade.engine.results import GameResult
from parade.net.channel import ConsoleChannel
from parade.net.client import ParadeClient
from parade.net.errors import BindError, SessionError
from parade.net.host import ParadeHost
from parade.services.formatter import format_scores
from parade.services.table import play_solo

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool, quiet: bool = False) -> None:
    """Set up root logging for the command line."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class TerminalIO:
    """Display sink and line source backed by a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with an existing console, or a fresh one writing to stdout."""
        self.console = console or Console()

    def render(self, text: str) -> None:
        """Print text exactly as sent, without rich markup."""
        self.console.print(text, markup=False, highlight=False)

    def clear(self) -> None:
        """Clear the terminal."""
        self.console.clear()

    def read_line(self) -> str | None:
        """Read one line; None at end of input."""
        try:
            return self.console.input()
        except EOFError:
            return None


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(prog="parade", description="Play Parade in the terminal")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    host = sub.add_parser("host", help="Host a networked game")
    host.add_argument("--port", type=int, help="First port to try")
    host.add_argument("--humans", type=int, help="Human players to wait for")
    host.add_argument("--ai", type=int, help="Automated players")
    host.add_argument("--blackjack", action="store_true", default=None, help="Enable wagers")
    host.add_argument("--seed", type=int, help="Shuffle seed")

    join = sub.add_parser("join", help="Join a hosted game")
    join.add_argument("--host", help="Server address")
    join.add_argument("--port", type=int, help="Server port")
    join.add_argument("--username", help="Name to register")

    solo = sub.add_parser("solo", help="Play alone against automated players")
    solo.add_argument("--username", help="Your name")
    solo.add_argument("--ai", type=int, help="Automated opponents (1-5)")
    solo.add_argument("--seed", type=int, help="Shuffle seed")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment with command line overrides."""
    flags = {
        "port": getattr(args, "port", None),
        "human_player_count": getattr(args, "humans", None),
        "ai_player_count": getattr(args, "ai", None),
        "blackjack_mode": getattr(args, "blackjack", None),
        "seed": getattr(args, "seed", None),
        "username": getattr(args, "username", None),
    }
    if args.command == "join" and args.host:
        flags["host"] = args.host
    if args.command == "solo":
        if flags["ai_player_count"] is None:
            configured = Settings(**{k: v for k, v in flags.items() if v is not None})
            flags["ai_player_count"] = configured.ai_player_count or 1
        flags["human_player_count"] = 1
    return Settings(**{key: value for key, value in flags.items() if value is not None})


def run_host(settings: Settings, io: TerminalIO) -> int:
    """Host a game and print the final scores locally."""
    try:
        result = ParadeHost(settings).serve()
    except BindError:
        logger.exception("Could not open a listening port")
        return 1
    except SessionError as e:
        logger.error("Game ended early: %s", e)
        return 1
    show_result(result, io)
    return 0


def run_join(settings: Settings, io: TerminalIO) -> int:
    """Connect to a host and relay the player's input."""
    client = ParadeClient(io.render, io.clear)
    host = "localhost" if settings.host == "0.0.0.0" else settings.host
    try:
        client.connect(host, settings.port)
    except OSError:
        logger.exception("Could not connect to %s:%d", host, settings.port)
        return 1

    username = settings.username
    try:
        while not client.register(username):
            io.render(f"{username} is taken! Choose another username:")
            line = io.read_line()
            if line is None:
                client.close()
                return 1
            username = line.strip() or username
    except ConnectionError as e:
        io.render(str(e))
        return 1

    client.start_listening()
    client.run_input_loop(io.read_line)
    return 0


def run_solo(settings: Settings, io: TerminalIO) -> int:
    """Play a local game against automated players."""
    channel = ConsoleChannel(io.render, io.read_line, io.clear)
    try:
        play_solo(settings, channel)
    except SessionError as e:
        logger.error("Game ended early: %s", e)
        return 1
    return 0


def show_result(result: GameResult, io: TerminalIO) -> None:
    """Print the final scores on the host terminal."""
    io.render(format_scores(result.scores))
    io.render(f"Winners: {', '.join(result.winners)}")
    if result.bankrolls:
        for name, bankroll in result.bankrolls.items():
            io.render(f"{name}: ${bankroll}")


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, quiet=args.command != "host")

    try:
        settings = load_settings(args)
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    io = TerminalIO()
    commands = {"host": run_host, "join": run_join, "solo": run_solo}
    try:
        return commands[args.command](settings, io)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
