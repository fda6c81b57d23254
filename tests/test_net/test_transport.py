"""Tests for the TCP transport, over real loopback sockets."""

import socket
import threading
import time

import pytest

from parade.config import Settings
from parade.net.client import ParadeClient
from parade.net.errors import BindError, ChoiceTimeoutError, PlayerDisconnectedError, ProtocolError
from parade.net.protocol import Message
from parade.net.server import SessionTransport


class RawClient:
    """Minimal line client for driving the server from tests."""

    def __init__(self, port: int) -> None:
        self.sock = socket.create_connection(("127.0.0.1", port), timeout=5)
        self.rfile = self.sock.makefile("r", encoding="utf-8", newline="\n")

    def send(self, text: str) -> None:
        self.sock.sendall((text + "\n").encode())

    def recv(self) -> str:
        line = self.rfile.readline()
        return line.rstrip("\n") if line else None

    def recv_until(self, predicate) -> list[str]:
        seen = []
        while True:
            line = self.recv()
            if line is None:
                return seen
            seen.append(line)
            if predicate(line):
                return seen

    def answer_when(self, predicate, reply: str) -> threading.Thread:
        def run():
            self.recv_until(predicate)
            self.send(reply)

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        return thread

    def close(self) -> None:
        self.rfile.close()
        self.sock.close()


def make_settings(**overrides) -> Settings:
    values = {"host": "127.0.0.1", "port": 0, "human_player_count": 2, "ai_player_count": 0}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def transport():
    transport = SessionTransport(make_settings())
    transport.bind()
    transport.start_accepting()
    yield transport
    transport.close()


@pytest.fixture
def seated(transport):
    """Two registered raw clients, Ann and Bob."""
    ann = RawClient(transport.port_bound)
    ann.send("Ann")
    assert ann.recv() == "Ann joined the game!"
    assert ann.recv() == Message.WAITING

    bob = RawClient(transport.port_bound)
    bob.send("Bob")
    assert bob.recv() == "Bob joined the game!"
    assert transport.wait_for_players(timeout=5) == ["Ann", "Bob"]
    yield ann, bob
    ann.close()
    bob.close()


class TestHandshake:
    """Test username registration."""

    def test_join_sequence(self, transport, seated):
        """Everyone hears each join and the all-joined notice."""
        ann, bob = seated
        assert ann.recv() == "Bob joined the game!"
        assert ann.recv() == Message.ALL_JOINED
        assert bob.recv() == Message.ALL_JOINED

    def test_taken_name_retries(self, transport):
        """A duplicate username is refused until a free one is sent."""
        ann = RawClient(transport.port_bound)
        ann.send("Ann")
        ann.recv_until(lambda line: line == Message.WAITING)

        other = RawClient(transport.port_bound)
        other.send("Ann")
        assert other.recv() == "Ann is taken!"
        other.send("Cat")
        assert other.recv() == "Cat joined the game!"
        assert transport.wait_for_players(timeout=5) == ["Ann", "Cat"]
        ann.close()
        other.close()

    def test_full_table_rejects(self, transport, seated):
        """Connections after the table fills are turned away."""
        late = RawClient(transport.port_bound)
        assert late.recv() == Message.GAME_FULL
        assert late.recv() is None
        late.close()

    def test_wait_times_out(self, transport):
        """Waiting for players can give up."""
        with pytest.raises(TimeoutError):
            transport.wait_for_players(timeout=0.2)


class TestAwaitChoice:
    """Test blocking for one player's answer."""

    def test_returns_integer(self, transport, seated):
        """The answer sent after the prompt is returned."""
        ann, _ = seated
        ann.answer_when(lambda line: line == "Pick: ", "3")
        assert transport.await_choice("Ann", "Pick: ", timeout=5) == 3

    def test_stale_input_dropped(self, transport, seated):
        """Lines sent before the prompt do not count as the answer."""
        ann, _ = seated
        ann.send("1")
        session = transport.registry.get("Ann")
        deadline = time.monotonic() + 5
        while session._lines.empty() and time.monotonic() < deadline:
            time.sleep(0.01)
        ann.answer_when(lambda line: line == "Pick: ", "2")
        assert transport.await_choice("Ann", "Pick: ", timeout=5) == 2

    def test_non_integer_is_protocol_error(self, transport, seated):
        """Junk on the wire ends the session."""
        ann, _ = seated
        ann.answer_when(lambda line: line == "Pick: ", "abc")
        with pytest.raises(ProtocolError):
            transport.await_choice("Ann", "Pick: ", timeout=5)

    def test_disconnect_notice(self, transport, seated):
        """The courtesy notice is a disconnect."""
        ann, _ = seated
        ann.answer_when(lambda line: line == "Pick: ", "Ann DISCONNECTED")
        with pytest.raises(PlayerDisconnectedError):
            transport.await_choice("Ann", "Pick: ", timeout=5)

    def test_other_player_leaving_fails_fast(self, transport, seated):
        """Waiting on Ann stops as soon as Bob drops."""
        ann, bob = seated
        bob.close()
        with pytest.raises(PlayerDisconnectedError) as exc_info:
            transport.await_choice("Ann", "Pick: ", timeout=5)
        assert exc_info.value.username == "Bob"
        with pytest.raises(PlayerDisconnectedError):
            transport.ensure_connected()

    def test_timeout(self, transport, seated):
        """A finite timeout gives up with its own error."""
        with pytest.raises(ChoiceTimeoutError):
            transport.await_choice("Ann", "Pick: ", timeout=0.3)


class TestBind:
    """Test port selection."""

    def test_busy_port_moves_on(self):
        """A taken port is skipped for the next one."""
        blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        blocker.bind(("127.0.0.1", 0))
        blocker.listen()
        busy = blocker.getsockname()[1]
        transport = SessionTransport(make_settings(port=busy))
        try:
            port = transport.bind()
            assert busy < port < busy + 100
        finally:
            transport.close()
            blocker.close()

    def test_gives_up_after_limit(self):
        """With no free port in the window a BindError is raised."""
        blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        blocker.bind(("127.0.0.1", 0))
        blocker.listen()
        busy = blocker.getsockname()[1]
        transport = SessionTransport(make_settings(port=busy, port_retry_limit=1))
        try:
            with pytest.raises(BindError):
                transport.bind()
        finally:
            blocker.close()


class TestClient:
    """Test the client against a live transport."""

    def test_register_and_listen(self, transport):
        """The client claims a name, renders lines and stops on game end."""
        shown = []
        cleared = []
        client = ParadeClient(shown.append, lambda: cleared.append(True))
        client.connect("127.0.0.1", transport.port_bound, timeout=5)
        assert client.register("Ann")

        rival = ParadeClient(lambda _: None)
        rival.connect("127.0.0.1", transport.port_bound, timeout=5)
        assert not rival.register("Ann")
        assert rival.register("Bob")
        transport.wait_for_players(timeout=5)

        listener = client.start_listening()
        transport.clear()
        transport.broadcast("hello")
        transport.broadcast(Message.GAME_OVER)
        listener.join(timeout=5)

        assert not listener.is_alive()
        assert "Ann joined the game!" in shown
        assert "hello" in shown
        assert shown[-1] == Message.GAME_OVER
        assert cleared
        rival.close()

    def test_send_choice_validates_locally(self, transport):
        """Non-integers never reach the server."""
        shown = []
        client = ParadeClient(shown.append)
        client.connect("127.0.0.1", transport.port_bound, timeout=5)
        client.register("Ann")
        assert not client.send_choice("abc")
        assert "Invalid input! Please enter an integer." in shown
        assert client.send_choice(" 4 ")
        client.close()
