"""Unit tests for the live update channel."""

import asyncio
import json

import pytest

from talkback.adapter.api import LiveMessage
from talkback.adapter.error import LiveChannelError
from talkback.adapter.live import LiveUpdateChannel, MockLiveConnector, ReconnectBackoff
from talkback.domain.value import LiveAction

URL = "ws://localhost:8080/api/ws/comments"


async def eventually(predicate, timeout: float = 1.0) -> None:
    """Yield to the event loop until predicate holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0)


class Harness:
    """Channel wired to a mock connector, a recording sleep and a message queue."""

    def __init__(self, fail_connects: int = 0, on_message=None) -> None:
        self.connector = MockLiveConnector(fail_connects=fail_connects)
        self.sleeps: list[float] = []
        self.messages: asyncio.Queue[LiveMessage] = asyncio.Queue()
        self.channel = LiveUpdateChannel(
            connector=self.connector,
            url=URL,
            domain="d-1",
            path="/post",
            on_message=on_message or self.messages.put,
            sleep=self.sleep,
        )

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        await asyncio.sleep(0)


class TestReconnectBackoff:
    """Tests for ReconnectBackoff."""

    def test_doubles_up_to_cap(self):
        backoff = ReconnectBackoff()

        delays = [backoff.next_delay() for _ in range(9)]

        assert delays == [1000, 2000, 4000, 8000, 16000, 32000, 60000, 60000, 60000]

    def test_custom_bounds(self):
        backoff = ReconnectBackoff(initial_ms=500, max_ms=1500)

        assert [backoff.next_delay() for _ in range(4)] == [500, 1000, 1500, 1500]

    @pytest.mark.parametrize("initial_ms, max_ms", [(0, 100), (200, 100)])
    def test_invalid_bounds(self, initial_ms, max_ms):
        with pytest.raises(ValueError):
            ReconnectBackoff(initial_ms=initial_ms, max_ms=max_ms)


class TestLiveUpdateChannel:
    """Tests for LiveUpdateChannel."""

    @pytest.mark.asyncio
    async def test_subscribes_after_connecting(self):
        harness = Harness()
        harness.channel.start()
        try:
            await eventually(lambda: harness.connector.current is not None)
            await eventually(lambda: harness.connector.current.sent)

            assert harness.connector.attempts == [URL]
            assert json.loads(harness.connector.current.sent[0]) == {
                "domain": "d-1",
                "path": "/post",
            }
        finally:
            await harness.channel.close()

    @pytest.mark.asyncio
    async def test_forwards_messages_and_drops_malformed_frames(self):
        """A bad frame is skipped and the connection stays open."""
        harness = Harness()
        harness.channel.start()
        try:
            await eventually(lambda: harness.connector.current is not None)
            connection = harness.connector.current

            connection.feed("not json at all")
            connection.feed(json.dumps({"action": 42}))
            connection.feed(
                json.dumps({"domain": "d-1", "path": "/post", "comment": "c", "action": "new"})
            )

            message = await asyncio.wait_for(harness.messages.get(), timeout=1.0)

            assert message.live_action == LiveAction.NEW
            assert message.comment == "c"
            assert harness.messages.empty()
            assert len(harness.connector.connections) == 1
        finally:
            await harness.channel.close()

    @pytest.mark.asyncio
    async def test_handler_failure_keeps_connection(self):
        """A raising handler skips that message only."""
        received: list[str] = []

        async def handle(message: LiveMessage) -> None:
            received.append(message.comment)
            if message.comment == "c-1":
                raise ValueError("handler blew up")

        harness = Harness(on_message=handle)
        harness.channel.start()
        try:
            await eventually(lambda: harness.connector.current is not None)
            connection = harness.connector.current

            connection.feed(json.dumps({"comment": "c-1", "action": "update"}))
            connection.feed(json.dumps({"comment": "c-2", "action": "update"}))
            await eventually(lambda: len(received) == 2)

            assert received == ["c-1", "c-2"]
            assert harness.channel.is_running
            assert len(harness.connector.attempts) == 1
        finally:
            await harness.channel.close()

    @pytest.mark.asyncio
    async def test_reconnects_with_growing_delay(self):
        """Failed attempts and server closes both back off; the delay never resets."""
        harness = Harness(fail_connects=3)
        harness.channel.start()
        try:
            await eventually(lambda: harness.connector.current is not None)
            assert harness.sleeps == [1.0, 2.0, 4.0]

            harness.connector.current.drop()
            await eventually(lambda: len(harness.connector.connections) == 2)

            assert harness.sleeps == [1.0, 2.0, 4.0, 8.0]
            assert len(harness.connector.attempts) == 5
        finally:
            await harness.channel.close()

    @pytest.mark.asyncio
    async def test_close_stops_the_loop(self):
        harness = Harness()
        harness.channel.start()
        await eventually(lambda: harness.connector.connected.is_set())

        await harness.channel.close()

        assert harness.channel.is_running is False
        assert harness.connector.connected.is_set() is False

    @pytest.mark.asyncio
    async def test_start_twice_raises(self):
        harness = Harness()
        harness.channel.start()
        try:
            with pytest.raises(LiveChannelError):
                harness.channel.start()
        finally:
            await harness.channel.close()

    @pytest.mark.asyncio
    async def test_close_before_start_is_noop(self):
        harness = Harness()

        await harness.channel.close()

        assert harness.channel.is_running is False
