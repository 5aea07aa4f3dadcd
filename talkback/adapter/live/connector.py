"""Live update transport.

A connector opens a connection to the live update endpoint. The connection
is an async context manager yielding an object that can send text frames and
be iterated for inbound frames; iteration ends when the server closes the
connection.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import AsyncContextManager, Optional, Protocol, Union

import logfire
from websockets.asyncio.client import connect

Frame = Union[str, bytes]


class LiveConnection(Protocol):
    """Open live connection."""

    async def send(self, message: str) -> None: ...

    def __aiter__(self) -> AsyncIterator[Frame]: ...


class LiveConnector(ABC):
    """Opens live update connections.

    Provides type distinction for dependency injection.
    """

    @abstractmethod
    def connect(self, url: str) -> AsyncContextManager[LiveConnection]:
        """Open a connection to the given URL.

        Raises:
            OSError: If the server can't be reached
            websockets.exceptions.WebSocketException: On a handshake failure
        """
        pass


class WebSocketConnector(LiveConnector):
    """Connector using the websockets client."""

    def __init__(self, open_timeout: float = 10.0) -> None:
        """Initialize connector.

        Args:
            open_timeout: Timeout for the opening handshake, in seconds
        """
        self.open_timeout = open_timeout

    def connect(self, url: str) -> AsyncContextManager[LiveConnection]:
        logfire.debug("Opening live connection", url=url)
        return connect(url, open_timeout=self.open_timeout)


class MockLiveConnection:
    """In-memory connection driven by the test."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self._frames: asyncio.Queue[Optional[Frame]] = asyncio.Queue()

    async def send(self, message: str) -> None:
        self.sent.append(message)

    def feed(self, frame: Frame) -> None:
        """Deliver an inbound frame."""
        self._frames.put_nowait(frame)

    def drop(self) -> None:
        """Close the connection from the server side."""
        self._frames.put_nowait(None)

    async def __aiter__(self) -> AsyncIterator[Frame]:
        while True:
            frame = await self._frames.get()
            if frame is None:
                return
            yield frame


class MockLiveConnector(LiveConnector):
    """Connector handing out in-memory connections.

    The first `fail_connects` attempts raise ConnectionRefusedError.
    """

    def __init__(self, fail_connects: int = 0) -> None:
        self.fail_connects = fail_connects
        self.attempts: list[str] = []
        self.connections: list[MockLiveConnection] = []
        self.connected = asyncio.Event()

    @property
    def current(self) -> Optional[MockLiveConnection]:
        """Most recently opened connection."""
        return self.connections[-1] if self.connections else None

    @asynccontextmanager
    async def connect(self, url: str) -> AsyncIterator[LiveConnection]:
        self.attempts.append(url)
        if self.fail_connects > 0:
            self.fail_connects -= 1
            raise ConnectionRefusedError(f"Connection to {url} refused")

        connection = MockLiveConnection()
        self.connections.append(connection)
        self.connected.set()
        try:
            yield connection
        finally:
            self.connected.clear()
