"""Live update channel.

Keeps a subscription to comment notifications for one (domain, path) pair
open for the lifetime of a comment session:

1. Connect to the live update endpoint and send the subscription
2. Decode every inbound frame and forward it to the message handler; a frame
   that fails to decode or whose handler raises is logged and skipped
3. When the connection closes or can't be opened, wait and reconnect

The reconnect delay starts at a baseline and doubles on every attempt up to a
maximum. It is never reset, not even after a connection succeeds, so a
long-lived session that went through several disconnects keeps waiting the
maximum delay.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional

import logfire
from pydantic import ValidationError
from websockets.exceptions import WebSocketException

from talkback.adapter.api.models import LiveMessage, LiveSubscription
from talkback.adapter.error import LiveChannelError
from talkback.adapter.live.connector import Frame, LiveConnector

MessageHandler = Callable[[LiveMessage], Awaitable[None]]
Sleep = Callable[[float], Awaitable[None]]


class ReconnectBackoff:
    """Exponential reconnect delay: 1000, 2000, 4000, ... capped at 60000 ms."""

    def __init__(self, initial_ms: int = 1000, max_ms: int = 60_000) -> None:
        if initial_ms <= 0 or max_ms < initial_ms:
            raise ValueError("Invalid reconnect delay bounds")
        self.initial_ms = initial_ms
        self.max_ms = max_ms
        self._delay_ms = initial_ms

    def next_delay(self) -> int:
        """Return the delay before the next attempt, in milliseconds."""
        delay = self._delay_ms
        self._delay_ms = min(self._delay_ms * 2, self.max_ms)
        return delay


class LiveUpdateChannel:
    """Subscription to live comment updates of a single page."""

    def __init__(
        self,
        connector: LiveConnector,
        url: str,
        domain: str,
        path: str,
        on_message: MessageHandler,
        backoff: Optional[ReconnectBackoff] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize live update channel.

        Args:
            connector: Transport used to open connections
            url: Live update endpoint URL
            domain: ID of the domain to subscribe to
            path: Page path to subscribe to
            on_message: Handler awaited for every decoded message
            backoff: Reconnect delay policy
            sleep: Coroutine used to wait between attempts (seconds)
        """
        self.connector = connector
        self.url = url
        self.domain = domain
        self.path = path
        self.on_message = on_message
        self.backoff = backoff or ReconnectBackoff()
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the connection loop in the background.

        Raises:
            LiveChannelError: If the channel is already running
        """
        if self.is_running:
            raise LiveChannelError("Live update channel already started")
        self._task = asyncio.create_task(self._run(), name=f"live:{self.path}")
        logfire.info("Live update channel started", url=self.url, path=self.path)

    async def close(self) -> None:
        """Stop the channel, cancelling any open connection or pending reconnect."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logfire.info("Live update channel closed", url=self.url, path=self.path)

    async def _run(self) -> None:
        while True:
            try:
                await self._listen()
                logfire.info("Live connection closed by server", url=self.url)
            except (OSError, WebSocketException) as e:
                logfire.warn("Live connection failed", url=self.url, error=str(e))

            delay_ms = self.backoff.next_delay()
            logfire.debug("Live reconnect scheduled", url=self.url, delay_ms=delay_ms)
            await self._sleep(delay_ms / 1000)

    async def _listen(self) -> None:
        async with self.connector.connect(self.url) as connection:
            subscription = LiveSubscription(domain=self.domain, path=self.path)
            await connection.send(subscription.model_dump_json(by_alias=True))
            logfire.info("Live updates subscribed", domain=self.domain, path=self.path)

            async for frame in connection:
                await self._dispatch(frame)

    async def _dispatch(self, frame: Frame) -> None:
        try:
            message = LiveMessage.model_validate_json(frame)
        except ValidationError as e:
            # Connection stays open; the frame is dropped
            logfire.warn("Malformed live message dropped", error=str(e))
            return
        try:
            await self.on_message(message)
        except Exception:
            # Handler failures must not end the connection loop
            logfire.exception(
                "Live message handler failed", action=message.action, comment=message.comment
            )
