"""Comment session.

A session owns everything the widget keeps for one embedded page: the
comment store, the view state and the live update subscription. It is
explicitly started and closed; nothing is cached at module level, so any
number of sessions can coexist.
"""

from typing import Optional

import logfire

from talkback.adapter.api import LiveMessage
from talkback.adapter.error import ApiError
from talkback.adapter.live import LiveConnector, LiveUpdateChannel, ReconnectBackoff
from talkback.application.command import Command, ReloadCommand
from talkback.application.dispatcher import CommandDispatcher
from talkback.application.error import SessionClosedError
from talkback.application.presenter import Presenter
from talkback.application.state import SessionState
from talkback.application.usecase.live import ApplyLiveUpdateUseCase
from talkback.config import LiveUpdateSettings


class CommentSession:
    """Comment widget session for a single (host, path) page."""

    def __init__(
        self,
        state: SessionState,
        dispatcher: CommandDispatcher,
        presenter: Presenter,
        apply_live_update: ApplyLiveUpdateUseCase,
        connector: LiveConnector,
        live_settings: LiveUpdateSettings,
    ) -> None:
        """Initialize comment session.

        Args:
            state: Session view state
            dispatcher: Command dispatcher
            presenter: Presenter rendering store changes
            apply_live_update: Use case merging live updates
            connector: Live update transport
            live_settings: Live update configuration
        """
        self.state = state
        self.dispatcher = dispatcher
        self.presenter = presenter
        self.apply_live_update = apply_live_update
        self.connector = connector
        self.live_settings = live_settings
        self.channel: Optional[LiveUpdateChannel] = None
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Load the page and subscribe to live updates."""
        page = self.state.page
        with logfire.span("session.start", host=page.host, path=page.path):
            await self.reload()

    async def reload(self) -> None:
        """Refetch all comments and re-render."""
        await self.dispatch(ReloadCommand())

    async def dispatch(self, command: Command) -> None:
        """Dispatch a user command.

        Raises:
            SessionClosedError: If the session has been closed
        """
        if self._closed:
            raise SessionClosedError("Comment session is closed")
        await self.dispatcher.dispatch(command)
        self._ensure_live_updates()

    async def handle_live_message(self, message: LiveMessage) -> None:
        """Merge a live update into the store and render the change.

        A failed refetch is logged and dropped: the next message or reload
        brings the store up to date again.
        """
        if self._closed:
            return
        try:
            request = await self.apply_live_update.execute(message)
        except ApiError as e:
            logfire.warn(
                "Live update refetch failed",
                action=message.action,
                comment=message.comment,
                error=e.message,
            )
            return
        self.presenter.present(request)

    async def close(self) -> None:
        """Close the live channel; late results of pending reloads are discarded."""
        if self._closed:
            return
        self._closed = True
        # Invalidate any reload still in flight
        self.state.begin_reload()
        if self.channel is not None:
            await self.channel.close()
            self.channel = None
        logfire.info("Comment session closed", path=self.state.page.path)

    async def __aenter__(self) -> "CommentSession":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _ensure_live_updates(self) -> None:
        if self.channel is not None or not self.live_settings.enabled:
            return
        page_info = self.state.page_info
        if page_info is None:
            return

        self.channel = LiveUpdateChannel(
            connector=self.connector,
            url=self.live_settings.ws_url,
            domain=str(page_info.domain_id),
            path=self.state.page.path,
            on_message=self.handle_live_message,
            backoff=ReconnectBackoff(
                initial_ms=self.live_settings.reconnect_delay_ms,
                max_ms=self.live_settings.reconnect_delay_max_ms,
            ),
        )
        self.channel.start()
