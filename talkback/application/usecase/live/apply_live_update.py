"""Apply live update use case.

Live messages only carry IDs, so new and updated comments are refetched from
the backend and merged into the store. Every handler is safe to run for a
duplicated or out-of-order message: inserts skip known comments, updates and
deletions replace by ID.
"""

from collections.abc import Awaitable, Callable
from typing import Optional
from uuid import UUID

import logfire

from talkback.adapter.api import CommentApiClient, LiveMessage
from talkback.application.state import RenderRequest, SessionState
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.model import Comment
from talkback.domain.repository import CommentRepository
from talkback.domain.service import ReconcilerService
from talkback.domain.value import CommentId, LiveAction


class ApplyLiveUpdateUseCase(BaseUseCase):
    """Use case merging a live update notification into the store."""

    def __init__(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        reconciler: ReconcilerService,
        state: SessionState,
        hide_deleted: bool = False,
    ) -> None:
        """Initialize apply live update use case.

        Args:
            api: Comment backend API client
            store: Comment store
            reconciler: Reconciler domain service
            state: Session view state
            hide_deleted: Whether deleted comments without replies are hidden
        """
        self.api = api
        self.store = store
        self.reconciler = reconciler
        self.state = state
        self.hide_deleted = hide_deleted
        self._handlers: dict[
            LiveAction, Callable[[CommentId], Awaitable[RenderRequest]]
        ] = {
            LiveAction.NEW: self._on_new,
            LiveAction.UPDATE: self._on_update,
            LiveAction.DELETE: self._on_delete,
        }

    async def execute(self, request: LiveMessage) -> RenderRequest:
        """Execute live update flow.

        Messages for another page, with an unknown action or without a valid
        comment ID are ignored.

        Args:
            request: Decoded live message

        Returns:
            Render request for whatever changed

        Raises:
            ApiError: If refetching the page fails
        """
        if not self._is_for_current_page(request):
            logfire.debug(
                "Live message for another page ignored",
                domain=request.domain,
                path=request.path,
            )
            return RenderRequest.none()

        action = request.live_action
        if action is None:
            logfire.debug("Live message with unknown action ignored", action=request.action)
            return RenderRequest.none()

        comment_id = _parse_id(request.comment)
        if comment_id is None:
            logfire.warn("Live message without a valid comment ID", comment=request.comment)
            return RenderRequest.none()

        with logfire.span(
            "apply_live_update", action=action.value, comment_id=str(comment_id)
        ):
            return await self._handlers[action](CommentId(comment_id))

    def _is_for_current_page(self, message: LiveMessage) -> bool:
        page_info = self.state.page_info
        if page_info is None or message.path != self.state.page.path:
            return False
        return _parse_id(message.domain) == page_info.domain_id

    async def _on_new(self, comment_id: CommentId) -> RenderRequest:
        if self.store.contains(comment_id):
            return RenderRequest.none()

        comments = await self._refetch()
        if comments is None:
            return RenderRequest.none()

        added = 0
        for comment in comments:
            if not self.store.contains(comment.id):
                added += self.reconciler.apply_created(comment)
        logfire.info("Live comments added", count=added)
        return RenderRequest.tree() if added else RenderRequest.none()

    async def _on_update(self, comment_id: CommentId) -> RenderRequest:
        local = self.store.find_by_id(comment_id)
        if local is None:
            return RenderRequest.none()

        comments = await self._refetch()
        server = next((c for c in comments or [] if c.id == comment_id), None)
        if server is None:
            return RenderRequest.none()

        self.reconciler.apply_server_comment(server)
        # A sticky change reorders the root bucket; a hidden deletion drops the card
        if server.is_sticky != local.is_sticky:
            return RenderRequest.tree()
        if self.hide_deleted and server.is_deleted and not local.is_deleted:
            return RenderRequest.tree()
        return RenderRequest.card(comment_id)

    async def _on_delete(self, comment_id: CommentId) -> RenderRequest:
        if self.reconciler.apply_deletion(comment_id) is None:
            return RenderRequest.none()
        if self.hide_deleted:
            return RenderRequest.tree()
        return RenderRequest.card(comment_id)

    async def _refetch(self) -> Optional[list[Comment]]:
        """Fetch the page's comments and merge their authors.

        Returns:
            Server comments, or None if a reload started meanwhile
        """
        token = self.state.generation
        page = self.state.page
        response = await self.api.fetch_comments(page.host, page.path)
        if not self.state.is_current(token):
            logfire.info("Live refetch superseded by reload")
            return None

        self.state.register_commenters(response.commenters)
        return response.comments


def _parse_id(value: Optional[str]) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        return None
