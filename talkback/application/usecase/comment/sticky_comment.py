"""Sticky comment use case."""

from talkback.adapter.api import CommentApiClient
from talkback.application.command import ToggleStickyCommand
from talkback.application.state import RenderRequest
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.error import ValidationError
from talkback.domain.repository import CommentRepository
from talkback.domain.service import ReconcilerService


class StickyCommentUseCase(BaseUseCase):
    """Use case for toggling the sticky flag of a root comment."""

    def __init__(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        reconciler: ReconcilerService,
    ) -> None:
        """Initialize sticky comment use case.

        Args:
            api: Comment backend API client
            store: Comment store
            reconciler: Reconciler domain service
        """
        self.api = api
        self.store = store
        self.reconciler = reconciler

    async def execute(self, request: ToggleStickyCommand) -> RenderRequest:
        """Execute sticky toggle flow.

        Stickiness changes the order of the root bucket, so the whole tree is
        re-rendered.

        Args:
            request: Toggle sticky command

        Returns:
            Full tree render request

        Raises:
            ValidationError: If the comment is unknown or not a root comment
            ApiError: If the backend rejects the change
        """
        comment = self.store.find_by_id(request.comment_id)
        if comment is None:
            raise ValidationError("Comment not found")
        if not comment.is_root:
            raise ValidationError("Only root comments can be sticky")

        sticky = not comment.is_sticky
        await self.api.set_sticky(comment.id, sticky)
        self.reconciler.apply_sticky(comment.id, sticky)
        return RenderRequest.tree()
