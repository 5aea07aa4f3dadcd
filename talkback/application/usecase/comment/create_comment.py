"""Create comment use case."""

import logfire

from talkback.adapter.api import CommentApiClient
from talkback.application.command import CreateCommentCommand
from talkback.application.state import RenderRequest, SessionState
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.error import ValidationError
from talkback.domain.repository import CommentRepository
from talkback.domain.service import ReconcilerService
from talkback.domain.value import Message

PENDING_MESSAGE = "Your comment will be visible after it has been approved by a moderator."


class CreateCommentUseCase(BaseUseCase):
    """Use case for submitting a comment or replying to another comment."""

    def __init__(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        reconciler: ReconcilerService,
        state: SessionState,
    ) -> None:
        """Initialize create comment use case.

        Args:
            api: Comment backend API client
            store: Comment store
            reconciler: Reconciler domain service
            state: Session view state
        """
        self.api = api
        self.store = store
        self.reconciler = reconciler
        self.state = state

    async def execute(self, request: CreateCommentCommand) -> RenderRequest:
        """Execute create comment flow.

        Steps:
        1. Validate the text and the page's readonly status
        2. Submit the comment to the backend
        3. Add the returned comment to the store and register its author

        The new comment may land anywhere in its bucket's order, so the whole
        tree is re-rendered.

        Args:
            request: Create comment command

        Returns:
            Full tree render request

        Raises:
            ValidationError: If the text is empty or the page is readonly
            ApiError: If the backend rejects the comment
        """
        markdown = request.markdown.strip()
        if not markdown:
            raise ValidationError("Comment text must not be empty")
        if self.state.page_info is not None and self.state.page_info.is_readonly:
            raise ValidationError("This page is read-only")

        response = await self.api.create_comment(
            host=self.state.page.host,
            path=self.state.page.path,
            parent_id=request.parent_id,
            markdown=markdown,
            anonymous=request.anonymous,
        )

        # Register the author first so the card never renders as deleted user
        if response.commenter is not None:
            self.state.register_commenters([response.commenter])
        self.reconciler.apply_created(response.comment)

        if response.comment.is_pending:
            self.state.message = Message.ok(PENDING_MESSAGE)

        logfire.info(
            "Comment submitted",
            comment_id=str(response.comment.id),
            is_reply=request.parent_id is not None,
            pending=response.comment.is_pending,
            total=len(self.store),
        )
        return RenderRequest.tree()
