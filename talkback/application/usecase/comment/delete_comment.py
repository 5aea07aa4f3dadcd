"""Delete comment use case."""

from talkback.adapter.api import CommentApiClient
from talkback.application.command import DeleteCommentCommand
from talkback.application.state import RenderRequest
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.service import ReconcilerService


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment.

    The comment stays in the store as a tombstone so its replies remain
    reachable.
    """

    def __init__(
        self,
        api: CommentApiClient,
        reconciler: ReconcilerService,
        hide_deleted: bool = False,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            api: Comment backend API client
            reconciler: Reconciler domain service
            hide_deleted: Whether deleted comments without replies are hidden,
                in which case the card disappears and the tree is re-rendered
        """
        self.api = api
        self.reconciler = reconciler
        self.hide_deleted = hide_deleted

    async def execute(self, request: DeleteCommentCommand) -> RenderRequest:
        await self.api.delete_comment(request.comment_id)
        self.reconciler.apply_deletion(request.comment_id)
        if self.hide_deleted:
            return RenderRequest.tree()
        return RenderRequest.card(request.comment_id)
