"""Edit comment use case."""

from talkback.adapter.api import CommentApiClient
from talkback.application.command import EditCommentCommand
from talkback.application.state import RenderRequest
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.error import ValidationError
from talkback.domain.service import ReconcilerService


class EditCommentUseCase(BaseUseCase):
    """Use case for updating the text of a comment."""

    def __init__(self, api: CommentApiClient, reconciler: ReconcilerService) -> None:
        self.api = api
        self.reconciler = reconciler

    async def execute(self, request: EditCommentCommand) -> RenderRequest:
        """Submit the new text and take over the server's copy of the comment.

        The viewer's vote direction is kept from the local copy.

        Raises:
            ValidationError: If the text is empty
            ApiError: If the backend rejects the edit
        """
        markdown = request.markdown.strip()
        if not markdown:
            raise ValidationError("Comment text must not be empty")

        response = await self.api.edit_comment(request.comment_id, markdown)
        self.reconciler.apply_server_comment(response.comment)
        return RenderRequest.card(request.comment_id)
