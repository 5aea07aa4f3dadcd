"""Moderate comment use case."""

from talkback.adapter.api import CommentApiClient
from talkback.application.command import ModerateCommentCommand
from talkback.application.state import RenderRequest
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.service import ReconcilerService


class ModerateCommentUseCase(BaseUseCase):
    """Use case for approving or rejecting a comment."""

    def __init__(self, api: CommentApiClient, reconciler: ReconcilerService) -> None:
        self.api = api
        self.reconciler = reconciler

    async def execute(self, request: ModerateCommentCommand) -> RenderRequest:
        await self.api.moderate_comment(request.comment_id, request.approve)
        self.reconciler.apply_moderation(request.comment_id, request.approve)
        return RenderRequest.card(request.comment_id)
