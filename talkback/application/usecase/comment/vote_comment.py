"""Vote comment use case."""

from talkback.adapter.api import CommentApiClient
from talkback.application.command import VoteCommentCommand
from talkback.application.state import RenderRequest, SessionState
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.error import ValidationError
from talkback.domain.service import ReconcilerService


class VoteCommentUseCase(BaseUseCase):
    """Use case for upvoting, downvoting or un-voting a comment."""

    def __init__(
        self,
        api: CommentApiClient,
        reconciler: ReconcilerService,
        state: SessionState,
    ) -> None:
        """Initialize vote comment use case.

        Args:
            api: Comment backend API client
            reconciler: Reconciler domain service
            state: Session view state
        """
        self.api = api
        self.reconciler = reconciler
        self.state = state

    async def execute(self, request: VoteCommentCommand) -> RenderRequest:
        """Execute vote flow.

        The backend returns only the new score; the stored direction is the
        one the viewer asked for.

        Args:
            request: Vote command

        Returns:
            Card render request for the voted comment

        Raises:
            ValidationError: If the viewer isn't authenticated
            ApiError: If the backend rejects the vote
        """
        # Only registered users can vote
        if self.state.principal is None:
            raise ValidationError("You must be logged in to vote")

        response = await self.api.vote_comment(request.comment_id, request.direction)
        self.reconciler.apply_vote(request.comment_id, response.score, request.direction)
        return RenderRequest.card(request.comment_id)
