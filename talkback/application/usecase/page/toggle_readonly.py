"""Toggle page readonly use case."""

import logfire

from talkback.adapter.api import CommentApiClient
from talkback.application.command import TogglePageReadonlyCommand
from talkback.application.state import RenderRequest, SessionState
from talkback.application.usecase.base import BaseUseCase
from talkback.application.usecase.comment import LoadCommentsUseCase
from talkback.domain.error import ValidationError


class TogglePageReadonlyUseCase(BaseUseCase):
    """Use case for locking or unlocking a page for new comments."""

    def __init__(
        self,
        api: CommentApiClient,
        load_comments: LoadCommentsUseCase,
        state: SessionState,
    ) -> None:
        """Initialize toggle readonly use case.

        Args:
            api: Comment backend API client
            load_comments: Use case reloading the page afterwards
            state: Session view state
        """
        self.api = api
        self.load_comments = load_comments
        self.state = state

    async def execute(self, request: TogglePageReadonlyCommand) -> RenderRequest:
        """Flip the page's readonly status and reload the page.

        Raises:
            ValidationError: If the page hasn't been loaded yet
            ApiError: If the backend rejects the change
        """
        page_info = self.state.page_info
        if page_info is None:
            raise ValidationError("Page is not loaded")

        readonly = not page_info.is_page_readonly
        await self.api.update_page(page_info.page_id, readonly)
        logfire.info(
            "Page readonly status changed",
            page_id=str(page_info.page_id),
            readonly=readonly,
        )

        # The readonly flag affects every card, so reload from the backend
        return await self.load_comments.execute()
