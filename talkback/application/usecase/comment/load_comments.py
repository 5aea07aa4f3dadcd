"""Load comments use case."""

import logfire

from talkback.adapter.api import CommentApiClient
from talkback.application.command import ReloadCommand
from talkback.application.state import RenderRequest, SessionState
from talkback.application.usecase.base import BaseUseCase
from talkback.domain.repository import CommentRepository


class LoadCommentsUseCase(BaseUseCase):
    """Use case for (re)loading all comments of the session's page."""

    def __init__(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        state: SessionState,
    ) -> None:
        """Initialize load comments use case.

        Args:
            api: Comment backend API client
            store: Comment store
            state: Session view state
        """
        self.api = api
        self.store = store
        self.state = state

    async def execute(self, request: ReloadCommand | None = None) -> RenderRequest:
        """Execute load flow.

        Steps:
        1. Take a reload token
        2. Fetch the viewer and the page's comments
        3. Unless a newer reload started meanwhile, replace the store contents,
           the commenters map and the page info, and reset the sort to the
           page default

        Args:
            request: Reload command (carries no data)

        Returns:
            Full tree render request, or a no-op one for a superseded reload

        Raises:
            ApiError: If the backend can't be reached
        """
        page = self.state.page
        token = self.state.begin_reload()

        with logfire.span("load_comments", host=page.host, path=page.path):
            principal = await self.api.fetch_principal()
            response = await self.api.fetch_comments(page.host, page.path)

            if not self.state.is_current(token):
                logfire.info("Superseded reload discarded", token=token)
                return RenderRequest.none()

            self.store.load(response.comments)
            self.state.principal = principal
            self.state.page_info = response.page_info
            self.state.sort = response.page_info.default_sort
            self.state.commenters.clear()
            self.state.register_commenters(response.commenters)

            logfire.info(
                "Comments loaded",
                comment_count=len(self.store),
                commenter_count=len(self.state.commenters),
                authenticated=principal is not None,
            )
            return RenderRequest.tree()
