"""Application layer DI providers."""

from dishka import Scope, provide

from talkback.adapter.api import CommentApiClient
from talkback.adapter.live import LiveConnector
from talkback.application.dispatcher import CommandDispatcher
from talkback.application.presenter import Presenter
from talkback.application.session import CommentSession
from talkback.application.state import SessionState
from talkback.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    LoadCommentsUseCase,
    ModerateCommentUseCase,
    StickyCommentUseCase,
    VoteCommentUseCase,
)
from talkback.application.usecase.live import ApplyLiveUpdateUseCase
from talkback.application.usecase.page import TogglePageReadonlyUseCase
from talkback.config import EmbedSettings, LiveUpdateSettings
from talkback.domain.repository import CommentRepository
from talkback.domain.service import ReconcilerService, TreeService
from talkback.domain.value import PageContext
from talkback.interface.render import Renderer
from talkback.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed.

    Everything here is REQUEST-scoped: a request scope is one comment
    session with its own store and view state.
    """

    scope = Scope.REQUEST

    @provide
    def get_session_state(self, embed: EmbedSettings) -> SessionState:
        """Provide view state for the configured page."""
        return SessionState(page=PageContext(host=embed.host, path=embed.page_path))

    # Comment use cases
    @provide
    def get_load_comments_use_case(
        self, api: CommentApiClient, store: CommentRepository, state: SessionState
    ) -> LoadCommentsUseCase:
        """Provide load comments use case."""
        return LoadCommentsUseCase(api=api, store=store, state=state)

    @provide
    def get_create_comment_use_case(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        reconciler: ReconcilerService,
        state: SessionState,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            api=api, store=store, reconciler=reconciler, state=state
        )

    @provide
    def get_edit_comment_use_case(
        self, api: CommentApiClient, reconciler: ReconcilerService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(api=api, reconciler=reconciler)

    @provide
    def get_vote_comment_use_case(
        self, api: CommentApiClient, reconciler: ReconcilerService, state: SessionState
    ) -> VoteCommentUseCase:
        """Provide vote comment use case."""
        return VoteCommentUseCase(api=api, reconciler=reconciler, state=state)

    @provide
    def get_moderate_comment_use_case(
        self, api: CommentApiClient, reconciler: ReconcilerService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(api=api, reconciler=reconciler)

    @provide
    def get_sticky_comment_use_case(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        reconciler: ReconcilerService,
    ) -> StickyCommentUseCase:
        """Provide sticky comment use case."""
        return StickyCommentUseCase(api=api, store=store, reconciler=reconciler)

    @provide
    def get_delete_comment_use_case(
        self,
        api: CommentApiClient,
        reconciler: ReconcilerService,
        embed: EmbedSettings,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            api=api, reconciler=reconciler, hide_deleted=embed.hide_deleted
        )

    # Page use cases
    @provide
    def get_toggle_page_readonly_use_case(
        self,
        api: CommentApiClient,
        load_comments: LoadCommentsUseCase,
        state: SessionState,
    ) -> TogglePageReadonlyUseCase:
        """Provide toggle page readonly use case."""
        return TogglePageReadonlyUseCase(
            api=api, load_comments=load_comments, state=state
        )

    # Live update use cases
    @provide
    def get_apply_live_update_use_case(
        self,
        api: CommentApiClient,
        store: CommentRepository,
        reconciler: ReconcilerService,
        state: SessionState,
        embed: EmbedSettings,
    ) -> ApplyLiveUpdateUseCase:
        """Provide apply live update use case."""
        return ApplyLiveUpdateUseCase(
            api=api,
            store=store,
            reconciler=reconciler,
            state=state,
            hide_deleted=embed.hide_deleted,
        )

    # Session
    @provide
    def get_presenter(
        self,
        tree_service: TreeService,
        store: CommentRepository,
        state: SessionState,
        renderer: Renderer,
        embed: EmbedSettings,
    ) -> Presenter:
        """Provide presenter."""
        return Presenter(
            tree_service=tree_service,
            store=store,
            state=state,
            renderer=renderer,
            embed=embed,
        )

    @provide
    def get_command_dispatcher(
        self,
        state: SessionState,
        presenter: Presenter,
        load_comments: LoadCommentsUseCase,
        create_comment: CreateCommentUseCase,
        edit_comment: EditCommentUseCase,
        vote_comment: VoteCommentUseCase,
        moderate_comment: ModerateCommentUseCase,
        sticky_comment: StickyCommentUseCase,
        delete_comment: DeleteCommentUseCase,
        toggle_page_readonly: TogglePageReadonlyUseCase,
    ) -> CommandDispatcher:
        """Provide command dispatcher."""
        return CommandDispatcher(
            state=state,
            presenter=presenter,
            load_comments=load_comments,
            create_comment=create_comment,
            edit_comment=edit_comment,
            vote_comment=vote_comment,
            moderate_comment=moderate_comment,
            sticky_comment=sticky_comment,
            delete_comment=delete_comment,
            toggle_page_readonly=toggle_page_readonly,
        )

    @provide
    def get_comment_session(
        self,
        state: SessionState,
        dispatcher: CommandDispatcher,
        presenter: Presenter,
        apply_live_update: ApplyLiveUpdateUseCase,
        connector: LiveConnector,
        live_settings: LiveUpdateSettings,
    ) -> CommentSession:
        """Provide comment session."""
        return CommentSession(
            state=state,
            dispatcher=dispatcher,
            presenter=presenter,
            apply_live_update=apply_live_update,
            connector=connector,
            live_settings=live_settings,
        )
