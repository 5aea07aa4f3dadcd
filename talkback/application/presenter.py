"""Presenter: turns render requests into renderer calls."""

import logfire

from talkback.application.state import RenderKind, RenderRequest, SessionState
from talkback.config import EmbedSettings
from talkback.domain.repository import CommentRepository
from talkback.domain.service import TreeService
from talkback.domain.value import Message
from talkback.interface.render import Renderer


class Presenter:
    """Builds the display tree from the store and hands it to the renderer."""

    def __init__(
        self,
        tree_service: TreeService,
        store: CommentRepository,
        state: SessionState,
        renderer: Renderer,
        embed: EmbedSettings,
    ) -> None:
        """Initialize presenter.

        Args:
            tree_service: Tree building domain service
            store: Comment store
            state: Session view state
            renderer: Output renderer
            embed: Widget settings (nesting, voting, deleted comments)
        """
        self.tree_service = tree_service
        self.store = store
        self.state = state
        self.renderer = renderer
        self.embed = embed

    def present(self, request: RenderRequest) -> None:
        """Render whatever the request asks for.

        Nothing is rendered before the page has been loaded. A card update
        for a comment that isn't in the store is dropped.
        """
        if request.kind == RenderKind.NONE:
            return

        ctx = self.state.card_context(self.embed)
        if ctx is None:
            return

        if request.kind == RenderKind.TREE or request.comment_id is None:
            self.renderer.render_tree(self.tree_service.build(self.store, ctx))
            return

        node = self.tree_service.build_node(self.store, ctx, request.comment_id)
        if node is None:
            logfire.debug(
                "Card update for unknown comment", comment_id=str(request.comment_id)
            )
            return
        self.renderer.update_card(node)

    def show_message(self, message: Message | None) -> None:
        self.renderer.show_message(message)
