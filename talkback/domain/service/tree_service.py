"""Comment tree domain service."""

from dataclasses import dataclass, field
from typing import Optional

import logfire

from talkback.domain.model import Comment
from talkback.domain.repository import CommentRepository
from talkback.domain.value import CommentId

from .base import Service
from .card_service import CardContext, CardService, CardState
from .sort_service import SortService


@dataclass
class CommentNode:
    """Node in the rendered comment tree.

    Holds a comment, its derived card state and its sorted replies.
    """

    comment: Comment
    card: CardState
    children: list["CommentNode"] = field(default_factory=list)


class TreeService(Service):
    """Domain service building the display tree from the comment store."""

    def __init__(self, sort_service: SortService, card_service: CardService) -> None:
        """Initialize tree service.

        Args:
            sort_service: Bucket ordering service
            card_service: Card state service
        """
        self.sort_service = sort_service
        self.card_service = card_service

    def build(self, store: CommentRepository, ctx: CardContext) -> list[CommentNode]:
        """Build the comment forest in display order.

        Algorithm:
        1. Start from the root bucket
        2. Append buckets whose parent is unknown to the store (orphans), so
           replies to stale or missing parents still render at root level
        3. Sort every bucket and recurse into each comment's own bucket

        Args:
            store: Comment store
            ctx: Viewer and page context

        Returns:
            List of root nodes with children populated recursively
        """
        with logfire.span("tree_service.build", sort=ctx.sort.value):
            roots = store.bucket(None)
            for key in store.parent_keys():
                if key is not None and not store.contains(key):
                    roots = roots + store.bucket(key)

            nodes = self._build_level(store, ctx, roots, 0)
            logfire.debug("Comment tree built", root_count=len(nodes), total=len(store))
            return nodes

    def build_node(
        self, store: CommentRepository, ctx: CardContext, comment_id: CommentId
    ) -> Optional[CommentNode]:
        """Build the subtree of a single comment, for a targeted card update.

        Args:
            store: Comment store
            ctx: Viewer and page context
            comment_id: ID of the comment

        Returns:
            The node, or None if the comment isn't stored
        """
        comment = store.find_by_id(comment_id)
        if comment is None:
            return None
        return self._build_subtree(store, ctx, comment, self._level_of(store, comment))

    def _build_level(
        self,
        store: CommentRepository,
        ctx: CardContext,
        comments: list[Comment],
        level: int,
    ) -> list[CommentNode]:
        nodes = []
        for comment in self.sort_service.sort(comments, ctx.sort):
            node = self._build_subtree(store, ctx, comment, level)
            # Hidden deleted comments only disappear when nothing hangs off them
            if ctx.hide_deleted and comment.is_deleted and not node.children:
                continue
            nodes.append(node)
        return nodes

    def _build_subtree(
        self, store: CommentRepository, ctx: CardContext, comment: Comment, level: int
    ) -> CommentNode:
        children = self._build_level(store, ctx, store.bucket(comment.id), level + 1)
        card = self.card_service.card_state(
            comment, ctx, level=level, has_children=bool(children)
        )
        return CommentNode(comment=comment, card=card, children=children)

    @staticmethod
    def _level_of(store: CommentRepository, comment: Comment) -> int:
        level = 0
        seen: set[CommentId] = {comment.id}
        parent_id = comment.parent_id
        while parent_id is not None and parent_id not in seen:
            parent = store.find_by_id(parent_id)
            if parent is None:
                break
            seen.add(parent_id)
            level += 1
            parent_id = parent.parent_id
        return level
