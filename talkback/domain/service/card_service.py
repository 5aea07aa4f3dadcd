"""Card state domain service.

Derives the per-comment visual/interaction state from stored comment data,
the viewer identity and page configuration, and implements the moderation
state machine:

    NORMAL   --reject-->  REJECTED
    PENDING  --approve--> NORMAL
    PENDING  --reject-->  REJECTED
    REJECTED --approve--> NORMAL
    any      --delete-->  DELETED (terminal)

PENDING can only come from the server; no client event leads into it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from talkback.domain.model import Comment, Commenter, PageInfo, Principal
from talkback.domain.model.commenter import DELETED_USER_NAME
from talkback.domain.value import (
    CardEvent,
    CommentId,
    CommentSort,
    CommentState,
    UserId,
    VoteDirection,
)
from talkback.util.time import time_ago

from .base import Service

PENDING_NOTICE = "This comment is awaiting moderator approval."
REJECTED_NOTICE = "This comment was flagged as spam."
DELETED_BODY = "(deleted)"
DELETED_TEXT = "[deleted]"

_TRANSITIONS: dict[tuple[CommentState, CardEvent], CommentState] = {
    (CommentState.NORMAL, CardEvent.APPROVE): CommentState.NORMAL,
    (CommentState.NORMAL, CardEvent.REJECT): CommentState.REJECTED,
    (CommentState.PENDING, CardEvent.APPROVE): CommentState.NORMAL,
    (CommentState.PENDING, CardEvent.REJECT): CommentState.REJECTED,
    (CommentState.REJECTED, CardEvent.APPROVE): CommentState.NORMAL,
    (CommentState.REJECTED, CardEvent.REJECT): CommentState.REJECTED,
}

_STATE_FIELDS: dict[CommentState, dict[str, Any]] = {
    CommentState.NORMAL: {"is_pending": False, "is_approved": True},
    CommentState.REJECTED: {"is_pending": False, "is_approved": False},
    CommentState.DELETED: {
        "is_deleted": True,
        "markdown": DELETED_TEXT,
        "html": DELETED_TEXT,
    },
}


@dataclass(frozen=True)
class CardContext:
    """Everything a card needs to know besides its own comment.

    Replaces an ad hoc bag of callbacks: cards only carry derived state,
    user interactions go through commands.
    """

    principal: Optional[Principal]
    page_info: PageInfo
    commenters: Mapping[UserId, Commenter]
    sort: CommentSort
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    max_level: int = 10
    enable_voting: bool = True
    hide_deleted: bool = False
    collapsed: frozenset[CommentId] = frozenset()


@dataclass(frozen=True)
class CardState:
    """Derived visual/interaction state of a single comment card."""

    comment_id: CommentId
    state: CommentState
    level: int
    author_name: str
    author_url: Optional[str]
    colour: str
    is_author_moderator: bool
    body: str
    time_ago: str
    score: int
    upvoted: bool
    downvoted: bool
    can_vote: bool
    can_reply: bool
    can_edit: bool
    can_delete: bool
    can_moderate: bool
    show_sticky: bool
    can_toggle_sticky: bool
    is_sticky: bool
    moderation_notice: Optional[str]
    unnest: bool
    collapsed: bool
    has_children: bool


class CardService(Service):
    """Domain service deriving card state and moderation transitions."""

    def state_of(self, comment: Comment) -> CommentState:
        """Return the single state applying to a comment.

        Deleted overrides everything else.
        """
        if comment.is_deleted:
            return CommentState.DELETED
        if comment.is_pending:
            return CommentState.PENDING
        if not comment.is_approved:
            return CommentState.REJECTED
        return CommentState.NORMAL

    def next_state(self, comment: Comment, event: CardEvent) -> CommentState:
        """Return the state a comment moves to on the given event."""
        current = self.state_of(comment)
        if current == CommentState.DELETED or event == CardEvent.DELETE:
            return CommentState.DELETED
        return _TRANSITIONS[(current, event)]

    def transition(self, comment: Comment, event: CardEvent) -> dict[str, Any]:
        """Return the field overrides implementing a state transition.

        Args:
            comment: Current comment
            event: Client-driven event

        Returns:
            Overrides to merge into the stored comment; empty for a no-op
        """
        target = self.next_state(comment, event)
        if target == self.state_of(comment):
            return {}
        return dict(_STATE_FIELDS[target])

    def card_state(
        self,
        comment: Comment,
        ctx: CardContext,
        level: int = 0,
        has_children: bool = False,
    ) -> CardState:
        """Derive the card state of a comment.

        Args:
            comment: The comment to render
            ctx: Viewer and page context
            level: Nesting level (0 for root comments)
            has_children: Whether the comment has replies

        Returns:
            Card state
        """
        state = self.state_of(comment)
        deleted = state == CommentState.DELETED
        commenter = ctx.commenters.get(comment.author_id) if comment.author_id else None
        principal = ctx.principal
        is_moderator = principal is not None and principal.can_moderate
        own_comment = principal is not None and comment.author_id == principal.id

        # Author appearance; a missing commenter means the account was deleted
        if commenter is None:
            author_name, author_url, colour = DELETED_USER_NAME, None, "deleted"
            author_is_moderator = False
        else:
            author_name = commenter.display_name
            author_url = commenter.website_url or None
            colour = "anonymous" if commenter.is_anonymous else str(commenter.colour_index)
            author_is_moderator = commenter.is_moderator

        # Sticky toggle: root comments only, interactive for moderators,
        # shown as a read-only badge to everyone else when set
        show_sticky = comment.is_root and not deleted and (comment.is_sticky or is_moderator)

        notice = None
        if state == CommentState.PENDING:
            notice = PENDING_NOTICE
        elif state == CommentState.REJECTED:
            notice = REJECTED_NOTICE

        return CardState(
            comment_id=comment.id,
            state=state,
            level=level,
            author_name=author_name,
            author_url=author_url,
            colour=colour,
            is_author_moderator=author_is_moderator,
            body=DELETED_BODY if deleted else comment.html,
            time_ago=time_ago(ctx.now, comment.created_at),
            score=comment.score,
            upvoted=comment.direction == VoteDirection.UP,
            downvoted=comment.direction == VoteDirection.DOWN,
            can_vote=ctx.enable_voting and not deleted and not own_comment,
            can_reply=not deleted and not ctx.page_info.is_readonly,
            can_edit=not deleted and (is_moderator or own_comment),
            can_delete=not deleted and (is_moderator or own_comment),
            can_moderate=state == CommentState.PENDING and is_moderator,
            show_sticky=show_sticky,
            can_toggle_sticky=show_sticky and is_moderator,
            is_sticky=comment.is_root and comment.is_sticky,
            moderation_notice=notice,
            unnest=level >= ctx.max_level,
            collapsed=comment.id in ctx.collapsed,
            has_children=has_children,
        )
