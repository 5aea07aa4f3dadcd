"""Reconciler domain service.

Merges the result of a confirmed mutation (a successful API response or a
live update) back into the comment store. Nothing is applied before the
server has confirmed it, and every merge is either a duplicate-suppressing
insert or a by-ID replacement, so applying the same result twice, or
results in any order, converges to the same store contents.
"""

from typing import Any, Optional

import logfire

from talkback.domain.model import Comment
from talkback.domain.repository import CommentRepository
from talkback.domain.value import CardEvent, CommentId, VoteDirection

from .base import Service
from .card_service import CardService

# Fields that are local to the viewer and never taken from a server comment
_LOCAL_FIELDS = frozenset({"id", "parent_id", "direction"})


class ReconcilerService(Service):
    """Domain service applying confirmed mutations to the store."""

    def __init__(self, store: CommentRepository, card_service: CardService) -> None:
        """Initialize reconciler service.

        Args:
            store: Comment store
            card_service: Card state service (moderation transitions)
        """
        self.store = store
        self.card_service = card_service

    def apply_created(self, comment: Comment) -> bool:
        """Add a newly created comment.

        Args:
            comment: Comment as returned by the server

        Returns:
            True if added, False if it was already known
        """
        with logfire.span("reconciler.apply_created", comment_id=str(comment.id)):
            added = self.store.insert(comment)
            logfire.info(
                "Comment added" if added else "Comment already known",
                comment_id=str(comment.id),
                parent_id=str(comment.parent_id) if comment.parent_id else None,
            )
            return added

    def apply_server_comment(self, comment: Comment) -> Optional[Comment]:
        """Overwrite a stored comment with server-side fields.

        The viewer's vote direction is preserved: the server copy of a
        comment doesn't always carry it.

        Args:
            comment: Comment as returned by the server

        Returns:
            Updated comment, or None if the comment isn't stored
        """
        overrides = {
            name: getattr(comment, name)
            for name in type(comment).model_fields
            if name not in _LOCAL_FIELDS
        }
        return self.replace(comment.id, overrides)

    def apply_vote(
        self, comment_id: CommentId, score: int, direction: VoteDirection
    ) -> Optional[Comment]:
        """Apply a confirmed vote.

        The server returns only the new aggregate score; the direction comes
        from the viewer's request.

        Args:
            comment_id: Comment ID
            score: Server-confirmed score
            direction: Direction the viewer voted in

        Returns:
            Updated comment, or None if the comment isn't stored
        """
        return self.replace(comment_id, {"score": score, "direction": direction})

    def apply_moderation(self, comment_id: CommentId, approve: bool) -> Optional[Comment]:
        """Apply a confirmed approve/reject decision.

        Args:
            comment_id: Comment ID
            approve: True to approve, False to reject

        Returns:
            Updated (or unchanged) comment, or None if the comment isn't stored
        """
        event = CardEvent.APPROVE if approve else CardEvent.REJECT
        return self._apply_event(comment_id, event)

    def apply_sticky(self, comment_id: CommentId, sticky: bool) -> Optional[Comment]:
        """Apply a confirmed sticky toggle."""
        return self.replace(comment_id, {"is_sticky": sticky})

    def apply_deletion(self, comment_id: CommentId) -> Optional[Comment]:
        """Turn a comment into a tombstone; its replies stay addressable."""
        return self._apply_event(comment_id, CardEvent.DELETE)

    def replace(self, comment_id: CommentId, overrides: dict[str, Any]) -> Optional[Comment]:
        """Replace a stored comment, logging misses.

        Args:
            comment_id: Comment ID
            overrides: Fields to merge

        Returns:
            Updated comment, or None if the comment isn't stored
        """
        updated = self.store.replace_by_id(comment_id, overrides)
        if updated is None:
            # Usually a result arriving after a reload superseded the data
            logfire.debug(
                "Reconciliation target not found",
                comment_id=str(comment_id),
                fields=sorted(overrides),
            )
        else:
            logfire.info(
                "Comment reconciled",
                comment_id=str(comment_id),
                fields=sorted(overrides),
            )
        return updated

    def _apply_event(self, comment_id: CommentId, event: CardEvent) -> Optional[Comment]:
        current = self.store.find_by_id(comment_id)
        if current is None:
            logfire.debug(
                "Reconciliation target not found",
                comment_id=str(comment_id),
                event=event.value,
            )
            return None

        overrides = self.card_service.transition(current, event)
        if not overrides:
            return current
        return self.replace(comment_id, overrides)
