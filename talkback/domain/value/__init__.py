"""Domain value objects for the comment tree."""

from talkback.domain.value.identifiers import (
    ANONYMOUS_ID,
    CommentId,
    DomainId,
    PageId,
    UserId,
)
from talkback.domain.value.types import (
    CardEvent,
    CommentSort,
    CommentState,
    LiveAction,
    Message,
    MessageSeverity,
    PageContext,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "ANONYMOUS_ID",
    "CommentId",
    "DomainId",
    "PageId",
    "UserId",
    # Types
    "CardEvent",
    "CommentSort",
    "CommentState",
    "LiveAction",
    "Message",
    "MessageSeverity",
    "PageContext",
    "VoteDirection",
]
