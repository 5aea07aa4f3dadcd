"""Comment backend API adapter."""

from .client import CommentApiClient, MockCommentApiClient, RealCommentApiClient
from .models import (
    CommentListResponse,
    CommentNewResponse,
    CommentUpdateResponse,
    CommentVoteResponse,
    LiveMessage,
    LiveSubscription,
)

__all__ = [
    "CommentApiClient",
    "CommentListResponse",
    "CommentNewResponse",
    "CommentUpdateResponse",
    "CommentVoteResponse",
    "LiveMessage",
    "LiveSubscription",
    "MockCommentApiClient",
    "RealCommentApiClient",
]
