"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional
from uuid import uuid4

from talkback.adapter.api import CommentApiClient
from talkback.application.usecase.comment import LoadCommentsUseCase
from talkback.domain.model import Comment, Commenter, PageInfo, Principal
from talkback.domain.value import CommentId, DomainId, PageId, UserId

# Fixed reference time so "time ago" renderings are deterministic
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    parent: Optional[Comment] = None,
    minutes_ago: int = 0,
    **overrides: Any,
) -> Comment:
    """Helper function to build a test comment.

    Args:
        parent: Parent comment, None for a root comment
        minutes_ago: Creation time relative to NOW
        **overrides: Any other Comment field

    Returns:
        Comment instance
    """
    fields: dict[str, Any] = {
        "id": CommentId(uuid4()),
        "parent_id": parent.id if parent else None,
        "author_id": UserId(uuid4()),
        "markdown": "Test comment",
        "html": "<p>Test comment</p>",
        "created_at": NOW - timedelta(minutes=minutes_ago),
    }
    fields.update(overrides)
    return Comment(**fields)


def make_commenter(user_id: Optional[UserId] = None, **overrides: Any) -> Commenter:
    """Helper function to build a test commenter."""
    fields: dict[str, Any] = {
        "id": user_id or UserId(uuid4()),
        "name": "Test User",
        "colour_index": 3,
    }
    fields.update(overrides)
    return Commenter(**fields)


def make_page_info(**overrides: Any) -> PageInfo:
    """Helper function to build test page info."""
    fields: dict[str, Any] = {
        "domain_id": DomainId(uuid4()),
        "domain_name": "blog.example.com",
        "page_id": PageId(uuid4()),
    }
    fields.update(overrides)
    return PageInfo(**fields)


def make_principal(user_id: Optional[UserId] = None, **overrides: Any) -> Principal:
    """Helper function to build a test viewer."""
    fields: dict[str, Any] = {
        "id": user_id or UserId(uuid4()),
        "name": "Viewer",
        "email": "viewer@example.com",
    }
    fields.update(overrides)
    return Principal(**fields)


async def load_page(
    env: Any,
    comments: Iterable[Comment] = (),
    commenters: Iterable[Commenter] = (),
    principal: Optional[Principal] = None,
    **page_overrides: Any,
) -> None:
    """Seed the mock backend and load the page into the session under test.

    Args:
        env: Request-scoped test container
        comments: Comments stored on the backend
        commenters: Authors known to the backend
        principal: Authenticated viewer, None for an anonymous one
        **page_overrides: PageInfo fields to change
    """
    api = await env.get(CommentApiClient)
    api.seed(list(comments), list(commenters))
    api.principal = principal
    if page_overrides:
        api.page_info = api.page_info.model_copy(update=page_overrides)

    load_comments = await env.get(LoadCommentsUseCase)
    await load_comments.execute()
