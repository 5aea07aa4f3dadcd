"""Wire models of the comment backend API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from talkback.domain.model import Comment, Commenter, PageInfo
from talkback.domain.value import LiveAction


class ApiModel(BaseModel):
    """Base for request/response bodies (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(ApiModel):
    """Error body returned with a non-2xx status."""

    id: Optional[str] = None
    message: Optional[str] = None
    details: Optional[str] = None


class CommentListRequest(ApiModel):
    host: str
    path: str


class CommentListResponse(ApiModel):
    """Comments of a page along with their authors and the page settings."""

    comments: list[Comment] = Field(default_factory=list)
    commenters: list[Commenter] = Field(default_factory=list)
    page_info: PageInfo


class CommentNewRequest(ApiModel):
    host: str
    path: str
    parent_id: Optional[str] = None
    markdown: str
    anonymous: bool = False


class CommentNewResponse(ApiModel):
    """Newly created comment and its author."""

    comment: Comment
    commenter: Optional[Commenter] = None


class CommentUpdateRequest(ApiModel):
    markdown: str


class CommentUpdateResponse(ApiModel):
    comment: Comment


class CommentVoteRequest(ApiModel):
    direction: int


class CommentVoteResponse(ApiModel):
    """Aggregate score after a vote."""

    score: int


class CommentModerateRequest(ApiModel):
    approve: bool


class CommentStickyRequest(ApiModel):
    sticky: bool


class PageUpdateRequest(ApiModel):
    page_id: str
    is_readonly: bool


class LiveSubscription(ApiModel):
    """Subscription sent once a live connection is open."""

    domain: str
    path: str


class LiveMessage(ApiModel):
    """Inbound live update notification.

    Carries IDs only; the comment data itself is refetched. Every field is
    optional on the wire.
    """

    domain: Optional[str] = None
    path: Optional[str] = None
    comment: Optional[str] = None
    parent_comment: Optional[str] = None
    action: Optional[str] = None

    @property
    def live_action(self) -> Optional[LiveAction]:
        """Parsed action, None if missing or unknown."""
        try:
            return LiveAction(self.action)
        except ValueError:
            return None
