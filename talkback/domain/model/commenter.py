"""Commenter entity (author projection of a user)."""

from typing import Optional

from pydantic import Field

from talkback.domain.model.common import DomainModel
from talkback.domain.value import ANONYMOUS_ID, UserId

DELETED_USER_NAME = "[Deleted User]"
ANONYMOUS_USER_NAME = "Anonymous"


class Commenter(DomainModel):
    """Read-only projection of a comment's author."""

    id: UserId
    name: str = ""
    website_url: Optional[str] = None
    colour_index: int = Field(default=0, ge=0)
    is_moderator: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.id == ANONYMOUS_ID

    @property
    def display_name(self) -> str:
        if self.is_anonymous:
            return ANONYMOUS_USER_NAME
        return self.name
