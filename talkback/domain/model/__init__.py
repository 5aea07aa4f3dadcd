"""Domain model entities for the comment tree."""

from talkback.domain.model.comment import Comment
from talkback.domain.model.commenter import Commenter
from talkback.domain.model.page_info import PageInfo
from talkback.domain.model.principal import Principal

__all__ = [
    "Comment",
    "Commenter",
    "PageInfo",
    "Principal",
]
