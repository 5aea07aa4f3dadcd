"""Strongly typed identifiers for comment-tree entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
UserId = NewType("UserId", UUID)
DomainId = NewType("DomainId", UUID)
PageId = NewType("PageId", UUID)

# The anonymous user is represented by the nil UUID
ANONYMOUS_ID = UserId(UUID("00000000-0000-0000-0000-000000000000"))
