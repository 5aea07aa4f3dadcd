"""Domain value objects for the comment tree.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from pydantic import field_validator

from talkback.domain.value.common import ValueObject


class CommentSort(str, Enum):
    """Comment sorting.

    The first letter defines the property (time or score), the second one the
    direction (ascending or descending).
    """

    TIME_ASC = "ta"
    TIME_DESC = "td"
    SCORE_ASC = "sa"
    SCORE_DESC = "sd"


class VoteDirection(IntEnum):
    """Direction of the viewer's vote on a comment."""

    DOWN = -1
    NONE = 0
    UP = 1


class CommentState(str, Enum):
    """Moderation/visibility state of a comment card."""

    NORMAL = "normal"
    PENDING = "pending"
    REJECTED = "rejected"
    DELETED = "deleted"


class LiveAction(str, Enum):
    """Action carried by a live update message."""

    NEW = "new"
    UPDATE = "update"
    DELETE = "delete"


class MessageSeverity(str, Enum):
    """Severity of a user-visible message."""

    OK = "ok"
    ERROR = "error"


class PageContext(ValueObject):
    """The (host, path) pair identifying the page comments are shown on."""

    host: str
    path: str

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate host is not empty."""
        if not v:
            raise ValueError("Host must not be empty")
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate path is absolute."""
        if not v.startswith("/"):
            raise ValueError("Path must start with '/'")
        return v


class Message(ValueObject):
    """Dismissible message shown above the comments."""

    severity: MessageSeverity
    text: str
    details: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == MessageSeverity.ERROR

    @classmethod
    def ok(cls, text: str) -> "Message":
        return cls(severity=MessageSeverity.OK, text=text)

    @classmethod
    def error(cls, text: str, details: str | None = None) -> "Message":
        return cls(severity=MessageSeverity.ERROR, text=text, details=details)


class CardEvent(str, Enum):
    """Client-driven event changing a comment's moderation state."""

    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"
