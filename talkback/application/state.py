"""Per-session view state.

Everything the widget keeps besides the comment store: the page being shown,
the viewer, the commenters map, the page settings, the chosen sort, which
comments are collapsed and the message shown above the comments. One state
object exists per comment session.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from talkback.config import EmbedSettings
from talkback.domain.model import Commenter, PageInfo, Principal
from talkback.domain.service import CardContext
from talkback.domain.value import CommentId, CommentSort, Message, PageContext, UserId


class RenderKind(str, Enum):
    NONE = "none"
    TREE = "tree"
    CARD = "card"


@dataclass(frozen=True)
class RenderRequest:
    """What has to be re-rendered after a store change."""

    kind: RenderKind
    comment_id: Optional[CommentId] = None

    @classmethod
    def none(cls) -> "RenderRequest":
        return cls(RenderKind.NONE)

    @classmethod
    def tree(cls) -> "RenderRequest":
        return cls(RenderKind.TREE)

    @classmethod
    def card(cls, comment_id: CommentId) -> "RenderRequest":
        return cls(RenderKind.CARD, comment_id)


@dataclass
class SessionState:
    """Mutable view state of a comment session."""

    page: PageContext
    principal: Optional[Principal] = None
    page_info: Optional[PageInfo] = None
    commenters: dict[UserId, Commenter] = field(default_factory=dict)
    sort: CommentSort = CommentSort.SCORE_DESC
    collapsed: set[CommentId] = field(default_factory=set)
    message: Optional[Message] = None
    generation: int = 0

    def begin_reload(self) -> int:
        """Start a reload and return its token.

        Results of an earlier reload finishing after this one are discarded.
        """
        self.generation += 1
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def register_commenters(self, commenters: list[Commenter]) -> None:
        for commenter in commenters:
            self.commenters[commenter.id] = commenter

    def card_context(self, embed: EmbedSettings) -> Optional[CardContext]:
        """Build the card context, or None before the page was loaded."""
        if self.page_info is None:
            return None
        return CardContext(
            principal=self.principal,
            page_info=self.page_info,
            commenters=dict(self.commenters),
            sort=self.sort,
            max_level=embed.max_level,
            enable_voting=embed.enable_voting,
            hide_deleted=embed.hide_deleted,
            collapsed=frozenset(self.collapsed),
        )
