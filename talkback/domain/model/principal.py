"""Principal: the currently authenticated viewer."""

from typing import Optional

from talkback.domain.model.common import DomainModel
from talkback.domain.value import UserId


class Principal(DomainModel):
    """Authenticated user viewing the comments.

    An unauthenticated viewer is represented by the absence of a principal.
    """

    id: UserId
    name: str
    email: Optional[str] = None
    website_url: Optional[str] = None
    is_moderator: bool = False
    is_owner: bool = False
    is_superuser: bool = False
    is_commenter: bool = True

    @property
    def can_moderate(self) -> bool:
        """Whether the principal has moderator capability on the domain."""
        return self.is_superuser or self.is_owner or self.is_moderator
