"""Page information snapshot."""

from pydantic import Field

from talkback.domain.model.common import DomainModel
from talkback.domain.value import CommentSort, DomainId, PageId


class PageInfo(DomainModel):
    """Per-page configuration as returned by the backend.

    Treated as immutable for one render cycle and replaced wholesale on
    every reload.
    """

    domain_id: DomainId
    domain_name: str = ""
    page_id: PageId
    is_domain_readonly: bool = False
    is_page_readonly: bool = False
    auth_anonymous: bool = False
    auth_local: bool = True
    auth_sso: bool = False
    sso_url: str = ""
    default_sort: CommentSort = CommentSort.SCORE_DESC
    idps: list[str] = Field(default_factory=list)

    # Markdown feature toggles
    markdown_images: bool = True
    markdown_links: bool = True
    markdown_tables: bool = True

    @property
    def is_readonly(self) -> bool:
        """Whether new comments are disallowed on the page."""
        return self.is_domain_readonly or self.is_page_readonly
