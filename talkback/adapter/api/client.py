"""Comment backend API client implementation.

Wraps the embed endpoints used by the comment widget. Every call either
returns the parsed response or raises ApiError; nothing is retried.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

import httpx
import logfire
from pydantic import BaseModel

from talkback.adapter.api.models import (
    CommentListRequest,
    CommentListResponse,
    CommentModerateRequest,
    CommentNewRequest,
    CommentNewResponse,
    CommentStickyRequest,
    CommentUpdateRequest,
    CommentUpdateResponse,
    CommentVoteRequest,
    CommentVoteResponse,
    ErrorResponse,
    PageUpdateRequest,
)
from talkback.adapter.error import ApiError
from talkback.domain.model import Comment, Commenter, PageInfo, Principal
from talkback.domain.value import (
    ANONYMOUS_ID,
    CommentId,
    DomainId,
    PageId,
    UserId,
    VoteDirection,
)


class CommentApiClient(ABC):
    """Comment backend API.

    Provides type distinction for dependency injection.
    """

    @abstractmethod
    async def fetch_principal(self) -> Optional[Principal]:
        """Return the authenticated viewer, or None for an anonymous one."""
        pass

    @abstractmethod
    async def fetch_comments(self, host: str, path: str) -> CommentListResponse:
        """Fetch all comments of a page along with their authors and page info."""
        pass

    @abstractmethod
    async def create_comment(
        self,
        host: str,
        path: str,
        parent_id: Optional[CommentId],
        markdown: str,
        anonymous: bool = False,
    ) -> CommentNewResponse:
        """Submit a new comment or reply."""
        pass

    @abstractmethod
    async def edit_comment(
        self, comment_id: CommentId, markdown: str
    ) -> CommentUpdateResponse:
        """Update the text of a comment."""
        pass

    @abstractmethod
    async def vote_comment(
        self, comment_id: CommentId, direction: VoteDirection
    ) -> CommentVoteResponse:
        """Vote for a comment (-1, 0 to undo, or 1)."""
        pass

    @abstractmethod
    async def moderate_comment(self, comment_id: CommentId, approve: bool) -> None:
        """Approve or reject a comment."""
        pass

    @abstractmethod
    async def set_sticky(self, comment_id: CommentId, sticky: bool) -> None:
        """Set or clear the sticky flag of a root comment."""
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        pass

    @abstractmethod
    async def update_page(self, page_id: PageId, readonly: bool) -> None:
        """Change the readonly status of a page."""
        pass


class RealCommentApiClient(CommentApiClient):
    """Comment API client talking to the backend over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Base URL of the API, including the /api prefix
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def fetch_principal(self) -> Optional[Principal]:
        try:
            principal = await self._request(
                "GET", "/embed/auth/user", response_model=Principal
            )
        except ApiError as e:
            if e.status == 401:
                return None
            raise
        return principal

    async def fetch_comments(self, host: str, path: str) -> CommentListResponse:
        with logfire.span("api.fetch_comments", host=host, path=path):
            response = await self._request(
                "POST",
                "/embed/comments",
                CommentListRequest(host=host, path=path),
                response_model=CommentListResponse,
            )
            logfire.info(
                "Comments fetched",
                host=host,
                path=path,
                comment_count=len(response.comments),
                commenter_count=len(response.commenters),
            )
            return response

    async def create_comment(
        self,
        host: str,
        path: str,
        parent_id: Optional[CommentId],
        markdown: str,
        anonymous: bool = False,
    ) -> CommentNewResponse:
        body = CommentNewRequest(
            host=host,
            path=path,
            parent_id=str(parent_id) if parent_id else None,
            markdown=markdown,
            anonymous=anonymous,
        )
        return await self._request(
            "PUT", "/embed/comments", body, response_model=CommentNewResponse
        )

    async def edit_comment(
        self, comment_id: CommentId, markdown: str
    ) -> CommentUpdateResponse:
        return await self._request(
            "PUT",
            f"/embed/comments/{comment_id}",
            CommentUpdateRequest(markdown=markdown),
            response_model=CommentUpdateResponse,
        )

    async def vote_comment(
        self, comment_id: CommentId, direction: VoteDirection
    ) -> CommentVoteResponse:
        return await self._request(
            "POST",
            f"/embed/comments/{comment_id}/vote",
            CommentVoteRequest(direction=int(direction)),
            response_model=CommentVoteResponse,
        )

    async def moderate_comment(self, comment_id: CommentId, approve: bool) -> None:
        await self._request(
            "POST",
            f"/embed/comments/{comment_id}/moderate",
            CommentModerateRequest(approve=approve),
        )

    async def set_sticky(self, comment_id: CommentId, sticky: bool) -> None:
        await self._request(
            "POST",
            f"/embed/comments/{comment_id}/sticky",
            CommentStickyRequest(sticky=sticky),
        )

    async def delete_comment(self, comment_id: CommentId) -> None:
        await self._request("DELETE", f"/embed/comments/{comment_id}")

    async def update_page(self, page_id: PageId, readonly: bool) -> None:
        await self._request(
            "PUT",
            "/embed/page",
            PageUpdateRequest(page_id=str(page_id), is_readonly=readonly),
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        )

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        response_model: Optional[type[BaseModel]] = None,
    ) -> Any:
        """Perform a request and decode its JSON response.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            body: Optional request model, sent as camelCase JSON
            response_model: Model the response body is validated into

        Returns:
            Validated response model (decoded JSON if no model is given),
            or None for an empty response

        Raises:
            ApiError: On a transport error, a non-2xx status or a response
                body that can't be decoded
        """
        payload = body.model_dump(mode="json", by_alias=True) if body is not None else None
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            logfire.error("Comment API HTTP error", method=method, path=path, error=str(e))
            raise ApiError(0, "Failed to reach the server", str(e))

        if response.is_error:
            raise self._error(method, path, response)

        if not response.content:
            return None
        try:
            data = response.json()
            if response_model is None or data is None:
                return data
            return response_model.model_validate(data)
        except ValueError as e:
            # Covers both JSONDecodeError and pydantic's ValidationError
            logfire.error(
                "Comment API returned an invalid response",
                method=method,
                path=path,
                status_code=response.status_code,
                error=str(e),
            )
            raise ApiError(
                response.status_code, "Invalid response from the server", str(e)
            )

    @staticmethod
    def _error(method: str, path: str, response: httpx.Response) -> ApiError:
        try:
            error = ErrorResponse.model_validate(response.json())
        except ValueError:
            error = ErrorResponse(message=response.text or None)

        message = error.message or response.reason_phrase or "Request failed"
        logfire.error(
            "Comment API request failed",
            method=method,
            path=path,
            status_code=response.status_code,
            error=message,
        )
        return ApiError(response.status_code, message, error.details)


class MockCommentApiClient(CommentApiClient):
    """In-memory comment backend for testing.

    Keeps the comments of a single page and applies mutations the way the
    backend does. A failure can be queued with fail_next() to make the next
    call raise.
    """

    def __init__(
        self,
        page_info: Optional[PageInfo] = None,
        principal: Optional[Principal] = None,
        require_approval: bool = False,
    ) -> None:
        """Initialize mock client with an empty page.

        Args:
            page_info: Page settings returned with every comment list
            principal: Authenticated viewer, None for an anonymous one
            require_approval: Whether new comments await moderation
        """
        self.page_info = page_info or PageInfo(
            domain_id=DomainId(uuid4()), domain_name="localhost", page_id=PageId(uuid4())
        )
        self.principal = principal
        self.require_approval = require_approval
        self.comments: dict[CommentId, Comment] = {}
        self.commenters: dict[UserId, Commenter] = {}
        self.votes: dict[CommentId, VoteDirection] = {}
        self.calls: list[tuple[str, tuple]] = []
        self._failure: Optional[ApiError] = None

    def seed(
        self, comments: list[Comment], commenters: Optional[list[Commenter]] = None
    ) -> None:
        """Add comments (and their authors) to the backend state."""
        for comment in comments:
            self.comments[comment.id] = comment
        for commenter in commenters or []:
            self.commenters[commenter.id] = commenter

    def fail_next(self, error: Optional[ApiError] = None) -> None:
        """Make the next call raise the given error (500 by default)."""
        self._failure = error or ApiError(500, "Internal server error")

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self._failure is not None:
            error, self._failure = self._failure, None
            raise error

    def _get(self, comment_id: CommentId) -> Comment:
        comment = self.comments.get(comment_id)
        if comment is None:
            raise ApiError(404, "Comment not found")
        return comment

    async def fetch_principal(self) -> Optional[Principal]:
        self._record("fetch_principal")
        return self.principal

    async def fetch_comments(self, host: str, path: str) -> CommentListResponse:
        self._record("fetch_comments", host, path)
        return CommentListResponse(
            comments=list(self.comments.values()),
            commenters=list(self.commenters.values()),
            page_info=self.page_info,
        )

    async def create_comment(
        self,
        host: str,
        path: str,
        parent_id: Optional[CommentId],
        markdown: str,
        anonymous: bool = False,
    ) -> CommentNewResponse:
        self._record("create_comment", host, path, parent_id, markdown, anonymous)
        if anonymous or self.principal is None:
            author = Commenter(id=ANONYMOUS_ID)
        else:
            author = Commenter(
                id=self.principal.id,
                name=self.principal.name,
                website_url=self.principal.website_url,
                is_moderator=self.principal.can_moderate,
            )
        comment = Comment(
            id=CommentId(uuid4()),
            parent_id=parent_id,
            author_id=author.id,
            markdown=markdown,
            html=f"<p>{markdown}</p>",
            created_at=datetime.now(timezone.utc),
            is_pending=self.require_approval,
            is_approved=not self.require_approval,
        )
        self.comments[comment.id] = comment
        self.commenters[author.id] = author
        return CommentNewResponse(comment=comment, commenter=author)

    async def edit_comment(
        self, comment_id: CommentId, markdown: str
    ) -> CommentUpdateResponse:
        self._record("edit_comment", comment_id, markdown)
        comment = self._get(comment_id).model_copy(
            update={"markdown": markdown, "html": f"<p>{markdown}</p>"}
        )
        self.comments[comment_id] = comment
        return CommentUpdateResponse(comment=comment)

    async def vote_comment(
        self, comment_id: CommentId, direction: VoteDirection
    ) -> CommentVoteResponse:
        self._record("vote_comment", comment_id, direction)
        comment = self._get(comment_id)
        previous = self.votes.get(comment_id, VoteDirection.NONE)
        score = comment.score - int(previous) + int(direction)
        self.votes[comment_id] = direction
        self.comments[comment_id] = comment.model_copy(update={"score": score})
        return CommentVoteResponse(score=score)

    async def moderate_comment(self, comment_id: CommentId, approve: bool) -> None:
        self._record("moderate_comment", comment_id, approve)
        self.comments[comment_id] = self._get(comment_id).model_copy(
            update={"is_pending": False, "is_approved": approve}
        )

    async def set_sticky(self, comment_id: CommentId, sticky: bool) -> None:
        self._record("set_sticky", comment_id, sticky)
        self.comments[comment_id] = self._get(comment_id).model_copy(
            update={"is_sticky": sticky}
        )

    async def delete_comment(self, comment_id: CommentId) -> None:
        self._record("delete_comment", comment_id)
        self.comments[comment_id] = self._get(comment_id).model_copy(
            update={"is_deleted": True, "markdown": "", "html": ""}
        )

    async def update_page(self, page_id: PageId, readonly: bool) -> None:
        self._record("update_page", page_id, readonly)
        if page_id != self.page_info.page_id:
            raise ApiError(404, "Page not found")
        self.page_info = self.page_info.model_copy(update={"is_page_readonly": readonly})
