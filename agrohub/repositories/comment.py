"""Comments on posts. Not cached."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import (
    CommentDto,
    CreateCommentRequestDto,
    PagedResponseDto,
    UpdateCommentRequestDto,
)
from agrohub.models import Comment, PagedData
from agrohub.repositories.base import Repository
from agrohub.services.mappers import comment_to_domain, paged_to_domain
from agrohub.services.result import Result

EMPTY_CONTENT = "Comment content cannot be empty"


class CommentRepository(Repository):
    messages = {
        403: "You don't have permission to perform this action",
        404: "Comment not found",
        409: "Comment conflict",
    }

    def __init__(self, client: AgroHubClient) -> None:
        self.client = client

    async def create_comment(self, post_id: int, content: str) -> Result[Comment]:
        if not content.strip():
            return self._invalid(EMPTY_CONTENT)
        request = CreateCommentRequestDto(post_id=post_id, content=content.strip())
        return await self._call(
            f"Comment on post {post_id}",
            lambda: endpoints.create_comment(self.client, request),
            comment_to_domain,
        )

    async def update_comment(self, comment_id: int, content: str) -> Result[Comment]:
        if not content.strip():
            return self._invalid(EMPTY_CONTENT)
        request = UpdateCommentRequestDto(content=content.strip())
        return await self._call(
            f"Update comment {comment_id}",
            lambda: endpoints.update_comment(self.client, comment_id, request),
            comment_to_domain,
        )

    async def delete_comment(self, comment_id: int) -> Result[None]:
        return await self._command(
            f"Delete comment {comment_id}",
            lambda: endpoints.delete_comment(self.client, comment_id),
        )

    async def get_post_comments(
        self, post_id: int, page: int = 0, size: int = 20
    ) -> Result[PagedData[Comment]]:
        def to_domain(dto: PagedResponseDto[CommentDto]) -> PagedData[Comment]:
            return paged_to_domain(dto, comment_to_domain)

        return await self._call(
            f"Comments of post {post_id}",
            lambda: endpoints.get_post_comments(self.client, post_id, page, size),
            to_domain,
        )
