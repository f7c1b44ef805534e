"""Posts, with a per-id cache kept in step with create/update/delete."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import PagedResponseDto, PostDto, PostRequestDto
from agrohub.models import PagedData, Post
from agrohub.repositories.base import CachedRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.mappers import paged_to_domain, post_to_domain
from agrohub.services.result import Result

EMPTY_CONTENT = "Post content cannot be empty"


def _post_id(post: Post) -> int:
    return post.id


class PostRepository(CachedRepository[int, Post]):
    messages = {
        403: "You don't have permission to perform this action",
        404: "Post not found",
        409: "Post conflict",
    }

    def __init__(
        self,
        client: AgroHubClient,
        cache: BoundedTTLCache[int, Post] | None = None,
    ) -> None:
        super().__init__(cache if cache is not None else BoundedTTLCache(max_size=100, ttl=300))
        self.client = client

    async def create_post(self, content: str, media_url: str | None = None) -> Result[Post]:
        if not content.strip():
            return self._invalid(EMPTY_CONTENT)
        request = PostRequestDto(content=content.strip(), media_url=media_url)
        return await self._create(
            "Create post",
            lambda: endpoints.create_post(self.client, request),
            post_to_domain,
            _post_id,
        )

    async def update_post(
        self, post_id: int, content: str, media_url: str | None = None
    ) -> Result[Post]:
        if not content.strip():
            return self._invalid(EMPTY_CONTENT)
        request = PostRequestDto(content=content.strip(), media_url=media_url)
        return await self._update(
            f"Update post {post_id}",
            post_id,
            lambda: endpoints.update_post(self.client, post_id, request),
            post_to_domain,
        )

    async def delete_post(self, post_id: int) -> Result[None]:
        return await self._delete(
            f"Delete post {post_id}",
            post_id,
            lambda: endpoints.delete_post(self.client, post_id),
        )

    async def get_post_by_id(self, post_id: int) -> Result[Post]:
        return await self._read_through(
            f"Post {post_id}",
            post_id,
            lambda: endpoints.get_post_by_id(self.client, post_id),
            post_to_domain,
        )

    async def get_user_posts(
        self, user_id: int, page: int = 0, size: int = 10
    ) -> Result[PagedData[Post]]:
        def to_domain(dto: PagedResponseDto[PostDto]) -> PagedData[Post]:
            return paged_to_domain(dto, post_to_domain)

        return await self._call(
            f"Posts of user {user_id}",
            lambda: endpoints.get_user_posts(self.client, user_id, page, size),
            to_domain,
        )
