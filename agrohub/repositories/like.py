"""Post likes and like counts."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import BatchLikeCountResponseDto, LikeCountDto, LikeStatusDto
from agrohub.repositories.base import Repository
from agrohub.services.mappers import like_counts_to_domain
from agrohub.services.result import Result


class LikeRepository(Repository):
    messages = {
        403: "You don't have permission to perform this action",
        404: "Post not found",
        409: "Like operation conflict",
    }

    def __init__(self, client: AgroHubClient) -> None:
        self.client = client

    async def like_post(self, post_id: int) -> Result[None]:
        return await self._command(
            f"Like post {post_id}", lambda: endpoints.like_post(self.client, post_id)
        )

    async def unlike_post(self, post_id: int) -> Result[None]:
        return await self._command(
            f"Unlike post {post_id}", lambda: endpoints.unlike_post(self.client, post_id)
        )

    async def check_like_status(self, post_id: int) -> Result[bool]:
        def to_domain(dto: LikeStatusDto) -> bool:
            return dto.is_liked

        return await self._call(
            f"Like status of post {post_id}",
            lambda: endpoints.check_like_status(self.client, post_id),
            to_domain,
        )

    async def get_like_count(self, post_id: int) -> Result[int]:
        def to_domain(dto: LikeCountDto) -> int:
            return dto.count

        return await self._call(
            f"Like count of post {post_id}",
            lambda: endpoints.get_like_count(self.client, post_id),
            to_domain,
        )

    async def get_batch_like_counts(self, post_ids: list[int]) -> Result[dict[int, int]]:
        def to_domain(dto: BatchLikeCountResponseDto) -> dict[int, int]:
            return like_counts_to_domain(dto.counts)

        return await self._call(
            f"Like counts of {len(post_ids)} posts",
            lambda: endpoints.get_batch_like_counts(self.client, list(post_ids)),
            to_domain,
        )
