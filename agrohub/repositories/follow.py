"""Follow relationships between users."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import FollowStatusDto, PagedResponseDto, UserProfileDto
from agrohub.models import FollowStats, PagedData, User
from agrohub.repositories.base import Repository
from agrohub.services.mappers import follow_stats_to_domain, paged_to_domain, user_to_domain
from agrohub.services.result import Result


def _users_page(dto: PagedResponseDto[UserProfileDto]) -> PagedData[User]:
    return paged_to_domain(dto, user_to_domain)


class FollowRepository(Repository):
    messages = {
        404: "User not found",
        409: "Follow relationship already exists or doesn't exist",
    }

    def __init__(self, client: AgroHubClient) -> None:
        self.client = client

    async def follow_user(self, user_id: int) -> Result[None]:
        return await self._command(
            f"Follow user {user_id}", lambda: endpoints.follow_user(self.client, user_id)
        )

    async def unfollow_user(self, user_id: int) -> Result[None]:
        return await self._command(
            f"Unfollow user {user_id}", lambda: endpoints.unfollow_user(self.client, user_id)
        )

    async def check_follow_status(self, user_id: int) -> Result[bool]:
        def to_domain(dto: FollowStatusDto) -> bool:
            return dto.is_following

        return await self._call(
            f"Follow status of user {user_id}",
            lambda: endpoints.check_follow_status(self.client, user_id),
            to_domain,
        )

    async def get_follow_stats(self, user_id: int) -> Result[FollowStats]:
        return await self._call(
            f"Follow stats of user {user_id}",
            lambda: endpoints.get_follow_stats(self.client, user_id),
            follow_stats_to_domain,
        )

    async def get_followers(
        self, user_id: int, page: int = 0, size: int = 20
    ) -> Result[PagedData[User]]:
        return await self._call(
            f"Followers of user {user_id}",
            lambda: endpoints.get_followers(self.client, user_id, page, size),
            _users_page,
        )

    async def get_following(
        self, user_id: int, page: int = 0, size: int = 20
    ) -> Result[PagedData[User]]:
        return await self._call(
            f"Following of user {user_id}",
            lambda: endpoints.get_following(self.client, user_id, page, size),
            _users_page,
        )
