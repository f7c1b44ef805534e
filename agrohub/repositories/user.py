"""User profiles, cached by user id."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import PagedResponseDto, ProfileRequestDto, UserProfileDto
from agrohub.models import PagedData, User
from agrohub.repositories.base import CachedRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.mappers import paged_to_domain, user_to_domain
from agrohub.services.result import Result


def _user_id(user: User) -> int:
    return user.id


class UserRepository(CachedRepository[int, User]):
    """Profile CRUD and search.

    ``get_user_by_id`` is the only read served from the cache; every other
    successful read or write refreshes the cached profiles it returns.
    """

    messages = {
        404: "User not found",
        409: "User already exists",
    }

    def __init__(
        self,
        client: AgroHubClient,
        cache: BoundedTTLCache[int, User] | None = None,
    ) -> None:
        super().__init__(cache if cache is not None else BoundedTTLCache(max_size=100, ttl=300))
        self.client = client

    async def create_profile(
        self,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
        location: str | None = None,
        website: str | None = None,
    ) -> Result[User]:
        request = ProfileRequestDto(
            name=name, bio=bio, avatar_url=avatar_url, location=location, website=website
        )
        return await self._create(
            "Create profile",
            lambda: endpoints.create_profile(self.client, request),
            user_to_domain,
            _user_id,
        )

    async def update_profile(
        self,
        user_id: int,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
        location: str | None = None,
        website: str | None = None,
    ) -> Result[User]:
        request = ProfileRequestDto(
            name=name, bio=bio, avatar_url=avatar_url, location=location, website=website
        )
        return await self._update(
            f"Update profile {user_id}",
            user_id,
            lambda: endpoints.update_profile(self.client, user_id, request),
            user_to_domain,
        )

    async def get_current_user(self) -> Result[User]:
        return await self._call(
            "Current user",
            lambda: endpoints.get_current_user(self.client),
            user_to_domain,
            self._remember,
        )

    async def get_user_by_id(self, user_id: int) -> Result[User]:
        return await self._read_through(
            f"User {user_id}",
            user_id,
            lambda: endpoints.get_user_by_id(self.client, user_id),
            user_to_domain,
        )

    async def get_user_by_username(self, username: str) -> Result[User]:
        if not username.strip():
            return self._invalid("Username cannot be empty")
        return await self._call(
            f"User @{username}",
            lambda: endpoints.get_user_by_username(self.client, username.strip()),
            user_to_domain,
            self._remember,
        )

    async def search_users(self, query: str, page: int = 0, size: int = 10) -> Result[PagedData[User]]:
        if not query.strip():
            return self._invalid("Search query cannot be empty")

        def to_domain(dto: PagedResponseDto[UserProfileDto]) -> PagedData[User]:
            return paged_to_domain(dto, user_to_domain)

        def store(paged: PagedData[User]) -> None:
            for user in paged.items:
                self._remember(user)

        return await self._call(
            f"User search {query!r}",
            lambda: endpoints.search_users(self.client, query.strip(), page, size),
            to_domain,
            store,
        )

    def _remember(self, user: User) -> None:
        self.cache.put(user.id, user)
