"""Personalised feed with an instant-render snapshot of the first page."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import FeedPostDto, PagedResponseDto
from agrohub.models import FeedPost, PagedData
from agrohub.repositories.base import CachedRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.mappers import feed_post_to_domain, paged_to_domain
from agrohub.services.result import Result

FEED_CACHE_KEY = "current_feed"
CACHED_PAGE = 0


class FeedRepository(CachedRepository[str, list[FeedPost]]):
    """Only page 0 is cached, and only its items."""

    messages = {
        403: "You don't have permission to access the feed",
        404: "Feed not found",
    }

    def __init__(
        self,
        client: AgroHubClient,
        cache: BoundedTTLCache[str, list[FeedPost]] | None = None,
    ) -> None:
        super().__init__(cache if cache is not None else BoundedTTLCache(max_size=10, ttl=120))
        self.client = client

    async def get_personalized_feed(
        self, page: int = 0, size: int = 10
    ) -> Result[PagedData[FeedPost]]:
        """Always refreshes from the backend; page 0 also refreshes the snapshot."""

        def to_domain(dto: PagedResponseDto[FeedPostDto]) -> PagedData[FeedPost]:
            return paged_to_domain(dto, feed_post_to_domain)

        def store(paged: PagedData[FeedPost]) -> None:
            if page == CACHED_PAGE:
                self.cache.put(FEED_CACHE_KEY, list(paged.items))

        return await self._call(
            f"Feed page {page}",
            lambda: endpoints.get_personalized_feed(self.client, page, size),
            to_domain,
            store,
        )

    def get_cached_snapshot(self) -> list[FeedPost]:
        """First-page items from the last successful refresh, or []."""
        cached = self.cache.get(FEED_CACHE_KEY)
        return list(cached) if cached is not None else []
