"""Builds the HTTP clients, token store and every repository from Settings."""

from __future__ import annotations

import logging

from agrohub.api.client import AgroHubClient, WeatherAPIClient
from agrohub.config import Settings
from agrohub.repositories.auth import AuthRepository
from agrohub.repositories.comment import CommentRepository
from agrohub.repositories.feed import FeedRepository
from agrohub.repositories.follow import FollowRepository
from agrohub.repositories.like import LikeRepository
from agrohub.repositories.notification import NotificationRepository
from agrohub.repositories.post import PostRepository
from agrohub.repositories.user import UserRepository
from agrohub.repositories.weather import WeatherRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.token_store import TokenStore

log = logging.getLogger(__name__)


class DataService:
    """Owns one instance of each repository, each with its own cache."""

    def __init__(
        self,
        settings: Settings,
        client: AgroHubClient | None = None,
        weather_client: WeatherAPIClient | None = None,
        tokens: TokenStore | None = None,
    ) -> None:
        self.settings = settings
        self.tokens = tokens if tokens is not None else TokenStore(settings.token_db_path)
        self.client = client if client is not None else AgroHubClient(
            settings.api_base_url,
            token_provider=self.tokens.get_access_token,
            timeout=settings.request_timeout,
        )
        self.weather_client = weather_client if weather_client is not None else WeatherAPIClient(
            settings.weather_api_key,
            settings.weather_base_url,
            timeout=settings.request_timeout,
        )
        if not settings.weather_api_key:
            log.warning("WEATHER_API_KEY is not set, forecasts will fail")

        self.auth = AuthRepository(self.client, self.tokens)
        self.feed = FeedRepository(
            self.client, BoundedTTLCache(settings.feed_cache_size, settings.feed_cache_ttl)
        )
        self.users = UserRepository(
            self.client, BoundedTTLCache(settings.user_cache_size, settings.user_cache_ttl)
        )
        self.posts = PostRepository(
            self.client, BoundedTTLCache(settings.post_cache_size, settings.post_cache_ttl)
        )
        self.comments = CommentRepository(self.client)
        self.likes = LikeRepository(self.client)
        self.follows = FollowRepository(self.client)
        self.notifications = NotificationRepository(self.client)
        self.weather = WeatherRepository(
            self.weather_client,
            BoundedTTLCache(settings.weather_cache_size, settings.weather_cache_ttl),
            days=settings.forecast_days,
        )

    async def close(self) -> None:
        await self.client.close()
        await self.weather_client.close()
        self.tokens.close()

    async def __aenter__(self) -> DataService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
