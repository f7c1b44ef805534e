"""Multi-day forecasts from the weather API, cached per location."""

from __future__ import annotations

from agrohub.api import endpoints
from agrohub.api.client import WeatherAPIClient
from agrohub.api.failures import FailureKind
from agrohub.models import Forecast
from agrohub.repositories.base import CachedRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.result import Result


def location_key(location: str, days: int) -> str:
    return f"{' '.join(location.lower().split())}:{days}"


class WeatherRepository(CachedRepository[str, Forecast]):
    messages = {
        400: "Location not recognised",
        401: "Weather service rejected the API key",
        403: "Weather service rejected the API key",
        FailureKind.UNRESOLVED_HOST: "Unable to reach the weather service. Please check your internet connection.",
    }

    def __init__(
        self,
        client: WeatherAPIClient,
        cache: BoundedTTLCache[str, Forecast] | None = None,
        days: int = 7,
    ) -> None:
        super().__init__(cache if cache is not None else BoundedTTLCache(max_size=20, ttl=600))
        self.client = client
        self.days = days

    async def get_forecast(self, location: str, days: int | None = None) -> Result[Forecast]:
        """Forecast for a place name or "lat,lon" pair."""
        if not location.strip():
            return self._invalid("Location cannot be empty")
        if days is not None and days <= 0:
            return self._invalid("Forecast days must be positive")
        days = days if days is not None else self.days
        return await self._read_through(
            f"Forecast for {location!r}",
            location_key(location, days),
            lambda: endpoints.get_forecast(self.client, location.strip(), days=days),
            lambda forecast: forecast,
        )

    def invalidate(self, location: str, days: int | None = None) -> None:
        """Drop a cached forecast so the next read refetches it."""
        self.cache.invalidate(location_key(location, days if days is not None else self.days))
