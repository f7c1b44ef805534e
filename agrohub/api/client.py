"""Async httpx wrappers that turn every transport problem into a TransportFailure."""

from __future__ import annotations

import logging
import socket
from typing import Any, Callable, Optional

import httpx

from agrohub.api.failures import TransportFailure

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://10.0.2.2:8080/api/"
WEATHER_BASE_URL = "https://api.weatherapi.com/v1/"

# Paths that must never carry a bearer token.
UNAUTHENTICATED_PATHS = ("auth/register", "auth/login", "auth/refresh")

TokenProvider = Callable[[], Optional[str]]


def _resolution_failed(exc: BaseException) -> bool:
    """Walk the cause chain looking for a DNS lookup failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, socket.gaierror):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def to_transport_failure(exc: Exception) -> TransportFailure:
    """Decide which transport variant ``exc`` is."""
    if isinstance(exc, TransportFailure):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return TransportFailure.http(response.status_code, body_reader=lambda: response.text)
    if isinstance(exc, httpx.TimeoutException):
        return TransportFailure.timeout(str(exc))
    if _resolution_failed(exc):
        return TransportFailure.unresolved_host(str(exc))
    return TransportFailure.other_io(str(exc))


class BaseAPIClient:
    """Shared request plumbing for the backend and weather clients."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {
            "base_url": base_url,
            "timeout": timeout,
            "event_hooks": {"request": [self._log_request], "response": [self._log_response]},
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BaseAPIClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @staticmethod
    async def _log_request(request: httpx.Request) -> None:
        log.debug("--> %s %s", request.method, request.url.copy_remove_param("key"))

    @staticmethod
    async def _log_response(response: httpx.Response) -> None:
        request = response.request
        log.debug(
            "<-- %s %s %s",
            response.status_code,
            request.method,
            request.url.copy_remove_param("key"),
        )

    def _headers(self, path: str) -> dict[str, str]:
        return {}

    def _params(self, params: dict[str, Any] | None) -> dict[str, Any] | None:
        return params

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return decoded JSON, or None for an empty body.

        Raises TransportFailure for error statuses and I/O problems.
        """
        try:
            response = await self._client.request(
                method,
                path,
                params=self._params(params),
                json=json,
                headers=self._headers(path),
            )
            response.raise_for_status()
        except (httpx.HTTPError, OSError) as exc:
            raise to_transport_failure(exc) from exc
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


class AgroHubClient(BaseAPIClient):
    """Async HTTP client for the AgroHub backend."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token_provider: TokenProvider | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, transport=transport)
        self._token_provider = token_provider

    def _headers(self, path: str) -> dict[str, str]:
        if self._token_provider is None:
            return {}
        if path.lstrip("/") in UNAUTHENTICATED_PATHS:
            return {}
        token = self._token_provider()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}


class WeatherAPIClient(BaseAPIClient):
    """Async HTTP client for weatherapi.com, authenticated by query key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = WEATHER_BASE_URL,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, transport=transport)
        self._api_key = api_key

    def _params(self, params: dict[str, Any] | None) -> dict[str, Any]:
        params = dict(params or {})
        params["key"] = self._api_key
        return params
