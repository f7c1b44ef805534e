"""Shared cache-aside plumbing for every repository.

Each public repository operation goes through one of the helpers below, so
all of them share the same ordering rules:

* reads check the cache first and only call the remote on a miss;
* the cache is written only after a remote call succeeded and its payload
  was mapped to a domain object;
* every exception from the remote call, the mapping or the cache update is
  classified and returned as ``Error``; nothing escapes.

Cancellation (``asyncio.CancelledError``) is not an ``Exception`` and is left
to propagate. Because nothing is cached before the awaited call returns, a
cancelled operation never leaves the cache half written.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, ClassVar, Generic, Hashable, TypeVar

from agrohub.api.failures import TransportFailure
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.classifier import MessageOverrides, classify
from agrohub.services.errors import AppError, UnknownError, ValidationError
from agrohub.services.result import Error, Result, Success

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
P = TypeVar("P")
T = TypeVar("T")

Remote = Callable[[], Awaitable[P]]


def _identity(payload: Any) -> Any:
    return payload


def _ignore(payload: Any) -> None:
    return None


class Repository:
    """Classification and logging shared by every repository."""

    #: Per-resource message overrides handed to the classifier.
    messages: ClassVar[MessageOverrides] = {}

    def _error(self, what: str, exc: Exception) -> Error:
        """Classify ``exc``. Must be called from inside an ``except`` block."""
        error = classify(exc, self.messages)
        if isinstance(error, UnknownError) and not isinstance(exc, (TransportFailure, AppError)):
            log.exception("%s failed unexpectedly", what)
        else:
            log.warning("%s failed: %r (%s)", what, exc, error.message)
        return Error(error)

    @staticmethod
    def _invalid(message: str) -> Error:
        return Error(ValidationError(message))

    async def _call(
        self,
        what: str,
        remote: Remote[P],
        to_domain: Callable[[P], T] = _identity,
        store: Callable[[T], None] | None = None,
    ) -> Result[T]:
        """Remote call with no cache read. ``store`` runs only on success."""
        try:
            payload = await remote()
            value = to_domain(payload)
            if store is not None:
                store(value)
        except Exception as exc:
            return self._error(what, exc)
        return Success(value)

    async def _command(self, what: str, remote: Remote[Any]) -> Result[None]:
        """Remote call whose payload is discarded."""
        return await self._call(what, remote, _ignore)


class CachedRepository(Repository, Generic[K, V]):
    """Repository owning one BoundedTTLCache of domain objects."""

    def __init__(self, cache: BoundedTTLCache[K, V]) -> None:
        self.cache = cache

    async def _read_through(
        self,
        what: str,
        key: K,
        remote: Remote[P],
        to_domain: Callable[[P], V],
    ) -> Result[V]:
        cached = self.cache.get(key)
        if cached is not None:
            log.debug("%s: cache hit for %r", what, key)
            return Success(cached)
        return await self._call(what, remote, to_domain, lambda value: self.cache.put(key, value))

    async def _create(
        self,
        what: str,
        remote: Remote[P],
        to_domain: Callable[[P], V],
        key_of: Callable[[V], K],
    ) -> Result[V]:
        return await self._call(
            what, remote, to_domain, lambda value: self.cache.put(key_of(value), value)
        )

    async def _update(
        self,
        what: str,
        key: K,
        remote: Remote[P],
        to_domain: Callable[[P], V],
    ) -> Result[V]:
        def replace(value: V) -> None:
            self.cache.invalidate(key)
            self.cache.put(key, value)

        return await self._call(what, remote, to_domain, replace)

    async def _delete(self, what: str, key: K, remote: Remote[Any]) -> Result[None]:
        return await self._call(what, remote, _ignore, lambda _: self.cache.invalidate(key))
