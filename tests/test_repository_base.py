"""Tests for the shared Repository / CachedRepository helpers."""

from agrohub.repositories.base import CachedRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.errors import UnknownError


class BrokenCache(BoundedTTLCache):
    def put(self, key, value):
        raise RuntimeError("cache is broken")


class Notes(CachedRepository[int, dict]):
    async def fetch(self, note_id, remote):
        return await self._read_through(f"Note {note_id}", note_id, remote, dict)

    async def create(self, remote, key_of):
        return await self._create("Create note", remote, dict, key_of)


async def _note():
    return {"id": 3, "text": "plant early"}


async def test_failing_key_function_returns_error():
    repo = Notes(BoundedTTLCache(max_size=5, ttl=60))

    def key_of(note):
        return note["missing"]

    result = await repo.create(_note, key_of)

    assert isinstance(result.error, UnknownError)
    assert repo.cache.size() == 0


async def test_failing_cache_write_returns_error(caplog):
    repo = Notes(BrokenCache(max_size=5, ttl=60))

    result = await repo.fetch(3, _note)

    assert isinstance(result.error, UnknownError)
    assert "cache is broken" not in result.error.message
    assert "Note 3 failed unexpectedly" in caplog.text


async def test_successful_create_is_cached():
    repo = Notes(BoundedTTLCache(max_size=5, ttl=60))

    result = await repo.create(_note, lambda note: note["id"])

    assert result.ok
    assert repo.cache.get(3) == {"id": 3, "text": "plant early"}
