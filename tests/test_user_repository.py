"""Tests for UserRepository cache-aside behaviour."""

import asyncio

import pytest

from agrohub.api.failures import TransportFailure
from agrohub.repositories.user import UserRepository
from agrohub.services.cache import BoundedTTLCache
from agrohub.services.errors import NetworkError, NotFoundError, ValidationError
from agrohub.services.result import Error, Success
from conftest import page_payload, user_payload


@pytest.fixture
def repo(mock_client):
    return UserRepository(mock_client)


async def test_get_user_by_id_fetches_and_caches(repo, mock_client):
    mock_client.get.return_value = user_payload(7)

    result = await repo.get_user_by_id(7)

    assert isinstance(result, Success)
    assert result.value.id == 7
    assert repo.cache.get(7) == result.value
    mock_client.get.assert_awaited_once_with("users/7")


async def test_cache_hit_skips_remote(repo, mock_client):
    mock_client.get.return_value = user_payload(7)
    first = await repo.get_user_by_id(7)
    second = await repo.get_user_by_id(7)

    assert second.value == first.value
    assert mock_client.get.await_count == 1


async def test_expired_entry_refetches(repo, mock_client, clock):
    mock_client.get.return_value = user_payload(7, name="Old")
    await repo.get_user_by_id(7)

    clock.advance(300)
    mock_client.get.return_value = user_payload(7, name="New")
    result = await repo.get_user_by_id(7)

    assert result.value.name == "New"
    assert mock_client.get.await_count == 2


async def test_not_found_uses_user_message(repo, mock_client):
    mock_client.get.side_effect = TransportFailure.http(404)

    result = await repo.get_user_by_id(99)

    assert isinstance(result, Error)
    assert result.error == NotFoundError("User not found")
    assert repo.cache.get(99) is None


async def test_network_failure_leaves_cache_unchanged(repo, mock_client):
    mock_client.get.return_value = user_payload(7)
    cached = (await repo.get_user_by_id(7)).value
    repo.cache.invalidate(7)
    repo.cache.put(7, cached)

    mock_client.get.side_effect = TransportFailure.timeout()
    result = await repo.get_current_user()

    assert isinstance(result.error, NetworkError)
    assert repo.cache.get(7) == cached


async def test_malformed_payload_is_unknown_error(repo, mock_client):
    mock_client.get.return_value = {"id": "not-an-int"}

    result = await repo.get_user_by_id(7)

    assert not result.ok
    assert result.error.kind.value == "unknown"
    assert repo.cache.size() == 0


async def test_create_profile_caches_new_user(repo, mock_client):
    mock_client.post.return_value = user_payload(42, name="Juma")

    result = await repo.create_profile(name="Juma", location="Eldoret")

    assert result.value.id == 42
    assert repo.cache.get(42) == result.value
    mock_client.post.assert_awaited_once_with(
        "users", json={"name": "Juma", "location": "Eldoret"}
    )


async def test_create_profile_conflict(repo, mock_client):
    mock_client.post.side_effect = TransportFailure.http(409)

    result = await repo.create_profile(name="Juma")

    assert result.error == ValidationError("User already exists")
    assert repo.cache.size() == 0


async def test_update_profile_replaces_cached_value(repo, mock_client):
    mock_client.put.return_value = user_payload(7, bio="first")
    await repo.update_profile(7, bio="first")
    mock_client.put.return_value = user_payload(7, bio="second")
    await repo.update_profile(7, bio="second")

    assert repo.cache.get(7).bio == "second"
    assert repo.cache.size() == 1


async def test_update_then_read_serves_updated_value(repo, mock_client):
    mock_client.get.return_value = user_payload(7, name="Before")
    await repo.get_user_by_id(7)
    mock_client.put.return_value = user_payload(7, name="After")
    await repo.update_profile(7, name="After")

    result = await repo.get_user_by_id(7)

    assert result.value.name == "After"
    assert mock_client.get.await_count == 1


async def test_get_current_user_caches_by_id(repo, mock_client):
    mock_client.get.return_value = user_payload(5)

    result = await repo.get_current_user()

    assert repo.cache.get(5) == result.value
    mock_client.get.assert_awaited_once_with("users/me")


@pytest.mark.parametrize("username", ["", "   "])
async def test_blank_username_is_rejected_without_call(repo, mock_client, username):
    result = await repo.get_user_by_username(username)

    assert result.error == ValidationError("Username cannot be empty")
    mock_client.get.assert_not_awaited()


async def test_get_user_by_username_trims(repo, mock_client):
    mock_client.get.return_value = user_payload(9)

    await repo.get_user_by_username("  user9 ")

    mock_client.get.assert_awaited_once_with("users/username/user9")
    assert 9 in repo.cache


async def test_blank_search_is_rejected_without_call(repo, mock_client):
    result = await repo.search_users(" ")

    assert result.error == ValidationError("Search query cannot be empty")
    mock_client.get.assert_not_awaited()


async def test_search_users_caches_every_result(repo, mock_client):
    mock_client.get.return_value = page_payload([user_payload(1), user_payload(2)], size=10)

    result = await repo.search_users("maize", page=0, size=10)

    assert [u.id for u in result.value.items] == [1, 2]
    assert repo.cache.get(1) is not None
    assert repo.cache.get(2) is not None
    mock_client.get.assert_awaited_once_with(
        "users/search", params={"query": "maize", "page": 0, "size": 10}
    )


async def test_injected_empty_cache_is_used(mock_client):
    cache = BoundedTTLCache(max_size=1, ttl=10)
    repo = UserRepository(mock_client, cache)
    assert repo.cache is cache


async def test_cancellation_propagates_and_cache_stays_clean(repo, mock_client):
    started = asyncio.Event()

    async def slow(*args, **kwargs):
        started.set()
        await asyncio.sleep(10)
        return user_payload(7)

    mock_client.get.side_effect = slow
    task = asyncio.create_task(repo.get_user_by_id(7))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert repo.cache.get(7) is None


async def test_short_fraction_timestamp_maps(repo, mock_client):
    mock_client.get.return_value = user_payload(7, createdAt="2025-03-01T08:30:00.12345")

    result = await repo.get_user_by_id(7)

    assert result.ok
    assert result.value.created_at.microsecond == 123450
