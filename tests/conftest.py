"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

import agrohub.services.cache as cache_module


class FakeClock:
    """Stand-in for the ``time`` module inside the cache."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(cache_module, "time", fake)
    return fake


@pytest.fixture
def mock_client():
    """Remote collaborator: get/post/put/delete return decoded JSON."""
    client = AsyncMock()
    client.get.return_value = None
    client.post.return_value = None
    client.put.return_value = None
    client.delete.return_value = None
    return client


def user_payload(user_id: int = 7, name: str = "Amina", **overrides) -> dict:
    payload = {
        "id": user_id,
        "email": f"user{user_id}@agrohub.test",
        "username": f"user{user_id}",
        "name": name,
        "bio": "Maize and beans",
        "avatarUrl": None,
        "location": "Nakuru",
        "website": None,
        "createdAt": "2025-03-01T08:30:00",
        "updatedAt": None,
    }
    payload.update(overrides)
    return payload


def post_payload(post_id: int = 11, content: str = "Rain came early", **overrides) -> dict:
    payload = {
        "id": post_id,
        "userId": 7,
        "content": content,
        "mediaUrl": None,
        "createdAt": "2025-03-02T10:00:00Z",
        "updatedAt": None,
    }
    payload.update(overrides)
    return payload


def feed_post_payload(post_id: int = 21, **overrides) -> dict:
    payload = {
        "id": post_id,
        "userId": 7,
        "username": "user7",
        "userAvatarUrl": None,
        "content": f"Feed post {post_id}",
        "mediaUrl": None,
        "likeCount": 3,
        "commentCount": 1,
        "likedByCurrentUser": True,
        "createdAt": "2025-03-02T10:00:00.123456789Z",
        "updatedAt": None,
    }
    payload.update(overrides)
    return payload


def comment_payload(comment_id: int = 31, content: str = "Same here", **overrides) -> dict:
    payload = {
        "id": comment_id,
        "postId": 11,
        "userId": 8,
        "username": "user8",
        "userAvatarUrl": None,
        "content": content,
        "createdAt": "2025-03-02T11:00:00+03:00",
        "updatedAt": None,
    }
    payload.update(overrides)
    return payload


def notification_payload(notification_id: int = 41, type_: str = "LIKE", **overrides) -> dict:
    payload = {
        "id": notification_id,
        "userId": 7,
        "type": type_,
        "actorId": 8,
        "actorUsername": "user8",
        "actorAvatarUrl": None,
        "postId": 11,
        "message": "user8 liked your post",
        "isRead": False,
        "createdAt": "2025-03-02T12:00:00",
    }
    payload.update(overrides)
    return payload


def page_payload(items: list[dict], page: int = 0, size: int = 10, total: int | None = None) -> dict:
    total = len(items) if total is None else total
    return {
        "content": items,
        "pageable": {"pageNumber": page, "pageSize": size},
        "totalElements": total,
        "totalPages": max(1, -(-total // size)),
        "last": (page + 1) * size >= total,
    }


def login_payload(user_id: int = 7, **overrides) -> dict:
    payload = {
        "accessToken": "access-1",
        "refreshToken": "refresh-1",
        "userId": user_id,
        "email": f"user{user_id}@agrohub.test",
        "username": f"user{user_id}",
        "role": "USER",
    }
    payload.update(overrides)
    return payload
