"""Domain models handed to callers. Immutable once mapped."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from agrohub.api.models import WeatherResponse

T = TypeVar("T")


class DomainModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class User(DomainModel):
    id: int
    email: str
    username: str
    name: str = ""
    bio: str = ""
    avatar_url: str | None = None
    location: str = ""
    website: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class Post(DomainModel):
    id: int
    user_id: int
    content: str
    media_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class PostAuthor(DomainModel):
    id: int
    username: str
    avatar_url: str | None = None


class FeedPost(DomainModel):
    id: int
    author: PostAuthor
    content: str
    media_url: str | None = None
    like_count: int = 0
    comment_count: int = 0
    is_liked_by_current_user: bool = False
    created_at: datetime
    updated_at: datetime | None = None


class CommentAuthor(DomainModel):
    id: int
    username: str
    avatar_url: str | None = None


class Comment(DomainModel):
    id: int
    post_id: int
    author: CommentAuthor
    content: str
    created_at: datetime
    updated_at: datetime | None = None


class NotificationType(str, Enum):
    LIKE = "LIKE"
    COMMENT = "COMMENT"
    FOLLOW = "FOLLOW"


class NotificationActor(DomainModel):
    id: int
    username: str
    avatar_url: str | None = None


class Notification(DomainModel):
    id: int
    type: NotificationType
    actor: NotificationActor
    post_id: int | None = None
    message: str
    is_read: bool = False
    created_at: datetime


class FollowStats(DomainModel):
    followers_count: int
    following_count: int


class PagedData(DomainModel, Generic[T]):
    items: list[T] = Field(default_factory=list)
    current_page: int = 0
    page_size: int = 0
    total_elements: int = 0
    total_pages: int = 0
    is_last_page: bool = True


class LoginResult(DomainModel):
    user: User
    access_token: str
    refresh_token: str


# The weather API payload is already caller-shaped; expose it as-is.
Forecast = WeatherResponse
