"""Wire DTO -> domain model mapping."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, TypeVar

from agrohub.api.models import (
    CommentDto,
    FeedPostDto,
    FollowStatsDto,
    LoginResponseDto,
    NotificationDto,
    PagedResponseDto,
    PostDto,
    UserProfileDto,
)
from agrohub.models import (
    Comment,
    CommentAuthor,
    FeedPost,
    FollowStats,
    Notification,
    NotificationActor,
    NotificationType,
    PagedData,
    Post,
    PostAuthor,
    User,
)

S = TypeVar("S")
D = TypeVar("D")

# Java backends emit one to nine fractional digits; fromisoformat on 3.10 wants exactly six.
_FRACTION = re.compile(r"\.(\d+)")


def _six_digit_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp with or without offset, or a UTC instant."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # Strip a trailing zone id such as "+01:00[Europe/Paris]".
    text = text.split("[", 1)[0]
    text = _FRACTION.sub(_six_digit_fraction, text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Unable to parse date/time string: {value}") from None


def parse_datetime_or_none(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError:
        return None


def user_to_domain(dto: UserProfileDto) -> User:
    return User(
        id=dto.id,
        email=dto.email,
        username=dto.username,
        name=dto.name or "",
        bio=dto.bio or "",
        avatar_url=dto.avatar_url,
        location=dto.location or "",
        website=dto.website,
        created_at=parse_datetime(dto.created_at),
        updated_at=parse_datetime_or_none(dto.updated_at),
    )


def login_user_to_domain(dto: LoginResponseDto) -> User:
    """Auth responses only carry identity fields; the rest stay empty."""
    return User(
        id=dto.user_id,
        email=dto.email,
        username=dto.username,
        created_at=datetime.now(),
    )


def post_to_domain(dto: PostDto) -> Post:
    return Post(
        id=dto.id,
        user_id=dto.user_id,
        content=dto.content or "",
        media_url=dto.media_url,
        created_at=parse_datetime(dto.created_at),
        updated_at=parse_datetime_or_none(dto.updated_at),
    )


def feed_post_to_domain(dto: FeedPostDto) -> FeedPost:
    return FeedPost(
        id=dto.id,
        author=PostAuthor(
            id=dto.user_id,
            username=dto.username or "Unknown",
            avatar_url=dto.user_avatar_url,
        ),
        content=dto.content or "",
        media_url=dto.media_url,
        like_count=dto.like_count,
        comment_count=dto.comment_count,
        is_liked_by_current_user=dto.liked_by_current_user,
        created_at=parse_datetime(dto.created_at),
        updated_at=parse_datetime_or_none(dto.updated_at),
    )


def comment_to_domain(dto: CommentDto) -> Comment:
    return Comment(
        id=dto.id,
        post_id=dto.post_id,
        author=CommentAuthor(
            id=dto.user_id,
            username=dto.username,
            avatar_url=dto.user_avatar_url,
        ),
        content=dto.content,
        created_at=parse_datetime(dto.created_at),
        updated_at=parse_datetime_or_none(dto.updated_at),
    )


def parse_notification_type(value: str) -> NotificationType:
    try:
        return NotificationType(value.upper())
    except ValueError:
        expected = ", ".join(t.value for t in NotificationType)
        raise ValueError(
            f"Unknown notification type: {value}. Expected one of: {expected}"
        ) from None


def notification_to_domain(dto: NotificationDto) -> Notification:
    return Notification(
        id=dto.id,
        type=parse_notification_type(dto.type),
        actor=NotificationActor(
            id=dto.actor_id,
            username=dto.actor_username,
            avatar_url=dto.actor_avatar_url,
        ),
        post_id=dto.post_id,
        message=dto.message,
        is_read=dto.is_read,
        created_at=parse_datetime(dto.created_at),
    )


def follow_stats_to_domain(dto: FollowStatsDto) -> FollowStats:
    return FollowStats(
        followers_count=dto.followers_count,
        following_count=dto.following_count,
    )


def like_counts_to_domain(counts: dict[str, int]) -> dict[int, int]:
    """Backend keys batch counts by post id as strings."""
    result: dict[int, int] = {}
    for key, count in counts.items():
        try:
            result[int(key)] = count
        except ValueError:
            raise ValueError(f"Invalid post ID in response: {key}") from None
    return result


def paged_to_domain(dto: PagedResponseDto[S], item_mapper: Callable[[S], D]) -> PagedData[D]:
    return PagedData(
        items=[item_mapper(item) for item in dto.content],
        current_page=dto.pageable.page_number,
        page_size=dto.pageable.page_size,
        total_elements=dto.total_elements,
        total_pages=dto.total_pages,
        is_last_page=dto.last,
    )
