"""Typed fetch functions for the AgroHub backend and the weather API."""

from __future__ import annotations

from urllib.parse import quote

from agrohub.api.client import AgroHubClient, WeatherAPIClient
from agrohub.api.models import (
    BatchLikeCountRequestDto,
    BatchLikeCountResponseDto,
    CommentDto,
    CreateCommentRequestDto,
    FeedPostDto,
    FollowStatsDto,
    FollowStatusDto,
    LikeCountDto,
    LikeStatusDto,
    LoginRequestDto,
    LoginResponseDto,
    NotificationDto,
    PagedResponseDto,
    PostDto,
    PostRequestDto,
    ProfileRequestDto,
    RefreshTokenRequestDto,
    RefreshTokenResponseDto,
    RegisterRequestDto,
    UpdateCommentRequestDto,
    UserProfileDto,
    WeatherResponse,
)


def _page(page: int, size: int) -> dict:
    return {"page": page, "size": size}


# ── Feed ──


async def get_personalized_feed(
    client: AgroHubClient, page: int = 0, size: int = 10
) -> PagedResponseDto[FeedPostDto]:
    data = await client.get("feed", params=_page(page, size))
    return PagedResponseDto[FeedPostDto].model_validate(data)


# ── Users ──


async def create_profile(client: AgroHubClient, request: ProfileRequestDto) -> UserProfileDto:
    data = await client.post("users", json=request.to_payload())
    return UserProfileDto.model_validate(data)


async def update_profile(
    client: AgroHubClient, user_id: int, request: ProfileRequestDto
) -> UserProfileDto:
    data = await client.put(f"users/{user_id}", json=request.to_payload())
    return UserProfileDto.model_validate(data)


async def get_current_user(client: AgroHubClient) -> UserProfileDto:
    data = await client.get("users/me")
    return UserProfileDto.model_validate(data)


async def get_user_by_id(client: AgroHubClient, user_id: int) -> UserProfileDto:
    data = await client.get(f"users/{user_id}")
    return UserProfileDto.model_validate(data)


async def get_user_by_username(client: AgroHubClient, username: str) -> UserProfileDto:
    data = await client.get(f"users/username/{quote(username, safe='')}")
    return UserProfileDto.model_validate(data)


async def search_users(
    client: AgroHubClient, query: str, page: int = 0, size: int = 10
) -> PagedResponseDto[UserProfileDto]:
    params = {"query": query, **_page(page, size)}
    data = await client.get("users/search", params=params)
    return PagedResponseDto[UserProfileDto].model_validate(data)


# ── Posts ──


async def create_post(client: AgroHubClient, request: PostRequestDto) -> PostDto:
    data = await client.post("posts", json=request.to_payload())
    return PostDto.model_validate(data)


async def update_post(client: AgroHubClient, post_id: int, request: PostRequestDto) -> PostDto:
    data = await client.put(f"posts/{post_id}", json=request.to_payload())
    return PostDto.model_validate(data)


async def delete_post(client: AgroHubClient, post_id: int) -> None:
    await client.delete(f"posts/{post_id}")


async def get_post_by_id(client: AgroHubClient, post_id: int) -> PostDto:
    data = await client.get(f"posts/{post_id}")
    return PostDto.model_validate(data)


async def get_user_posts(
    client: AgroHubClient, user_id: int, page: int = 0, size: int = 10
) -> PagedResponseDto[PostDto]:
    data = await client.get(f"posts/user/{user_id}", params=_page(page, size))
    return PagedResponseDto[PostDto].model_validate(data)


# ── Comments ──


async def create_comment(client: AgroHubClient, request: CreateCommentRequestDto) -> CommentDto:
    data = await client.post("comments", json=request.to_payload())
    return CommentDto.model_validate(data)


async def update_comment(
    client: AgroHubClient, comment_id: int, request: UpdateCommentRequestDto
) -> CommentDto:
    data = await client.put(f"comments/{comment_id}", json=request.to_payload())
    return CommentDto.model_validate(data)


async def delete_comment(client: AgroHubClient, comment_id: int) -> None:
    await client.delete(f"comments/{comment_id}")


async def get_post_comments(
    client: AgroHubClient, post_id: int, page: int = 0, size: int = 20
) -> PagedResponseDto[CommentDto]:
    data = await client.get(f"comments/post/{post_id}", params=_page(page, size))
    return PagedResponseDto[CommentDto].model_validate(data)


# ── Likes ──


async def like_post(client: AgroHubClient, post_id: int) -> None:
    await client.post(f"likes/{post_id}")


async def unlike_post(client: AgroHubClient, post_id: int) -> None:
    await client.delete(f"likes/{post_id}")


async def check_like_status(client: AgroHubClient, post_id: int) -> LikeStatusDto:
    data = await client.get(f"likes/{post_id}/check")
    return LikeStatusDto.model_validate(data)


async def get_like_count(client: AgroHubClient, post_id: int) -> LikeCountDto:
    data = await client.get(f"likes/{post_id}/count")
    return LikeCountDto.model_validate(data)


async def get_batch_like_counts(
    client: AgroHubClient, post_ids: list[int]
) -> BatchLikeCountResponseDto:
    request = BatchLikeCountRequestDto(post_ids=post_ids)
    data = await client.post("likes/batch/counts", json=request.to_payload())
    return BatchLikeCountResponseDto.model_validate(data)


# ── Follows ──


async def follow_user(client: AgroHubClient, user_id: int) -> None:
    await client.post(f"follows/{user_id}")


async def unfollow_user(client: AgroHubClient, user_id: int) -> None:
    await client.delete(f"follows/{user_id}")


async def check_follow_status(client: AgroHubClient, user_id: int) -> FollowStatusDto:
    data = await client.get(f"follows/check/{user_id}")
    return FollowStatusDto.model_validate(data)


async def get_follow_stats(client: AgroHubClient, user_id: int) -> FollowStatsDto:
    data = await client.get(f"follows/{user_id}/stats")
    return FollowStatsDto.model_validate(data)


async def get_followers(
    client: AgroHubClient, user_id: int, page: int = 0, size: int = 20
) -> PagedResponseDto[UserProfileDto]:
    data = await client.get(f"follows/{user_id}/followers", params=_page(page, size))
    return PagedResponseDto[UserProfileDto].model_validate(data)


async def get_following(
    client: AgroHubClient, user_id: int, page: int = 0, size: int = 20
) -> PagedResponseDto[UserProfileDto]:
    data = await client.get(f"follows/{user_id}/following", params=_page(page, size))
    return PagedResponseDto[UserProfileDto].model_validate(data)


# ── Notifications ──


async def get_notifications(
    client: AgroHubClient, page: int = 0, size: int = 20
) -> PagedResponseDto[NotificationDto]:
    data = await client.get("notifications", params=_page(page, size))
    return PagedResponseDto[NotificationDto].model_validate(data)


async def get_unread_notifications(
    client: AgroHubClient, page: int = 0, size: int = 20
) -> PagedResponseDto[NotificationDto]:
    data = await client.get("notifications/unread", params=_page(page, size))
    return PagedResponseDto[NotificationDto].model_validate(data)


async def mark_notification_read(client: AgroHubClient, notification_id: int) -> None:
    await client.put(f"notifications/{notification_id}/read")


async def mark_all_notifications_read(client: AgroHubClient) -> None:
    await client.put("notifications/read-all")


# ── Auth ──


async def register(client: AgroHubClient, request: RegisterRequestDto) -> LoginResponseDto:
    """Registration answers with the same token payload as login."""
    data = await client.post("auth/register", json=request.to_payload())
    return LoginResponseDto.model_validate(data)


async def login(client: AgroHubClient, request: LoginRequestDto) -> LoginResponseDto:
    data = await client.post("auth/login", json=request.to_payload())
    return LoginResponseDto.model_validate(data)


async def refresh_token(
    client: AgroHubClient, request: RefreshTokenRequestDto
) -> RefreshTokenResponseDto:
    data = await client.post("auth/refresh", json=request.to_payload())
    return RefreshTokenResponseDto.model_validate(data)


# ── Weather ──


async def get_forecast(
    client: WeatherAPIClient,
    location: str,
    *,
    days: int = 7,
    include_aqi: bool = True,
    include_alerts: bool = True,
) -> WeatherResponse:
    """Fetch a multi-day forecast for a place name or "lat,lon" pair."""
    params = {
        "q": location,
        "days": days,
        "aqi": "yes" if include_aqi else "no",
        "alerts": "yes" if include_alerts else "no",
    }
    data = await client.get("forecast.json", params=params)
    return WeatherResponse.model_validate(data)
