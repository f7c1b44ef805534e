"""Pydantic models for AgroHub backend and weather API payloads."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Backend payloads use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ── Errors & paging ──


class ErrorResponseDto(CamelModel):
    timestamp: str | None = None
    status: int | None = None
    error: str | None = None
    message: str | None = None
    path: str | None = None


class PageableDto(CamelModel):
    page_number: int = 0
    page_size: int = 0


class PagedResponseDto(CamelModel, Generic[T]):
    content: list[T] = Field(default_factory=list)
    pageable: PageableDto = Field(default_factory=PageableDto)
    total_elements: int = 0
    total_pages: int = 0
    last: bool = True


# ── Auth ──


class RegisterRequestDto(CamelModel):
    email: str
    username: str
    password: str


class LoginRequestDto(CamelModel):
    email_or_username: str
    password: str


class LoginResponseDto(CamelModel):
    access_token: str
    refresh_token: str
    user_id: int
    email: str
    username: str
    role: str = "USER"
    token_type: str = "Bearer"
    expires_in: int = 3600  # seconds; the backend omits it on login


class RefreshTokenRequestDto(CamelModel):
    refresh_token: str


class RefreshTokenResponseDto(CamelModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600


# ── Users ──


class UserProfileDto(CamelModel):
    id: int
    email: str
    username: str
    name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    location: str | None = None
    website: str | None = None
    created_at: str
    updated_at: str | None = None


class ProfileRequestDto(CamelModel):
    """Body for both profile create and update."""

    name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    location: str | None = None
    website: str | None = None


# ── Posts & feed ──


class PostDto(CamelModel):
    id: int
    user_id: int
    content: str | None = ""
    media_url: str | None = None
    created_at: str
    updated_at: str | None = None


class PostRequestDto(CamelModel):
    content: str
    media_url: str | None = None


class FeedPostDto(CamelModel):
    id: int
    user_id: int
    username: str | None = "Unknown"
    user_avatar_url: str | None = None
    content: str | None = ""
    media_url: str | None = None
    like_count: int = 0
    comment_count: int = 0
    liked_by_current_user: bool = False
    created_at: str
    updated_at: str | None = None


# ── Comments ──


class CommentDto(CamelModel):
    id: int
    post_id: int
    user_id: int
    username: str
    user_avatar_url: str | None = None
    content: str
    created_at: str
    updated_at: str | None = None


class CreateCommentRequestDto(CamelModel):
    post_id: int
    content: str


class UpdateCommentRequestDto(CamelModel):
    content: str


# ── Likes & follows ──


class LikeStatusDto(CamelModel):
    is_liked: bool


class LikeCountDto(CamelModel):
    count: int


class BatchLikeCountRequestDto(CamelModel):
    post_ids: list[int]


class BatchLikeCountResponseDto(CamelModel):
    counts: dict[str, int] = Field(default_factory=dict)


class FollowStatusDto(CamelModel):
    is_following: bool


class FollowStatsDto(CamelModel):
    followers_count: int
    following_count: int


# ── Notifications ──


class NotificationDto(CamelModel):
    id: int
    user_id: int
    type: str  # LIKE, COMMENT, FOLLOW
    actor_id: int
    actor_username: str
    actor_avatar_url: str | None = None
    post_id: int | None = None
    message: str
    is_read: bool = False
    created_at: str


# ── Weather (weatherapi.com, snake_case keys) ──


class WeatherCondition(BaseModel):
    text: str | None = None
    icon: str | None = None
    code: int | None = None


class WeatherLocation(BaseModel):
    name: str | None = None
    region: str | None = None
    country: str | None = None
    lat: float | None = None
    lon: float | None = None
    localtime: str | None = None


class CurrentWeather(BaseModel):
    temp_c: float | None = None
    is_day: int | None = None
    condition: WeatherCondition | None = None
    wind_kph: float | None = None
    precip_mm: float | None = None
    humidity: int | None = None
    cloud: int | None = None
    feelslike_c: float | None = None
    uv: float | None = None


class DayWeather(BaseModel):
    maxtemp_c: float | None = None
    mintemp_c: float | None = None
    avgtemp_c: float | None = None
    maxwind_kph: float | None = None
    totalprecip_mm: float | None = None
    avghumidity: int | None = None
    daily_chance_of_rain: int | None = None
    daily_chance_of_snow: int | None = None
    condition: WeatherCondition | None = None
    uv: float | None = None


class ForecastDay(BaseModel):
    date: str | None = None
    day: DayWeather | None = None


class ForecastBlock(BaseModel):
    forecastday: list[ForecastDay] = Field(default_factory=list)


class WeatherAlerts(BaseModel):
    alert: list[dict[str, Any]] = Field(default_factory=list)


class WeatherResponse(BaseModel):
    location: WeatherLocation | None = None
    current: CurrentWeather | None = None
    forecast: ForecastBlock | None = None
    alerts: WeatherAlerts | None = None
