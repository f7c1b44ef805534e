"""Registration, login and token lifecycle."""

from __future__ import annotations

import logging
import re
import sqlite3

from agrohub.api import endpoints
from agrohub.api.client import AgroHubClient
from agrohub.api.models import (
    LoginRequestDto,
    LoginResponseDto,
    RefreshTokenRequestDto,
    RefreshTokenResponseDto,
    RegisterRequestDto,
)
from agrohub.models import LoginResult, User
from agrohub.repositories.base import Repository
from agrohub.services.errors import AuthenticationError, UnknownError
from agrohub.services.mappers import login_user_to_domain
from agrohub.services.result import Error, Result, Success
from agrohub.services.token_store import TokenStore

log = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)


def is_valid_email(email: str) -> bool:
    return bool(email.strip()) and EMAIL_PATTERN.fullmatch(email.strip()) is not None


class AuthRepository(Repository):
    """Talks to the auth endpoints and keeps the TokenStore in sync."""

    messages = {
        401: "Invalid credentials",
        404: "Resource not found",
        409: "Email or username already exists",
    }

    def __init__(self, client: AgroHubClient, tokens: TokenStore) -> None:
        self.client = client
        self.tokens = tokens

    def _save_session(self, response: LoginResponseDto) -> None:
        self.tokens.save_tokens(
            response.access_token, response.refresh_token, response.expires_in
        )
        self.tokens.save_username(response.username)

    async def register(self, email: str, username: str, password: str) -> Result[User]:
        if not is_valid_email(email):
            return self._invalid("Invalid email format")
        if not username.strip():
            return self._invalid("Username cannot be empty")
        if not password:
            return self._invalid("Password cannot be empty")
        request = RegisterRequestDto(email=email.strip(), username=username.strip(), password=password)

        def to_domain(response: LoginResponseDto) -> User:
            self._save_session(response)
            return login_user_to_domain(response)

        return await self._call(
            "Register", lambda: endpoints.register(self.client, request), to_domain
        )

    async def login(self, email: str, password: str) -> Result[LoginResult]:
        if not is_valid_email(email):
            return self._invalid("Invalid email format")
        if not password:
            return self._invalid("Password cannot be empty")
        request = LoginRequestDto(email_or_username=email.strip(), password=password)

        def to_domain(response: LoginResponseDto) -> LoginResult:
            self._save_session(response)
            return LoginResult(
                user=login_user_to_domain(response),
                access_token=response.access_token,
                refresh_token=response.refresh_token,
            )

        return await self._call("Login", lambda: endpoints.login(self.client, request), to_domain)

    async def refresh_token(self) -> Result[None]:
        """Swap the stored refresh token for a new access token.

        Any failure clears the stored session.
        """
        refresh = self.tokens.get_refresh_token()
        if refresh is None:
            return Error(AuthenticationError("No refresh token available"))
        request = RefreshTokenRequestDto(refresh_token=refresh)

        def to_domain(response: RefreshTokenResponseDto) -> None:
            self.tokens.save_tokens(response.access_token, refresh, response.expires_in)

        result = await self._call(
            "Token refresh", lambda: endpoints.refresh_token(self.client, request), to_domain
        )
        if isinstance(result, Error):
            self.tokens.clear_tokens()
        return result

    async def logout(self) -> Result[None]:
        try:
            self.tokens.clear_tokens()
        except sqlite3.Error as exc:
            log.exception("Logout failed")
            return Error(UnknownError(f"Failed to logout: {exc}"))
        return Success(None)

    async def is_authenticated(self) -> bool:
        return self.tokens.is_access_token_valid()
