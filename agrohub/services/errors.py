"""Closed taxonomy of errors returned by every repository operation."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    SERVER = "server"
    NETWORK = "network"
    UNKNOWN = "unknown"


class AppError(Exception):
    """Base for user-facing errors. ``message`` is ready for display."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message = "An unknown error occurred. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.message == self.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION
    default_message = "Validation failed. Please check your input."


class AuthenticationError(AppError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Authentication failed. Please check your credentials."


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION
    default_message = "Access denied. You don't have permission to perform this action."


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "The requested resource was not found."


class ServerError(AppError):
    kind = ErrorKind.SERVER
    default_message = "Server error occurred. Please try again later."


class NetworkError(AppError):
    kind = ErrorKind.NETWORK
    default_message = "Network error occurred. Please check your connection."


class UnknownError(AppError):
    kind = ErrorKind.UNKNOWN


ERROR_TYPES: dict[ErrorKind, type[AppError]] = {
    cls.kind: cls
    for cls in (
        ValidationError,
        AuthenticationError,
        AuthorizationError,
        NotFoundError,
        ServerError,
        NetworkError,
        UnknownError,
    )
}
