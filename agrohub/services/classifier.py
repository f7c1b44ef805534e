"""Map any failure from a remote call onto the AppError taxonomy.

``classify`` is total: every exception maps to exactly one AppError and the
function itself never raises. Callers may pass a small override table to
change the message text of a variant, never the variant itself. Keys are
HTTP status codes, ``FailureKind`` members or ``ErrorKind`` members, looked
up in that order.
"""

from __future__ import annotations

import logging
from typing import Mapping, Union

from agrohub.api.failures import FailureKind, TransportFailure
from agrohub.api.models import ErrorResponseDto
from agrohub.services.errors import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    ServerError,
    UnknownError,
    ValidationError,
)

log = logging.getLogger(__name__)

MessageKey = Union[int, FailureKind, ErrorKind]
MessageOverrides = Mapping[MessageKey, str]

INVALID_REQUEST = "Invalid request"

_STATUS_ERRORS: dict[int, tuple[type[AppError], str]] = {
    401: (AuthenticationError, "Authentication required"),
    403: (AuthorizationError, "Access denied"),
    404: (NotFoundError, "The requested resource was not found"),
    409: (ValidationError, "Resource already exists"),
}

_IO_MESSAGES: dict[FailureKind, str] = {
    FailureKind.TIMEOUT: "Request timed out. Please check your connection.",
    FailureKind.UNRESOLVED_HOST: "Unable to reach server. Please check your internet connection.",
    FailureKind.OTHER_IO: "Network error occurred. Please check your connection.",
}

SERVER_MESSAGE = "Server error. Please try again later."
UNEXPECTED_MESSAGE = "An unexpected error occurred"


def _lookup(
    messages: MessageOverrides | None,
    default: str,
    *keys: MessageKey | None,
) -> str:
    if messages:
        for key in keys:
            if key is not None and key in messages:
                return messages[key]
    return default


def _body_message(failure: TransportFailure) -> str | None:
    """Pull ``message`` out of a JSON error body, or None."""
    try:
        body = failure.read_body()
        if not body or not body.strip():
            return None
        message = ErrorResponseDto.model_validate_json(body).message
    except Exception:
        return None
    if message and message.strip():
        return message.strip()
    return None


def _classify_http(failure: TransportFailure, messages: MessageOverrides | None) -> AppError:
    status = failure.status or 0
    if status == 400:
        message = _body_message(failure) or _lookup(
            messages, INVALID_REQUEST, 400, FailureKind.HTTP, ErrorKind.VALIDATION
        )
        return ValidationError(message)
    if status in _STATUS_ERRORS:
        error_type, default = _STATUS_ERRORS[status]
        return error_type(
            _lookup(messages, default, status, FailureKind.HTTP, error_type.kind)
        )
    if 500 <= status <= 599:
        return ServerError(
            _lookup(messages, SERVER_MESSAGE, status, FailureKind.HTTP, ErrorKind.SERVER)
        )
    return UnknownError(
        _lookup(
            messages,
            f"{UNEXPECTED_MESSAGE} (HTTP {status})",
            status,
            FailureKind.HTTP,
            ErrorKind.UNKNOWN,
        )
    )


def classify(failure: BaseException, messages: MessageOverrides | None = None) -> AppError:
    """Return the AppError for ``failure``. Never raises."""
    try:
        if isinstance(failure, AppError):
            return failure
        if isinstance(failure, TransportFailure):
            if failure.kind is FailureKind.HTTP:
                return _classify_http(failure, messages)
            default = _IO_MESSAGES.get(failure.kind, _IO_MESSAGES[FailureKind.OTHER_IO])
            return NetworkError(
                _lookup(messages, default, failure.kind, ErrorKind.NETWORK)
            )
        return UnknownError(_lookup(messages, UnknownError.default_message, ErrorKind.UNKNOWN))
    except Exception:
        log.exception("Failed to classify %r", failure)
        return UnknownError()
