"""Tests for the failure classifier."""

import pytest

from agrohub.api.failures import FailureKind, TransportFailure
from agrohub.services.classifier import INVALID_REQUEST, classify
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


@pytest.mark.parametrize("status", range(100, 600))
def test_every_status_maps_to_one_error(status):
    error = classify(TransportFailure.http(status))
    assert isinstance(error, AppError)
    assert error.message


@pytest.mark.parametrize(
    "status, expected",
    [
        (400, ValidationError),
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (409, ValidationError),
        (500, ServerError),
        (502, ServerError),
        (599, ServerError),
        (418, UnknownError),
        (302, UnknownError),
        (600, UnknownError),
    ],
)
def test_status_variants(status, expected):
    assert type(classify(TransportFailure.http(status))) is expected


def test_default_messages():
    assert classify(TransportFailure.http(401)).message == "Authentication required"
    assert classify(TransportFailure.http(403)).message == "Access denied"
    assert classify(TransportFailure.http(404)).message == "The requested resource was not found"
    assert classify(TransportFailure.http(409)).message == "Resource already exists"
    assert classify(TransportFailure.http(503)).message == "Server error. Please try again later."
    assert classify(TransportFailure.http(418)).message == "An unexpected error occurred (HTTP 418)"


@pytest.mark.parametrize(
    "failure, message",
    [
        (TransportFailure.timeout(), "Request timed out. Please check your connection."),
        (
            TransportFailure.unresolved_host(),
            "Unable to reach server. Please check your internet connection.",
        ),
        (TransportFailure.other_io(), "Network error occurred. Please check your connection."),
    ],
)
def test_io_failures_are_network_errors(failure, message):
    error = classify(failure)
    assert isinstance(error, NetworkError)
    assert error.message == message


def test_400_uses_body_message():
    failure = TransportFailure.http(400, body='{"status": 400, "message": "Username taken"}')
    assert classify(failure) == ValidationError("Username taken")


def test_400_body_message_beats_override():
    failure = TransportFailure.http(400, body='{"message": "Bio too long"}')
    error = classify(failure, {400: "Location not recognised"})
    assert error == ValidationError("Bio too long")


@pytest.mark.parametrize(
    "body",
    [None, "", "   ", "not json", "[1, 2]", '{"error": "Bad Request"}', '{"message": "  "}'],
)
def test_400_falls_back_without_usable_body(body):
    error = classify(TransportFailure.http(400, body=body))
    assert error == ValidationError(INVALID_REQUEST)


def test_400_body_reader_that_raises():
    def reader():
        raise RuntimeError("stream already consumed")

    error = classify(TransportFailure.http(400, body_reader=reader))
    assert error == ValidationError(INVALID_REQUEST)


def test_400_falls_back_to_override():
    error = classify(TransportFailure.http(400), {400: "Location not recognised"})
    assert error == ValidationError("Location not recognised")


def test_status_override_changes_message_not_variant():
    error = classify(TransportFailure.http(404), {404: "User not found"})
    assert error == NotFoundError("User not found")


def test_override_by_error_kind():
    error = classify(TransportFailure.http(503), {ErrorKind.SERVER: "Backend is down"})
    assert error == ServerError("Backend is down")


def test_status_override_wins_over_kind_override():
    messages = {401: "Invalid credentials", ErrorKind.AUTHENTICATION: "Sign in again"}
    assert classify(TransportFailure.http(401), messages).message == "Invalid credentials"


def test_override_by_failure_kind():
    messages = {FailureKind.UNRESOLVED_HOST: "Weather service unreachable"}
    assert classify(TransportFailure.unresolved_host(), messages) == NetworkError(
        "Weather service unreachable"
    )
    # Other I/O kinds keep their default.
    assert classify(TransportFailure.timeout(), messages).message.startswith("Request timed out")


def test_unrelated_override_is_ignored():
    error = classify(TransportFailure.http(403), {404: "Post not found"})
    assert error == AuthorizationError("Access denied")


def test_app_error_passes_through():
    original = ValidationError("Post content cannot be empty")
    assert classify(original) is original


@pytest.mark.parametrize(
    "exc", [ValueError("bad date"), KeyError("id"), RuntimeError("boom"), TypeError()]
)
def test_other_exceptions_are_unknown(exc):
    error = classify(exc)
    assert isinstance(error, UnknownError)
    assert "boom" not in error.message
    assert "bad date" not in error.message


def test_broken_override_table_still_returns_error():
    class Exploding(dict):
        def __contains__(self, key):
            raise RuntimeError("broken table")

    error = classify(TransportFailure.http(404), Exploding(x=1))
    assert error == UnknownError()
