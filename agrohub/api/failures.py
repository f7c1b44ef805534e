"""Transport failures, decided once at the HTTP boundary."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class FailureKind(str, Enum):
    HTTP = "http"
    TIMEOUT = "timeout"
    UNRESOLVED_HOST = "unresolved_host"
    OTHER_IO = "other_io"


class TransportFailure(Exception):
    """Raised by the API clients for any failed remote call.

    ``kind`` says which transport variant occurred. Only ``HTTP`` failures
    carry a ``status`` and an error body.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str = "",
        *,
        status: int | None = None,
        body: str | None = None,
        body_reader: Callable[[], str | None] | None = None,
    ) -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.status = status
        self._body = body
        self._body_reader = body_reader

    @classmethod
    def http(
        cls,
        status: int,
        body: str | None = None,
        body_reader: Callable[[], str | None] | None = None,
    ) -> TransportFailure:
        return cls(
            FailureKind.HTTP,
            f"HTTP {status}",
            status=status,
            body=body,
            body_reader=body_reader,
        )

    @classmethod
    def timeout(cls, message: str = "") -> TransportFailure:
        return cls(FailureKind.TIMEOUT, message)

    @classmethod
    def unresolved_host(cls, message: str = "") -> TransportFailure:
        return cls(FailureKind.UNRESOLVED_HOST, message)

    @classmethod
    def other_io(cls, message: str = "") -> TransportFailure:
        return cls(FailureKind.OTHER_IO, message)

    def read_body(self) -> str | None:
        """Return the error body. May raise if the body cannot be read."""
        if self._body_reader is not None:
            return self._body_reader()
        return self._body

    def __repr__(self) -> str:
        if self.kind is FailureKind.HTTP:
            return f"TransportFailure(http, status={self.status})"
        return f"TransportFailure({self.kind.value})"
