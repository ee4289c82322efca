"""Typed failures raised by the query layer."""
from __future__ import annotations


class QueryError(Exception):
    """Base class for every query failure surfaced to callers."""


class TransportError(QueryError):
    """The node could not be reached or did not answer in time."""


class ProtocolError(QueryError):
    """The node answered with a response variant other than the one requested."""

    def __init__(self, message: str, *, expected: str | None = None, received: str | None = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received


class NotFoundError(QueryError):
    """The queried entity does not exist at the requested height."""


class KeyNotFoundError(QueryError, KeyError):
    """The app config registry has no entry for the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"App config has no key '{key}'")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class DecodeError(QueryError):
    """A response payload does not have the expected shape."""


class NodeError(QueryError):
    """The node rejected the query for a reason other than a missing entity."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
