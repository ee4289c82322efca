"""Signer protocol — identity capability carried by a client for write-side actions."""
from typing import Protocol


class Signer(Protocol):
    """Abstract interface for a transaction signer. Never consulted for queries."""

    @property
    def address(self) -> str: ...
