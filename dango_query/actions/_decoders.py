"""Shared decoders and input checks for action results and parameters."""
from __future__ import annotations

from typing import Any

from ..exceptions import DecodeError
from ..models import Vote


def address(data: Any) -> str:
    if not isinstance(data, str) or not data:
        raise DecodeError(f"Expected an address, got {data!r}")
    return data


def optional_address(data: Any) -> str | None:
    if data is None:
        return None
    return address(data)


def address_map(data: Any) -> dict[str, str]:
    """Decode ``{name: address}`` keeping the node's ordering."""
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object of addresses, got {type(data).__name__}")
    return {str(k): address(v) for k, v in data.items()}


def vote_map(data: Any) -> dict[str, Vote]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object of votes, got {type(data).__name__}")
    return {str(username): Vote(vote) for username, vote in data.items()}


def check_limit(limit: int | None) -> None:
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")


def check_non_empty(name: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
