"""Contract queries: the smart-query primitive every action goes through."""
from __future__ import annotations

import base64
import binascii
from collections.abc import Callable
from typing import Any, TypeVar, overload

from .client import Client
from .exceptions import DecodeError
from .protocol import QueryWasmRawRequest, QueryWasmSmartRequest

T = TypeVar("T")


@overload
async def query_wasm_smart(
    client: Client[Any, Any, Any],
    contract: str,
    msg: Any,
    height: int | None = ...,
    decoder: None = ...,
) -> Any: ...


@overload
async def query_wasm_smart(
    client: Client[Any, Any, Any],
    contract: str,
    msg: Any,
    height: int | None = ...,
    decoder: Callable[[Any], T] = ...,
) -> T: ...


async def query_wasm_smart(
    client: Client[Any, Any, Any],
    contract: str,
    msg: Any,
    height: int | None = 0,
    decoder: Callable[[Any], Any] | None = None,
) -> Any:
    """Query a contract's own query interface and decode the returned data.

    ``msg`` is passed through untouched. ``decoder`` turns the response's
    ``data`` into the caller's type; without one the raw JSON value is returned.
    Every call is a fresh round trip.

    Raises:
        DecodeError: ``decoder`` rejected the returned data.
    """
    response = await client.query(QueryWasmSmartRequest(contract=contract, msg=msg), height)
    if decoder is None:
        return response.data
    try:
        return decoder(response.data)
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(
            f"Unexpected data from contract {contract}: {e!r}"
        ) from e


async def query_wasm_raw(
    client: Client[Any, Any, Any],
    contract: str,
    key: bytes,
    height: int | None = 0,
) -> bytes | None:
    """Read one raw storage slot of a contract; ``None`` if the slot is empty."""
    request = QueryWasmRawRequest(contract=contract, key=base64.b64encode(key).decode())
    response = await client.query(request, height)
    if response.value is None:
        return None
    try:
        return base64.b64decode(response.value, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Raw value of {contract} is not base64: {e}") from e
