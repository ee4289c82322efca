"""Query protocol: the closed set of request variants and their responses.

Every request variant is a frozen dataclass carrying a class-level wire ``tag``
and the decoder for its matching response payload, so a request cannot exist
without its response half. On the wire a request is ``{tag: payload}`` and a
response is ``{tag: payload}`` with the same tag.
"""
from __future__ import annotations

import base64
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Generic, TypeVar, Union

from .exceptions import DecodeError, ProtocolError
from .models import (
    AccountResponse,
    BlockInfo,
    Coin,
    InfoResponse,
    NodeConfig,
    WasmRawResponse,
    WasmSmartResponse,
)

R = TypeVar("R")


# ---------------------------------------------------------------------------
# Payload decoders
# ---------------------------------------------------------------------------


def _mapping(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected {what} object, got {type(payload).__name__}")
    return payload


def _list(payload: Any, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise DecodeError(f"Expected list of {what}, got {type(payload).__name__}")
    return payload


def _str(payload: Any, what: str) -> str:
    if not isinstance(payload, str):
        raise DecodeError(f"Expected {what} string, got {type(payload).__name__}")
    return payload


def _amount(payload: Any) -> int:
    """Amounts are integer strings on the wire; plain integers are accepted too."""
    if isinstance(payload, bool) or not isinstance(payload, (str, int)):
        raise DecodeError(f"Expected integer amount, got {payload!r}")
    if isinstance(payload, str) and not payload.isdigit():
        raise DecodeError(f"Expected integer amount, got {payload!r}")
    return int(payload)


def decode_coin(payload: Any) -> Coin:
    raw = _mapping(payload, "coin")
    return Coin(denom=_str(raw["denom"], "denom"), amount=_amount(raw["amount"]))


def decode_coins(payload: Any) -> list[Coin]:
    """Decode a coin list; a ``{denom: amount}`` map is accepted as well."""
    if isinstance(payload, dict):
        return [
            Coin(denom=_str(denom, "denom"), amount=_amount(amount))
            for denom, amount in payload.items()
        ]
    return [decode_coin(item) for item in _list(payload, "coins")]


def decode_account(payload: Any) -> AccountResponse:
    raw = _mapping(payload, "account")
    return AccountResponse(
        address=_str(raw["address"], "address"),
        code_hash=_str(raw["code_hash"], "code hash"),
        admin=raw.get("admin"),
    )


def decode_info(payload: Any) -> InfoResponse:
    raw = _mapping(payload, "info")
    config = _mapping(raw["config"], "config")
    block = _mapping(raw["last_finalized_block"], "block info")
    return InfoResponse(
        chain_id=_str(raw["chain_id"], "chain id"),
        config=NodeConfig(bank=_str(config["bank"], "bank"), owner=config.get("owner")),
        last_finalized_block=BlockInfo(
            height=int(block["height"]), timestamp=int(block["timestamp"])
        ),
    )


# ---------------------------------------------------------------------------
# Request variants
# ---------------------------------------------------------------------------


class Request(Generic[R]):
    """Base of every request variant; ``R`` is the decoded response type."""

    tag: ClassVar[str] = ""

    def to_payload(self) -> dict[str, Any]:
        """Variant parameters with unset optional fields omitted."""
        return {k: v for k, v in asdict(self).items() if v is not None}  # type: ignore[call-overload]

    @staticmethod
    def decode(payload: Any) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class QueryInfoRequest(Request[InfoResponse]):
    tag: ClassVar[str] = "info"

    @staticmethod
    def decode(payload: Any) -> InfoResponse:
        return decode_info(payload)


@dataclass(frozen=True)
class QueryBalanceRequest(Request[Coin]):
    tag: ClassVar[str] = "balance"
    address: str
    denom: str

    @staticmethod
    def decode(payload: Any) -> Coin:
        return decode_coin(payload)


@dataclass(frozen=True)
class QueryBalancesRequest(Request[list[Coin]]):
    tag: ClassVar[str] = "balances"
    address: str
    start_after: str | None = None
    limit: int | None = None

    @staticmethod
    def decode(payload: Any) -> list[Coin]:
        return decode_coins(payload)


@dataclass(frozen=True)
class QuerySupplyRequest(Request[Coin]):
    tag: ClassVar[str] = "supply"
    denom: str

    @staticmethod
    def decode(payload: Any) -> Coin:
        return decode_coin(payload)


@dataclass(frozen=True)
class QuerySuppliesRequest(Request[list[Coin]]):
    tag: ClassVar[str] = "supplies"
    start_after: str | None = None
    limit: int | None = None

    @staticmethod
    def decode(payload: Any) -> list[Coin]:
        return decode_coins(payload)


@dataclass(frozen=True)
class QueryCodeRequest(Request[bytes]):
    tag: ClassVar[str] = "code"
    hash: str

    @staticmethod
    def decode(payload: Any) -> bytes:
        return base64.b64decode(_str(payload, "code"), validate=True)


@dataclass(frozen=True)
class QueryCodesRequest(Request[list[str]]):
    tag: ClassVar[str] = "codes"
    start_after: str | None = None
    limit: int | None = None

    @staticmethod
    def decode(payload: Any) -> list[str]:
        return [_str(item, "code hash") for item in _list(payload, "code hashes")]


@dataclass(frozen=True)
class QueryAccountRequest(Request[AccountResponse]):
    tag: ClassVar[str] = "account"
    address: str

    @staticmethod
    def decode(payload: Any) -> AccountResponse:
        return decode_account(payload)


@dataclass(frozen=True)
class QueryAccountsRequest(Request[list[AccountResponse]]):
    tag: ClassVar[str] = "accounts"
    start_after: str | None = None
    limit: int | None = None

    @staticmethod
    def decode(payload: Any) -> list[AccountResponse]:
        return [decode_account(item) for item in _list(payload, "accounts")]


@dataclass(frozen=True)
class QueryWasmRawRequest(Request[WasmRawResponse]):
    """Raw storage read; ``key`` is base64 encoded."""

    tag: ClassVar[str] = "wasm_raw"
    contract: str
    key: str

    @staticmethod
    def decode(payload: Any) -> WasmRawResponse:
        raw = _mapping(payload, "wasm raw")
        return WasmRawResponse(
            contract=_str(raw["contract"], "contract"),
            key=_str(raw["key"], "key"),
            value=raw.get("value"),
        )


@dataclass(frozen=True)
class QueryWasmSmartRequest(Request[WasmSmartResponse]):
    tag: ClassVar[str] = "wasm_smart"
    contract: str
    msg: Any

    @staticmethod
    def decode(payload: Any) -> WasmSmartResponse:
        raw = _mapping(payload, "wasm smart")
        return WasmSmartResponse(contract=_str(raw["contract"], "contract"), data=raw["data"])


@dataclass(frozen=True)
class QueryAppConfigRequest(Request[dict[str, Any]]):
    tag: ClassVar[str] = "app_config"

    @staticmethod
    def decode(payload: Any) -> dict[str, Any]:
        return _mapping(payload, "app config")


QueryRequest = Union[
    QueryInfoRequest,
    QueryBalanceRequest,
    QueryBalancesRequest,
    QuerySupplyRequest,
    QuerySuppliesRequest,
    QueryCodeRequest,
    QueryCodesRequest,
    QueryAccountRequest,
    QueryAccountsRequest,
    QueryWasmRawRequest,
    QueryWasmSmartRequest,
    QueryAppConfigRequest,
]

REQUEST_TYPES: dict[str, type[Request[Any]]] = {
    cls.tag: cls
    for cls in (
        QueryInfoRequest,
        QueryBalanceRequest,
        QueryBalancesRequest,
        QuerySupplyRequest,
        QuerySuppliesRequest,
        QueryCodeRequest,
        QueryCodesRequest,
        QueryAccountRequest,
        QueryAccountsRequest,
        QueryWasmRawRequest,
        QueryWasmSmartRequest,
        QueryAppConfigRequest,
    )
}


def _check_variants() -> None:
    for tag, cls in REQUEST_TYPES.items():
        if not tag:
            raise TypeError(f"{cls.__name__} has no wire tag")
        if cls.decode is Request.decode:
            raise TypeError(f"{cls.__name__} declares no response decoder")


_check_variants()


# ---------------------------------------------------------------------------
# Wire encoding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QueryResponse:
    """A response as received: its variant tag and undecoded payload."""

    tag: str
    payload: Any

    @classmethod
    def from_wire(cls, raw: Any) -> QueryResponse:
        if not isinstance(raw, dict) or len(raw) != 1:
            raise ProtocolError(
                f"Response must hold exactly one variant, got {raw!r:.200}"
            )
        ((tag, payload),) = raw.items()
        if tag not in REQUEST_TYPES:
            raise ProtocolError(f"Unknown response variant '{tag}'", received=tag)
        return cls(tag=tag, payload=payload)


def encode_request(request: Request[Any]) -> dict[str, Any]:
    if type(request).tag not in REQUEST_TYPES:
        raise TypeError(f"Not a query request variant: {request!r}")
    return {request.tag: request.to_payload()}


def decode_response(request: Request[R], raw: Any) -> R:
    """Check the response variant against the request and decode its payload."""
    response = QueryResponse.from_wire(raw)
    if response.tag != request.tag:
        raise ProtocolError(
            f"Requested '{request.tag}' but node answered '{response.tag}'",
            expected=request.tag,
            received=response.tag,
        )
    try:
        return request.decode(response.payload)
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Malformed '{request.tag}' response: {e!r}") from e
