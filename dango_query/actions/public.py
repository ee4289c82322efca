"""Public queries: chain state and account factory lookups."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..app_config import get_app_config
from ..client import Client, normalize_height
from ..exceptions import DecodeError, KeyNotFoundError
from ..interfaces.app_config import AppConfigProvider
from ..models import AccountResponse, AccountType, Coin, InfoResponse
from ..protocol import (
    QueryAccountRequest,
    QueryAccountsRequest,
    QueryBalanceRequest,
    QueryBalancesRequest,
    QueryCodeRequest,
    QueryCodesRequest,
    QueryInfoRequest,
    QuerySuppliesRequest,
    QuerySupplyRequest,
)
from ..wasm import query_wasm_smart
from . import _decoders

ADDRESSES_KEY = "addresses"
ACCOUNT_FACTORY_KEY = "account_factory"


# ---------------------------------------------------------------------------
# Account factory
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GetNextAccountAddressParameters:
    username: str
    account_type: AccountType | str
    height: int | None = 0


async def get_next_account_address(
    client: Client[Any, Any, Any],
    parameters: GetNextAccountAddressParameters,
    *,
    resolver: AppConfigProvider | None = None,
) -> str:
    """Predict the address the user's next account of the given type will get.

    The address depends only on the username, the account type and the
    user's existing account count, so it is stable until an account is created.

    Historical queries use the account factory address registered at
    ``height``, not the current one.
    """
    _decoders.check_non_empty("username", parameters.username)
    account_type = AccountType(parameters.account_type)
    height = normalize_height(parameters.height)

    addresses = await get_app_config(client, ADDRESSES_KEY, height, resolver)
    if not isinstance(addresses, Mapping):
        raise DecodeError(f"App config '{ADDRESSES_KEY}' is not an object")
    if ACCOUNT_FACTORY_KEY not in addresses:
        raise KeyNotFoundError(f"{ADDRESSES_KEY}.{ACCOUNT_FACTORY_KEY}")
    account_factory = _decoders.address(addresses[ACCOUNT_FACTORY_KEY])

    msg = {
        "next_account_address": {
            "username": parameters.username,
            "account_type": account_type.value,
        }
    }
    return await query_wasm_smart(
        client, account_factory, msg, height, decoder=_decoders.address
    )


# ---------------------------------------------------------------------------
# Chain-level queries
# ---------------------------------------------------------------------------


async def get_chain_info(client: Client[Any, Any, Any], height: int | None = 0) -> InfoResponse:
    return await client.query(QueryInfoRequest(), height)


async def get_balance(
    client: Client[Any, Any, Any], address: str, denom: str, height: int | None = 0
) -> Coin:
    return await client.query(QueryBalanceRequest(address=address, denom=denom), height)


async def get_balances(
    client: Client[Any, Any, Any],
    address: str,
    start_after: str | None = None,
    limit: int | None = None,
    height: int | None = 0,
) -> list[Coin]:
    _decoders.check_limit(limit)
    request = QueryBalancesRequest(address=address, start_after=start_after, limit=limit)
    return await client.query(request, height)


async def get_supply(client: Client[Any, Any, Any], denom: str, height: int | None = 0) -> Coin:
    return await client.query(QuerySupplyRequest(denom=denom), height)


async def get_supplies(
    client: Client[Any, Any, Any],
    start_after: str | None = None,
    limit: int | None = None,
    height: int | None = 0,
) -> list[Coin]:
    _decoders.check_limit(limit)
    return await client.query(QuerySuppliesRequest(start_after=start_after, limit=limit), height)


async def get_code(client: Client[Any, Any, Any], hash: str, height: int | None = 0) -> bytes:
    """Fetch the wasm byte code stored under ``hash``."""
    return await client.query(QueryCodeRequest(hash=hash), height)


async def get_codes(
    client: Client[Any, Any, Any],
    start_after: str | None = None,
    limit: int | None = None,
    height: int | None = 0,
) -> list[str]:
    _decoders.check_limit(limit)
    return await client.query(QueryCodesRequest(start_after=start_after, limit=limit), height)


async def get_contract_info(
    client: Client[Any, Any, Any], address: str, height: int | None = 0
) -> AccountResponse:
    return await client.query(QueryAccountRequest(address=address), height)


async def get_contracts_info(
    client: Client[Any, Any, Any],
    start_after: str | None = None,
    limit: int | None = None,
    height: int | None = 0,
) -> list[AccountResponse]:
    _decoders.check_limit(limit)
    return await client.query(QueryAccountsRequest(start_after=start_after, limit=limit), height)
