"""Token factory queries: denom admins."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..app_config import get_app_config
from ..client import Client, normalize_height
from ..exceptions import NotFoundError
from ..interfaces.app_config import AppConfigProvider
from ..wasm import query_wasm_smart
from . import _decoders

logger = logging.getLogger(__name__)

TOKEN_FACTORY_KEY = "token_factory"


@dataclass(frozen=True)
class GetTokenAdminParameters:
    denom: str
    height: int | None = 0


@dataclass(frozen=True)
class GetAllTokenAdminsParameters:
    start_after: str | None = None
    limit: int | None = None
    height: int | None = 0


async def _token_factory(
    client: Client[Any, Any, Any], height: int, resolver: AppConfigProvider | None
) -> str:
    contract = await get_app_config(client, TOKEN_FACTORY_KEY, height, resolver)
    return _decoders.address(contract)


async def get_token_admin(
    client: Client[Any, Any, Any],
    parameters: GetTokenAdminParameters,
    *,
    resolver: AppConfigProvider | None = None,
) -> str:
    """Get the admin address of a denom.

    Historical queries use the token factory address registered at
    ``height``, not the current one.

    Raises:
        NotFoundError: the denom has no admin at ``height``.
    """
    _decoders.check_non_empty("denom", parameters.denom)
    height = normalize_height(parameters.height)

    contract = await _token_factory(client, height, resolver)
    msg = {"admin": {"denom": parameters.denom}}
    admin = await query_wasm_smart(
        client, contract, msg, height, decoder=_decoders.optional_address
    )
    if admin is None:
        raise NotFoundError(f"Denom '{parameters.denom}' has no admin")
    return admin


async def get_all_token_admins(
    client: Client[Any, Any, Any],
    parameters: GetAllTokenAdminsParameters | None = None,
    *,
    resolver: AppConfigProvider | None = None,
) -> dict[str, str]:
    """Enumerate denoms and their admin addresses, one page at a time.

    Entries come back in the node's order; pass the last denom as
    ``start_after`` to fetch the next page.
    """
    if parameters is None:
        parameters = GetAllTokenAdminsParameters()
    _decoders.check_limit(parameters.limit)
    height = normalize_height(parameters.height)

    contract = await _token_factory(client, height, resolver)
    page: dict[str, Any] = {}
    if parameters.start_after is not None:
        page["start_after"] = parameters.start_after
    if parameters.limit is not None:
        page["limit"] = parameters.limit

    admins = await query_wasm_smart(
        client, contract, {"admins": page}, height, decoder=_decoders.address_map
    )
    logger.debug("Fetched %d token admins", len(admins))
    return admins
