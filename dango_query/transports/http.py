"""CometBFT RPC transport with endpoint fallback."""
from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import ChainConfig
from ..exceptions import DecodeError, NodeError, NotFoundError, TransportError

logger = logging.getLogger(__name__)

APP_QUERY_PATH = "/app"


class HttpTransport:
    """Sends app queries to a node as ``abci_query`` JSON-RPC calls.

    Endpoints are tried in order starting from the last one that answered.
    Only connectivity failures move on to the next endpoint; a node-level
    rejection of the query itself is returned to the caller as is.
    """

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Make RPC call with fallback to alternative endpoints."""
        if not self.endpoints:
            raise TransportError("No RPC endpoints configured")

        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        result = await response.json()
                        if not isinstance(result, dict):
                            raise DecodeError(f"RPC reply is not an object: {result!r:.200}")
                        if "error" in result:
                            raise TransportError(f"RPC Error: {result['error']}")

                        if rpc_index != self.current_rpc_index:
                            logger.info("Switched to RPC endpoint: %s", rpc_url)
                            self.current_rpc_index = rpc_index

                        rpc_result = result.get("result")
                        if not isinstance(rpc_result, dict):
                            raise DecodeError(f"RPC result is not an object: {rpc_result!r:.200}")
                        return rpc_result
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError, TransportError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

        raise TransportError(f"All RPC endpoints failed. Last error: {last_error}")

    async def execute(self, request: dict[str, Any], height: int) -> dict[str, Any]:
        """Run one encoded query request at ``height`` (0 = latest)."""
        data = json.dumps(request, separators=(",", ":")).encode()
        result = await self.rpc_call(
            "abci_query",
            {
                "path": APP_QUERY_PATH,
                "data": data.hex(),
                "height": str(height),
                "prove": False,
            },
        )

        response = result.get("response")
        if not isinstance(response, dict):
            raise DecodeError(f"ABCI response is not an object: {response!r:.200}")
        try:
            code = int(response.get("code") or 0)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"ABCI response code is not an integer: {e}") from e
        if code != 0:
            log = str(response.get("log") or "")
            if "not found" in log.lower():
                raise NotFoundError(log)
            raise NodeError(f"Query rejected by node: {log}", code=code)

        value = response.get("value")
        if value is None:
            raise DecodeError("Node returned an empty query response")
        try:
            return json.loads(base64.b64decode(value))
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Query response is not valid JSON: {e}") from e
