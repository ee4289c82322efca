"""Shared test fixtures and sample data."""
from __future__ import annotations

import base64
import hashlib
import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest

from dango_query.client import Chain, Client
from dango_query.config import ChainConfig, SdkConfig
from dango_query.exceptions import NotFoundError

# ---------------------------------------------------------------------------
# Sample on-chain data
# ---------------------------------------------------------------------------

TOKEN_FACTORY = "0x7a0e3c1f2b5d8e9a4c6b1d0f3e2a5c8b7d9e0f1a"
ACCOUNT_FACTORY = "0x18d28bafcdf9d4574f920ea004dea2d13ec16f6b"
SAFE_ACCOUNT = "0xb3e2d4c6a8f0e1d3c5b7a9f8e6d4c2b0a1f3e5d7"

REGISTRY: dict[str, Any] = {
    "token_factory": TOKEN_FACTORY,
    "addresses": {
        "account_factory": ACCOUNT_FACTORY,
        "bank": "0xbank",
    },
    "minimum_deposit": {"uusdc": "10000000"},
}

TOKEN_ADMINS: dict[str, str] = {
    "uatom": "dango1atomadmin",
    "uusdc": "dango1abc",
    "uxyz": "dango1xyzadmin",
}

SAFE_VOTES: dict[int, dict[str, str]] = {
    1: {"alice": "yes", "bob": "no"},
}

SUPPLIES: dict[str, str] = {"uatom": "5000", "uusdc": "1000000"}

CODES: dict[str, bytes] = {
    "a1b2": b"\x00asm\x01\x00\x00\x00",
    "c3d4": b"\x00asm\x01\x00\x00\x01",
}

CONTRACTS: dict[str, dict[str, Any]] = {
    TOKEN_FACTORY: {"address": TOKEN_FACTORY, "code_hash": "a1b2", "admin": None},
    ACCOUNT_FACTORY: {"address": ACCOUNT_FACTORY, "code_hash": "c3d4", "admin": "0xowner"},
}


def derive_account_address(username: str, account_type: str, index: int) -> str:
    digest = hashlib.sha256(f"{username}/{account_type}/{index}".encode()).hexdigest()
    return "0x" + digest[:40]


class FakeDangoNode:
    """In-memory node answering encoded query requests like the real app does."""

    def __init__(self) -> None:
        self.registry = dict(REGISTRY)
        self.token_admins = dict(TOKEN_ADMINS)
        self.account_counts: dict[str, int] = {}

    def handle(self, request: dict[str, Any], height: int) -> dict[str, Any]:
        ((tag, payload),) = request.items()
        if tag == "app_config":
            return {"app_config": self.registry}
        if tag == "info":
            return {"info": self._info(height)}
        if tag == "balance":
            return {"balance": {"denom": payload["denom"], "amount": "1000"}}
        if tag == "supply":
            amount = SUPPLIES.get(payload["denom"], "0")
            return {"supply": {"denom": payload["denom"], "amount": amount}}
        if tag == "supplies":
            denoms = _page(SUPPLIES, payload)
            return {"supplies": [{"denom": d, "amount": SUPPLIES[d]} for d in denoms]}
        if tag == "code":
            if payload["hash"] not in CODES:
                raise NotFoundError(f"data not found: code {payload['hash']}")
            return {"code": base64.b64encode(CODES[payload["hash"]]).decode()}
        if tag == "codes":
            return {"codes": _page(CODES, payload)}
        if tag == "account":
            if payload["address"] not in CONTRACTS:
                raise NotFoundError(f"data not found: account {payload['address']}")
            return {"account": CONTRACTS[payload["address"]]}
        if tag == "accounts":
            return {"accounts": [CONTRACTS[a] for a in _page(CONTRACTS, payload)]}
        if tag == "wasm_smart":
            data = self._smart(payload["contract"], payload["msg"])
            return {"wasm_smart": {"contract": payload["contract"], "data": data}}
        raise NotImplementedError(tag)

    def _info(self, height: int) -> dict[str, Any]:
        return {
            "chain_id": "dev-6",
            "config": {"owner": "0xowner", "bank": "0xbank"},
            "last_finalized_block": {"height": str(height or 42), "timestamp": "1700000000"},
        }

    def _smart(self, contract: str, msg: dict[str, Any]) -> Any:
        if contract == TOKEN_FACTORY and "admin" in msg:
            denom = msg["admin"]["denom"]
            if denom not in self.token_admins:
                raise NotFoundError(f"data not found: admin of {denom}")
            return self.token_admins[denom]
        if contract == TOKEN_FACTORY and "admins" in msg:
            start_after = msg["admins"].get("start_after")
            limit = msg["admins"].get("limit", 30)
            denoms = [d for d in sorted(self.token_admins) if start_after is None or d > start_after]
            return {d: self.token_admins[d] for d in denoms[:limit]}
        if contract == ACCOUNT_FACTORY and "next_account_address" in msg:
            params = msg["next_account_address"]
            index = self.account_counts.get(params["username"], 0)
            return derive_account_address(params["username"], params["account_type"], index)
        if contract == SAFE_ACCOUNT and "votes" in msg:
            return SAFE_VOTES.get(msg["votes"]["proposal_id"], {})
        raise NotFoundError(f"contract {contract} has no answer for {msg}")


def _page(items: dict[str, Any], params: dict[str, Any]) -> list[str]:
    start_after = params.get("start_after")
    keys = [k for k in sorted(items) if start_after is None or k > start_after]
    return keys[: params.get("limit", 30)]


class FakeTransport:
    """Transport that answers through a handler and records every call."""

    def __init__(self, handler: Callable[[dict[str, Any], int], Any]) -> None:
        self.handler = handler
        self.calls: list[tuple[dict[str, Any], int]] = []

    async def execute(self, request: dict[str, Any], height: int) -> Any:
        self.calls.append((request, height))
        return self.handler(request, height)

    def calls_for(self, tag: str) -> list[tuple[dict[str, Any], int]]:
        return [(req, height) for req, height in self.calls if tag in req]


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def node() -> FakeDangoNode:
    return FakeDangoNode()


@pytest.fixture()
def transport(node: FakeDangoNode) -> FakeTransport:
    return FakeTransport(node.handle)


@pytest.fixture()
def client(transport: FakeTransport) -> Client:
    return Client(transport, Chain(id="dev-6"))


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        chain_id="dev-6",
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_sdk_config(sample_chain_config: ChainConfig) -> SdkConfig:
    return SdkConfig(chain=sample_chain_config)


SAMPLE_YAML = textwrap.dedent("""\
    chain:
      chain_id: dev-6
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    app_config:
      token_factory: "0xtoken"
      addresses:
        account_factory: "0xfactory"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
