"""Value types shared by requests, responses and actions; all frozen."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int


@dataclass(frozen=True)
class BlockInfo:
    height: int
    timestamp: int


@dataclass(frozen=True)
class NodeConfig:
    """Chain-level configuration reported by the ``info`` query."""

    bank: str
    owner: str | None = None


@dataclass(frozen=True)
class InfoResponse:
    chain_id: str
    config: NodeConfig
    last_finalized_block: BlockInfo


@dataclass(frozen=True)
class AccountResponse:
    address: str
    code_hash: str
    admin: str | None = None


@dataclass(frozen=True)
class WasmRawResponse:
    contract: str
    key: str
    value: str | None = None


@dataclass(frozen=True)
class WasmSmartResponse:
    contract: str
    data: Any = None


class AccountType(str, Enum):
    SPOT = "spot"
    MARGIN = "margin"
    SAFE = "safe"


class Vote(str, Enum):
    YES = "yes"
    NO = "no"
