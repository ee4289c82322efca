"""Typed query client for Dango chain and contract state."""
from .app_config import AppConfigResolver, StaticAppConfig, get_app_config
from .client import Chain, Client, create_client, normalize_height
from .exceptions import (
    DecodeError,
    KeyNotFoundError,
    NodeError,
    NotFoundError,
    ProtocolError,
    QueryError,
    TransportError,
)
from .wasm import query_wasm_raw, query_wasm_smart

__all__ = [
    "AppConfigResolver",
    "Chain",
    "Client",
    "DecodeError",
    "KeyNotFoundError",
    "NodeError",
    "NotFoundError",
    "ProtocolError",
    "QueryError",
    "StaticAppConfig",
    "TransportError",
    "create_client",
    "get_app_config",
    "normalize_height",
    "query_wasm_raw",
    "query_wasm_smart",
]
