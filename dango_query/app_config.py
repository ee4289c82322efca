"""App config resolution: the registry of well-known contract addresses.

A resolver fetches the registry at most once per (client, height) during its
lifetime. Registry contents at a given height never change, so entries do not
expire; height 0 ("latest") is cached like any other height, which means a
resolver should be scoped to one logical operation rather than kept around
for the life of the process.
"""
from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Mapping
from functools import partial
from typing import Any

from .client import Client, normalize_height
from .exceptions import KeyNotFoundError
from .interfaces.app_config import AppConfigProvider
from .protocol import QueryAppConfigRequest

logger = logging.getLogger(__name__)


def _project(registry: Mapping[str, Any], key: str | None) -> Any:
    if key is None:
        return copy.deepcopy(dict(registry))
    try:
        return copy.deepcopy(registry[key])
    except KeyError:
        raise KeyNotFoundError(key) from None


class AppConfigResolver:
    """Lazily fetches and caches the app config registry per (client, height).

    Concurrent lookups for the same pair share one in-flight fetch. A failed
    fetch is dropped from the cache so the next lookup tries again.
    """

    def __init__(self) -> None:
        self._fetches: dict[tuple[Client[Any, Any, Any], int], asyncio.Future[dict[str, Any]]] = {}

    async def get(
        self,
        client: Client[Any, Any, Any],
        key: str | None = None,
        height: int | None = 0,
    ) -> Any:
        """Return the whole registry, or the value stored under ``key``.

        Raises:
            KeyNotFoundError: ``key`` is not in the registry.
        """
        registry = await self._registry(client, normalize_height(height))
        return _project(registry, key)

    async def _registry(self, client: Client[Any, Any, Any], height: int) -> dict[str, Any]:
        cache_key = (client, height)
        fetch = self._fetches.get(cache_key)
        if fetch is None:
            fetch = asyncio.ensure_future(self._fetch(client, height))
            fetch.add_done_callback(partial(self._evict_failed, cache_key))
            self._fetches[cache_key] = fetch

        # A cancelled caller must not cancel a fetch other callers share.
        return await asyncio.shield(fetch)

    def _evict_failed(
        self,
        cache_key: tuple[Client[Any, Any, Any], int],
        fetch: asyncio.Future[dict[str, Any]],
    ) -> None:
        if fetch.cancelled() or fetch.exception() is not None:
            if self._fetches.get(cache_key) is fetch:
                del self._fetches[cache_key]

    @staticmethod
    async def _fetch(client: Client[Any, Any, Any], height: int) -> dict[str, Any]:
        logger.debug("Fetching app config at height %d", height)
        return await client.query(QueryAppConfigRequest(), height)


class StaticAppConfig:
    """In-memory registry with the resolver's interface; never touches the node."""

    def __init__(self, registry: Mapping[str, Any]) -> None:
        self._registry = copy.deepcopy(dict(registry))

    async def get(
        self,
        client: Client[Any, Any, Any],
        key: str | None = None,
        height: int | None = 0,
    ) -> Any:
        normalize_height(height)
        return _project(self._registry, key)


async def get_app_config(
    client: Client[Any, Any, Any],
    key: str | None = None,
    height: int | None = 0,
    resolver: AppConfigProvider | None = None,
) -> Any:
    """Resolve the app config (or one key of it) as of ``height``.

    Without a ``resolver`` a fresh :class:`AppConfigResolver` is used, so the
    lookup costs exactly one query.
    """
    if resolver is None:
        resolver = AppConfigResolver()
    return await resolver.get(client, key, height)
