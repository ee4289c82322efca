"""App config provider protocol — contract registry lookup."""
from typing import Any, Protocol


class AppConfigProvider(Protocol):
    """Abstract interface for resolving the chain's app config registry."""

    async def get(self, client: Any, key: str | None = None, height: int | None = 0) -> Any: ...
