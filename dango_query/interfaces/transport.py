"""Transport protocol — the single operation the client needs from the network layer."""
from typing import Any, Protocol


class Transport(Protocol):
    """Executes one encoded query request against a node at a given height."""

    async def execute(self, request: dict[str, Any], height: int) -> dict[str, Any]: ...
