"""Generic query client, parameterized over transport, chain and signer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from .config import SdkConfig
from .interfaces.signer import Signer
from .interfaces.transport import Transport
from .protocol import R, Request, decode_response, encode_request
from .transports.http import HttpTransport

logger = logging.getLogger(__name__)

TransportT = TypeVar("TransportT", bound=Transport)
ChainT = TypeVar("ChainT", bound="Chain | None")
SignerT = TypeVar("SignerT", bound="Signer | None")


@dataclass(frozen=True)
class Chain:
    """Identity of the chain a client talks to."""

    id: str
    name: str = ""


def normalize_height(height: int | None) -> int:
    """Return the wire height; ``None`` and ``0`` both mean latest."""
    if height is None:
        return 0
    if isinstance(height, bool) or not isinstance(height, int):
        raise ValueError(f"height must be a non-negative integer, got {height!r}")
    if height < 0:
        raise ValueError(f"height must be a non-negative integer, got {height}")
    return height


class Client(Generic[TransportT, ChainT, SignerT]):
    """Executes query requests through a transport and decodes the responses.

    The signer is only carried so write-side actions can share the same client
    value; queries never consult it. The client keeps no query state.
    """

    def __init__(
        self,
        transport: TransportT,
        chain: ChainT = None,  # type: ignore[assignment]
        signer: SignerT = None,  # type: ignore[assignment]
    ) -> None:
        self.transport = transport
        self.chain = chain
        self.signer = signer

    def __repr__(self) -> str:
        chain_id = self.chain.id if self.chain is not None else None
        return f"Client(transport={type(self.transport).__name__}, chain={chain_id!r})"

    async def query(self, request: Request[R], height: int | None = 0) -> R:
        """Execute one request variant and return its decoded response payload.

        Raises:
            TransportError: the node could not be reached.
            ProtocolError: the node answered with a different variant.
            NotFoundError: the entity does not exist at ``height``.
            DecodeError: the payload does not match the variant's shape.
        """
        wire_height = normalize_height(height)
        wire_request = encode_request(request)
        logger.debug("Query %s at height %d", request.tag, wire_height)

        raw = await self.transport.execute(wire_request, wire_height)
        return decode_response(request, raw)


def create_client(config: SdkConfig) -> Client[HttpTransport, Chain, None]:
    """Build a read-only client over HTTP from loaded configuration."""
    chain = Chain(id=config.chain.chain_id, name=config.chain.chain_id)
    return Client(HttpTransport(config.chain), chain)
