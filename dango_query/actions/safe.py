"""Safe (multisig) account queries."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..client import Client, normalize_height
from ..models import Vote
from ..wasm import query_wasm_smart
from . import _decoders


@dataclass(frozen=True)
class GetVotesForProposalParameters:
    address: str
    proposal_id: int
    height: int | None = 0


async def get_votes_for_proposal(
    client: Client[Any, Any, Any], parameters: GetVotesForProposalParameters
) -> dict[str, Vote]:
    """Get the votes cast on a proposal, keyed by voter username.

    The safe account is itself the contract queried, so no app config lookup
    is needed.
    """
    _decoders.check_non_empty("address", parameters.address)
    proposal_id = parameters.proposal_id
    if isinstance(proposal_id, bool) or not isinstance(proposal_id, int) or proposal_id < 0:
        raise ValueError(f"proposal_id must be a non-negative integer, got {proposal_id!r}")
    height = normalize_height(parameters.height)

    msg = {"votes": {"proposal_id": proposal_id}}
    return await query_wasm_smart(
        client, parameters.address, msg, height, decoder=_decoders.vote_map
    )
