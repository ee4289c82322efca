"""Action functions: narrow, typed queries built on the smart-query primitive."""
from .public import (
    GetNextAccountAddressParameters,
    get_balance,
    get_balances,
    get_chain_info,
    get_code,
    get_codes,
    get_contract_info,
    get_contracts_info,
    get_next_account_address,
    get_supplies,
    get_supply,
)
from .safe import GetVotesForProposalParameters, get_votes_for_proposal
from .token_factory import (
    GetAllTokenAdminsParameters,
    GetTokenAdminParameters,
    get_all_token_admins,
    get_token_admin,
)

__all__ = [
    "GetAllTokenAdminsParameters",
    "GetNextAccountAddressParameters",
    "GetTokenAdminParameters",
    "GetVotesForProposalParameters",
    "get_all_token_admins",
    "get_balance",
    "get_balances",
    "get_chain_info",
    "get_code",
    "get_codes",
    "get_contract_info",
    "get_contracts_info",
    "get_next_account_address",
    "get_supplies",
    "get_supply",
    "get_token_admin",
    "get_votes_for_proposal",
]
