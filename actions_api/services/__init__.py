from .actions_service import ActionsService
from .amounts import LAMPORTS_PER_SOL, sol_to_lamports
from .token_info import fetch_token_info, get_asset
from .transaction import compute_budget_instructions, encode_transaction, prepare_transaction

__all__ = [
    "ActionsService",
    "LAMPORTS_PER_SOL",
    "compute_budget_instructions",
    "encode_transaction",
    "fetch_token_info",
    "get_asset",
    "prepare_transaction",
    "sol_to_lamports",
]
