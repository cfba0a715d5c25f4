"""pump.fun bonding-curve client: account layouts, pricing and buy instructions."""

from .accounts import BondingCurveAccount, CurveCompleteError, GlobalAccount, calculate_with_slippage_buy
from .provider import Provider, Signer, SignerRefusedError, ThrowawaySigner
from .sdk import (
    BondingCurveNotFoundError,
    BuyInstructions,
    GlobalAccountNotFoundError,
    PumpFunError,
    PumpFunSDK,
    bonding_curve_pda,
    global_account_pda,
)

__all__ = [
    "BondingCurveAccount",
    "BondingCurveNotFoundError",
    "BuyInstructions",
    "CurveCompleteError",
    "GlobalAccount",
    "GlobalAccountNotFoundError",
    "Provider",
    "PumpFunError",
    "PumpFunSDK",
    "Signer",
    "SignerRefusedError",
    "ThrowawaySigner",
    "bonding_curve_pda",
    "calculate_with_slippage_buy",
    "global_account_pda",
]
