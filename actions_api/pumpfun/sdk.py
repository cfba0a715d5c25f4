"""Buy instruction builder for pump.fun bonding curves."""

from __future__ import annotations

import logging
from typing import List, Optional

from construct import ConstructError, Int64ul
from solana.rpc.commitment import Commitment
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.sysvar import RENT
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import create_associated_token_account, get_associated_token_address

from .accounts import BondingCurveAccount, CurveCompleteError, GlobalAccount, calculate_with_slippage_buy
from .constants import (
    BONDING_CURVE_SEED,
    BUY_DISCRIMINATOR,
    GLOBAL_ACCOUNT_SEED,
    PUMP_EVENT_AUTHORITY,
    PUMP_PROGRAM_ID,
)
from .provider import Provider

logger = logging.getLogger(__name__)


class PumpFunError(Exception):
    """Error raised while reading pump.fun accounts or building instructions."""


class BondingCurveNotFoundError(PumpFunError):
    def __init__(self, mint: Pubkey) -> None:
        super().__init__(f"Bonding curve account not found for mint {mint}")
        self.mint = mint


class GlobalAccountNotFoundError(PumpFunError):
    def __init__(self) -> None:
        super().__init__("pump.fun global account not found")


class BuyInstructions:
    """Ordered instructions for a single buy, plus the amounts they encode."""

    def __init__(self, instructions: List[Instruction], token_amount: int, max_sol_cost: int) -> None:
        self.instructions = instructions
        self.token_amount = token_amount
        self.max_sol_cost = max_sol_cost


def global_account_pda() -> Pubkey:
    return Pubkey.find_program_address([GLOBAL_ACCOUNT_SEED], PUMP_PROGRAM_ID)[0]


def bonding_curve_pda(mint: Pubkey) -> Pubkey:
    return Pubkey.find_program_address([BONDING_CURVE_SEED, bytes(mint)], PUMP_PROGRAM_ID)[0]


def encode_buy_data(token_amount: int, max_sol_cost: int) -> bytes:
    try:
        return BUY_DISCRIMINATOR + Int64ul.build(token_amount) + Int64ul.build(max_sol_cost)
    except ConstructError as exc:
        raise PumpFunError(
            f"buy amounts do not fit in u64 (tokens={token_amount}, max_sol_cost={max_sol_cost})"
        ) from exc


class PumpFunSDK:
    def __init__(self, provider: Provider) -> None:
        self.provider = provider
        self.connection = provider.connection

    async def get_global_account(self, commitment: Optional[Commitment] = None) -> GlobalAccount:
        response = await self.connection.get_account_info(
            global_account_pda(), commitment=commitment or self.provider.commitment
        )
        if response.value is None:
            raise GlobalAccountNotFoundError()
        try:
            return GlobalAccount.from_bytes(bytes(response.value.data))
        except ConstructError as exc:
            raise PumpFunError(f"malformed global account: {exc}") from exc

    async def get_bonding_curve_account(
        self, mint: Pubkey, commitment: Optional[Commitment] = None
    ) -> Optional[BondingCurveAccount]:
        response = await self.connection.get_account_info(
            bonding_curve_pda(mint), commitment=commitment or self.provider.commitment
        )
        if response.value is None:
            return None
        try:
            return BondingCurveAccount.from_bytes(bytes(response.value.data))
        except ConstructError as exc:
            raise PumpFunError(f"malformed bonding curve account for {mint}: {exc}") from exc

    async def get_buy_instructions_by_sol_amount(
        self,
        buyer: Pubkey,
        mint: Pubkey,
        buy_amount_sol: int,
        slippage_basis_points: int = 500,
        commitment: Optional[Commitment] = None,
    ) -> BuyInstructions:
        """Instructions spending ``buy_amount_sol`` lamports on ``mint``.

        The token amount is priced off the current curve reserves and the SOL
        side is capped at ``buy_amount_sol`` plus ``slippage_basis_points``.
        """

        bonding_curve = await self.get_bonding_curve_account(mint, commitment)
        if bonding_curve is None:
            raise BondingCurveNotFoundError(mint)

        try:
            token_amount = bonding_curve.get_buy_price(buy_amount_sol)
        except CurveCompleteError as exc:
            raise PumpFunError(f"bonding curve for {mint} is complete") from exc
        max_sol_cost = calculate_with_slippage_buy(buy_amount_sol, slippage_basis_points)

        global_account = await self.get_global_account(commitment)

        logger.debug(
            "Pricing pump.fun buy",
            extra={"mint": str(mint), "lamports": buy_amount_sol, "tokens": token_amount, "max_sol_cost": max_sol_cost},
        )
        instructions = await self.get_buy_instructions(
            buyer,
            mint,
            global_account.fee_recipient,
            token_amount,
            max_sol_cost,
            commitment,
        )
        return BuyInstructions(instructions, token_amount, max_sol_cost)

    async def get_buy_instructions(
        self,
        buyer: Pubkey,
        mint: Pubkey,
        fee_recipient: Pubkey,
        amount: int,
        sol_amount: int,
        commitment: Optional[Commitment] = None,
    ) -> List[Instruction]:
        data = encode_buy_data(amount, sol_amount)

        bonding_curve = bonding_curve_pda(mint)
        associated_bonding_curve = get_associated_token_address(bonding_curve, mint)
        associated_user = get_associated_token_address(buyer, mint)

        instructions: List[Instruction] = []

        response = await self.connection.get_account_info(
            associated_user, commitment=commitment or self.provider.commitment
        )
        if response.value is None:
            instructions.append(create_associated_token_account(buyer, buyer, mint))

        accounts = [
            AccountMeta(global_account_pda(), is_signer=False, is_writable=False),
            AccountMeta(fee_recipient, is_signer=False, is_writable=True),
            AccountMeta(mint, is_signer=False, is_writable=False),
            AccountMeta(bonding_curve, is_signer=False, is_writable=True),
            AccountMeta(associated_bonding_curve, is_signer=False, is_writable=True),
            AccountMeta(associated_user, is_signer=False, is_writable=True),
            AccountMeta(buyer, is_signer=True, is_writable=True),
            AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(RENT, is_signer=False, is_writable=False),
            AccountMeta(PUMP_EVENT_AUTHORITY, is_signer=False, is_writable=False),
            AccountMeta(PUMP_PROGRAM_ID, is_signer=False, is_writable=False),
        ]
        instructions.append(Instruction(PUMP_PROGRAM_ID, data, accounts))
        return instructions
