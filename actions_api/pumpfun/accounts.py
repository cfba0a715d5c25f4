"""On-chain account layouts of the pump.fun program and bonding-curve math."""

from __future__ import annotations

from construct import Bytes, Flag, Int64ul, Struct
from solders.pubkey import Pubkey

from .constants import BASIS_POINTS_DENOMINATOR

DISCRIMINATOR_SIZE = 8


class CurveCompleteError(Exception):
    """Raised when pricing a buy against a bonding curve that has migrated."""


class GlobalAccount:
    _STRUCT = Struct(
        "initialized" / Flag,
        "authority" / Bytes(32),
        "fee_recipient" / Bytes(32),
        "initial_virtual_token_reserves" / Int64ul,
        "initial_virtual_sol_reserves" / Int64ul,
        "initial_real_token_reserves" / Int64ul,
        "token_total_supply" / Int64ul,
        "fee_basis_points" / Int64ul,
    )

    def __init__(
        self,
        *,
        initialized: bool,
        authority: bytes,
        fee_recipient: bytes,
        initial_virtual_token_reserves: int,
        initial_virtual_sol_reserves: int,
        initial_real_token_reserves: int,
        token_total_supply: int,
        fee_basis_points: int,
    ) -> None:
        self.initialized = initialized
        self.authority = Pubkey.from_bytes(authority)
        self.fee_recipient = Pubkey.from_bytes(fee_recipient)
        self.initial_virtual_token_reserves = initial_virtual_token_reserves
        self.initial_virtual_sol_reserves = initial_virtual_sol_reserves
        self.initial_real_token_reserves = initial_real_token_reserves
        self.token_total_supply = token_total_supply
        self.fee_basis_points = fee_basis_points

    @classmethod
    def from_bytes(cls, data: bytes) -> "GlobalAccount":
        parsed = cls._STRUCT.parse(data[DISCRIMINATOR_SIZE:])
        return cls(**{key: value for key, value in parsed.items() if not key.startswith("_")})

    def get_initial_buy_price(self, amount: int) -> int:
        """Tokens received for ``amount`` lamports on a freshly created curve."""

        if amount <= 0:
            return 0
        n = self.initial_virtual_sol_reserves * self.initial_virtual_token_reserves
        i = self.initial_virtual_sol_reserves + amount
        r = n // i + 1
        s = self.initial_virtual_token_reserves - r
        return min(s, self.initial_real_token_reserves)


class BondingCurveAccount:
    _STRUCT = Struct(
        "virtual_token_reserves" / Int64ul,
        "virtual_sol_reserves" / Int64ul,
        "real_token_reserves" / Int64ul,
        "real_sol_reserves" / Int64ul,
        "token_total_supply" / Int64ul,
        "complete" / Flag,
    )

    def __init__(
        self,
        *,
        virtual_token_reserves: int,
        virtual_sol_reserves: int,
        real_token_reserves: int,
        real_sol_reserves: int,
        token_total_supply: int,
        complete: bool,
    ) -> None:
        self.virtual_token_reserves = virtual_token_reserves
        self.virtual_sol_reserves = virtual_sol_reserves
        self.real_token_reserves = real_token_reserves
        self.real_sol_reserves = real_sol_reserves
        self.token_total_supply = token_total_supply
        self.complete = complete

    @classmethod
    def from_bytes(cls, data: bytes) -> "BondingCurveAccount":
        parsed = cls._STRUCT.parse(data[DISCRIMINATOR_SIZE:])
        return cls(**{key: value for key, value in parsed.items() if not key.startswith("_")})

    def get_buy_price(self, amount: int) -> int:
        """Tokens received for spending ``amount`` lamports on this curve."""

        if self.complete:
            raise CurveCompleteError("Curve is complete")
        if amount <= 0:
            return 0

        n = self.virtual_sol_reserves * self.virtual_token_reserves
        i = self.virtual_sol_reserves + amount
        r = n // i + 1
        s = self.virtual_token_reserves - r
        return min(s, self.real_token_reserves)

    def get_market_cap_sol(self) -> int:
        if self.virtual_token_reserves == 0:
            return 0
        return self.token_total_supply * self.virtual_sol_reserves // self.virtual_token_reserves


def calculate_with_slippage_buy(amount: int, basis_points: int) -> int:
    """Upper bound on lamports spent once ``basis_points`` of slippage are allowed."""

    return amount + amount * basis_points // BASIS_POINTS_DENOMINATOR
