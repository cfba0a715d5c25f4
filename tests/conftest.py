from __future__ import annotations

from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from actions_api.config import Settings
from actions_api.pumpfun.accounts import BondingCurveAccount, GlobalAccount

RPC_URL = "http://rpc.test"

ASSET_RESULT = {
    "interface": "FungibleToken",
    "id": "",
    "content": {
        "metadata": {
            "name": "Test Token",
            "symbol": "TEST",
            "description": "A token used in tests",
        },
        "links": {"image": "https://example.com/test.png"},
    },
}

# Reserves of a freshly launched pump.fun curve
FRESH_CURVE = {
    "virtual_token_reserves": 1_073_000_000_000_000,
    "virtual_sol_reserves": 30_000_000_000,
    "real_token_reserves": 793_100_000_000_000,
    "real_sol_reserves": 0,
    "token_total_supply": 1_000_000_000_000_000,
    "complete": False,
}


def account_data(struct, values: dict) -> bytes:
    return bytes(8) + struct.build(values)


def bonding_curve_data(**overrides) -> bytes:
    return account_data(BondingCurveAccount._STRUCT, {**FRESH_CURVE, **overrides})


def global_data(fee_recipient: Pubkey, authority: Optional[Pubkey] = None) -> bytes:
    return account_data(
        GlobalAccount._STRUCT,
        {
            "initialized": True,
            "authority": bytes(authority or Pubkey.new_unique()),
            "fee_recipient": bytes(fee_recipient),
            "initial_virtual_token_reserves": FRESH_CURVE["virtual_token_reserves"],
            "initial_virtual_sol_reserves": FRESH_CURVE["virtual_sol_reserves"],
            "initial_real_token_reserves": FRESH_CURVE["real_token_reserves"],
            "token_total_supply": FRESH_CURVE["token_total_supply"],
            "fee_basis_points": 100,
        },
    )


class FakeConnection:
    """Stands in for ``solana.rpc.async_api.AsyncClient``."""

    def __init__(self, accounts: Optional[Dict[Pubkey, bytes]] = None, blockhash: Optional[Hash] = None) -> None:
        self.accounts = dict(accounts or {})
        self.blockhash = blockhash or Hash.new_unique()
        self.calls: List[tuple] = []
        self.closed = False

    async def get_account_info(self, pubkey: Pubkey, commitment=None):
        self.calls.append(("get_account_info", pubkey, commitment))
        data = self.accounts.get(pubkey)
        if data is None:
            return SimpleNamespace(value=None)
        return SimpleNamespace(value=SimpleNamespace(data=data))

    async def get_latest_blockhash(self, commitment=None):
        self.calls.append(("get_latest_blockhash", commitment))
        return SimpleNamespace(value=SimpleNamespace(blockhash=self.blockhash, last_valid_block_height=1))

    async def close(self) -> None:
        self.closed = True


def unsigned_transaction(payer: Pubkey) -> VersionedTransaction:
    message = MessageV0.try_compile(payer, [], [], Hash.default())
    return VersionedTransaction.populate(message, [Signature.default()])


@pytest.fixture
def settings() -> Settings:
    return Settings(rpc_url=RPC_URL)


@pytest.fixture
def mint() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def buyer() -> Pubkey:
    return Keypair().pubkey()


@pytest.fixture
def fee_recipient() -> Pubkey:
    return Pubkey.new_unique()
