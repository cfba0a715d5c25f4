from __future__ import annotations

from solders.pubkey import Pubkey

PUMP_PROGRAM_ID = Pubkey.from_string("6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P")
PUMP_EVENT_AUTHORITY = Pubkey.from_string("Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1")

GLOBAL_ACCOUNT_SEED = b"global"
BONDING_CURVE_SEED = b"bonding-curve"

# Anchor discriminator of the ``buy`` instruction
BUY_DISCRIMINATOR = bytes.fromhex("66063d1201daebea")

BASIS_POINTS_DENOMINATOR = 10_000
