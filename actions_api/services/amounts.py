from __future__ import annotations

from decimal import Decimal

from actions_api.errors import InvalidParameterError

LAMPORTS_PER_SOL = 1_000_000_000
MAX_LAMPORTS = 2**64 - 1


def sol_to_lamports(amount: str) -> int:
    """Convert a decimal SOL string to whole lamports, truncating dust."""

    try:
        value = Decimal(amount.strip())
        if not value.is_finite() or value < 0:
            raise InvalidParameterError.invalid_amount(amount)
        lamports = int(value * LAMPORTS_PER_SOL)
    except (ArithmeticError, AttributeError) as exc:
        raise InvalidParameterError.invalid_amount(str(amount)) from exc

    # u64 on chain
    if lamports > MAX_LAMPORTS:
        raise InvalidParameterError.invalid_amount(amount)
    return lamports
