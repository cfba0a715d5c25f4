"""Assembly and serialization of unsigned transactions."""

from __future__ import annotations

import base64
import logging
from typing import Optional, Sequence

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Finalized
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

logger = logging.getLogger(__name__)


def compute_budget_instructions(
    compute_unit_price: Optional[int] = None,
    compute_unit_limit: Optional[int] = None,
) -> list[Instruction]:
    instructions: list[Instruction] = []
    if compute_unit_limit:
        instructions.append(set_compute_unit_limit(compute_unit_limit))
    if compute_unit_price:
        instructions.append(set_compute_unit_price(compute_unit_price))
    return instructions


async def prepare_transaction(
    connection: AsyncClient,
    instructions: Sequence[Instruction],
    payer: Pubkey,
    *,
    commitment: Commitment = Finalized,
    compute_unit_price: Optional[int] = None,
    compute_unit_limit: Optional[int] = None,
) -> VersionedTransaction:
    """Compile ``instructions`` into an unsigned v0 transaction paid by ``payer``.

    The latest blockhash is fetched at ``commitment``. Signature slots are left
    as default signatures for the wallet to fill in.
    """

    latest = await connection.get_latest_blockhash(commitment)
    blockhash = latest.value.blockhash

    message = MessageV0.try_compile(
        payer,
        [*compute_budget_instructions(compute_unit_price, compute_unit_limit), *instructions],
        [],
        blockhash,
    )
    signatures = [Signature.default()] * message.header.num_required_signatures
    tx = VersionedTransaction.populate(message, signatures)

    logger.debug("Prepared transaction %s", tx, extra={"payer": str(payer), "blockhash": str(blockhash)})
    return tx


def encode_transaction(tx: VersionedTransaction) -> str:
    """Serializes a transaction to base64."""

    return base64.b64encode(bytes(tx)).decode("ascii")
