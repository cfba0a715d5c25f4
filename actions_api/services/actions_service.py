from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from actions_api.config import Settings
from actions_api.errors import UpstreamError
from actions_api.pumpfun import Provider, PumpFunError, PumpFunSDK, ThrowawaySigner
from actions_api.schemas import TokenAsset

from .token_info import fetch_token_info
from .transaction import prepare_transaction

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[str, Commitment], AsyncClient]


def _default_connection(rpc_url: str, commitment: Commitment) -> AsyncClient:
    return AsyncClient(rpc_url, commitment=commitment)


class ActionsService:
    """Token lookups and buy-transaction assembly against the configured RPC."""

    def __init__(
        self,
        settings: Settings,
        *,
        connection_factory: ConnectionFactory = _default_connection,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.rpc_url = settings.rpc_url
        self.commitment = Commitment(settings.commitment)
        self.compute_unit_price = settings.compute_unit_price
        self.compute_unit_limit = settings.compute_unit_limit
        self._connection_factory = connection_factory
        self._transport = transport

    async def get_token(self, address: str) -> TokenAsset:
        return await fetch_token_info(self.rpc_url, address, transport=self._transport)

    async def build_buy_transaction(
        self,
        mint: Pubkey,
        buyer: Pubkey,
        lamports: int,
        slippage_basis_points: int,
    ) -> VersionedTransaction:
        connection = self._connection_factory(self.rpc_url, self.commitment)
        # Fresh per request; only its public key reaches the SDK.
        provider = Provider(connection, ThrowawaySigner.generate(), self.commitment)
        sdk = PumpFunSDK(provider)

        try:
            buy = await sdk.get_buy_instructions_by_sol_amount(
                buyer,
                mint,
                lamports,
                slippage_basis_points,
            )
            return await prepare_transaction(
                connection,
                buy.instructions,
                buyer,
                commitment=self.commitment,
                compute_unit_price=self.compute_unit_price,
                compute_unit_limit=self.compute_unit_limit,
            )
        except PumpFunError as exc:
            raise UpstreamError("pumpfun", str(exc), cause=exc) from exc
        except (SolanaRpcException, RPCException) as exc:
            raise UpstreamError.transport("rpc", exc) from exc
        finally:
            await connection.close()
