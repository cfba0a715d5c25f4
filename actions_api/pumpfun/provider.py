"""Connection plus signer pair handed to the SDK."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Finalized
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction


class SignerRefusedError(Exception):
    """Raised when a throwaway signer is asked to sign."""


class Signer(Protocol):
    def public_key(self) -> Pubkey: ...

    def sign_transaction(self, tx: VersionedTransaction) -> VersionedTransaction: ...


class ThrowawaySigner:
    """Satisfies the ``Signer`` interface with a fresh, unfunded keypair.

    Only the public key is ever exposed. Any attempt to sign raises, so the
    purchaser's transaction can never be signed server-side.
    """

    def __init__(self, keypair: Keypair) -> None:
        self._keypair = keypair

    @classmethod
    def generate(cls) -> "ThrowawaySigner":
        return cls(Keypair())

    def public_key(self) -> Pubkey:
        return self._keypair.pubkey()

    def sign_transaction(self, tx: VersionedTransaction) -> VersionedTransaction:
        raise SignerRefusedError("throwaway signer does not sign transactions")


@dataclass(frozen=True, slots=True)
class Provider:
    connection: AsyncClient
    signer: Signer
    commitment: Commitment = Finalized
