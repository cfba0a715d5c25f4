from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from solders.pubkey import Pubkey


class ActionParameter(BaseModel):
    name: str
    label: Optional[str] = None


class LinkedAction(BaseModel):
    href: str
    label: str
    parameters: Optional[List[ActionParameter]] = None


class ActionLinks(BaseModel):
    actions: List[LinkedAction]


class ActionGetResponse(BaseModel):
    """Metadata a client renders before the user picks an action."""

    icon: str
    title: str
    description: str
    label: str
    links: Optional[ActionLinks] = None


class ActionPostRequest(BaseModel):
    account: str = Field(..., description="Base58 public key of the purchasing account")

    @field_validator("account")
    @classmethod
    def _check_account(cls, value: str) -> str:
        try:
            Pubkey.from_string(value)
        except ValueError as exc:
            raise ValueError(f"not a valid public key: {value!r}") from exc
        return value

    @property
    def pubkey(self) -> Pubkey:
        return Pubkey.from_string(self.account)


class ActionPostResponse(BaseModel):
    transaction: str = Field(..., description="Base64-encoded unsigned transaction")


class ActionError(BaseModel):
    message: str
