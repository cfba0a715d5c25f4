"""Subset of the DAS ``getAsset`` result used by the discovery endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class AssetMetadata(BaseModel):
    name: str
    symbol: str
    description: str = ""


class AssetLinks(BaseModel):
    image: str


class AssetContent(BaseModel):
    metadata: AssetMetadata
    links: AssetLinks


class TokenAsset(BaseModel):
    id: str
    content: AssetContent

    model_config = {"extra": "ignore"}
