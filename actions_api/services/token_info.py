from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from actions_api.errors import UpstreamError
from actions_api.schemas import TokenAsset

logger = logging.getLogger(__name__)

TARGET = "getAsset"


async def get_asset(
    rpc_url: str,
    address: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Call the DAS ``getAsset`` method and return its ``result`` field."""

    payload = {
        "jsonrpc": "2.0",
        "id": "text",
        "method": "getAsset",
        "params": {"id": address},
    }

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.post(
                rpc_url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
    except httpx.HTTPError as exc:
        raise UpstreamError.transport(TARGET, exc) from exc

    if response.is_error:
        raise UpstreamError.http_status(TARGET, response.status_code)

    try:
        data = response.json()
    except json.JSONDecodeError as exc:
        raise UpstreamError.decode_response(TARGET, exc) from exc

    if not isinstance(data, dict):
        raise UpstreamError.decode_response(TARGET, ValueError("response was not an object"))
    if data.get("error") is not None:
        raise UpstreamError.rpc_error(TARGET, json.dumps(data["error"], separators=(",", ":")))
    if data.get("result") is None:
        raise UpstreamError.missing_result(TARGET)

    return data["result"]


async def fetch_token_info(
    rpc_url: str,
    address: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TokenAsset:
    result = await get_asset(rpc_url, address, transport=transport)
    try:
        return TokenAsset.model_validate(result)
    except ValidationError as exc:
        logger.debug("Unexpected getAsset result", extra={"address": address})
        raise UpstreamError.decode_response(TARGET, exc) from exc
