from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Path
from solders.pubkey import Pubkey

from actions_api.config import Settings, get_settings
from actions_api.errors import InvalidParameterError
from actions_api.schemas import (
    ActionError,
    ActionGetResponse,
    ActionLinks,
    ActionParameter,
    ActionPostRequest,
    ActionPostResponse,
    LinkedAction,
    TokenAsset,
)
from actions_api.services import ActionsService, encode_transaction, sol_to_lamports

logger = logging.getLogger(__name__)

BUY_AMOUNT_SOL_OPTIONS = [1, 5, 10]
DEFAULT_BUY_AMOUNT_SOL = 1
SLIPPAGE_BASIS_POINTS = 100
AMOUNT_PARAMETER_NAME = "amount"

ROUTE_PREFIX = "/api/pumpdotfun"

router = APIRouter(prefix=ROUTE_PREFIX, tags=["PumpDotFun"])

ERROR_RESPONSES = {
    422: {"model": ActionError, "description": "Invalid token, amount or account"},
    502: {"model": ActionError, "description": "RPC provider or instruction builder failed"},
}


def get_service(settings: Settings = Depends(get_settings)) -> ActionsService:
    return ActionsService(settings)


def token_address(token: str = Path(..., description="Mint address of the pump.fun token")) -> str:
    try:
        Pubkey.from_string(token)
    except ValueError as exc:
        raise InvalidParameterError.invalid_pubkey("token", token) from exc
    return token


def _base_response(token: TokenAsset) -> ActionGetResponse:
    metadata = token.content.metadata
    return ActionGetResponse(
        icon=token.content.links.image,
        label=f"{DEFAULT_BUY_AMOUNT_SOL} SOL",
        title=metadata.name,
        description=metadata.description,
    )


@router.get(
    "/{token}",
    response_model=ActionGetResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_action(
    address: str = Depends(token_address),
    service: ActionsService = Depends(get_service),
):
    token = await service.get_token(address)

    response = _base_response(token)
    response.links = ActionLinks(
        actions=[
            *[
                LinkedAction(label=f"{amount} SOL", href=f"{ROUTE_PREFIX}/{address}/{amount}")
                for amount in BUY_AMOUNT_SOL_OPTIONS
            ],
            LinkedAction(
                label=f"Buy {token.content.metadata.symbol}",
                href=f"{ROUTE_PREFIX}/{address}/{{{AMOUNT_PARAMETER_NAME}}}",
                parameters=[
                    ActionParameter(name=AMOUNT_PARAMETER_NAME, label="Enter a custom SOL amount"),
                ],
            ),
        ]
    )
    return response


@router.get(
    "/{token}/{amount}",
    response_model=ActionGetResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_action_with_amount(
    amount: str = Path(..., description="Amount of SOL to spend", examples=["1"]),
    address: str = Depends(token_address),
    service: ActionsService = Depends(get_service),
):
    sol_to_lamports(amount)
    token = await service.get_token(address)
    return _base_response(token)


async def _build_buy(address: str, amount: str, request: ActionPostRequest, service: ActionsService):
    lamports = sol_to_lamports(amount)
    tx = await service.build_buy_transaction(
        Pubkey.from_string(address),
        request.pubkey,
        lamports,
        SLIPPAGE_BASIS_POINTS,
    )
    logger.debug("Built buy transaction", extra={"token": address, "account": request.account, "lamports": lamports})
    return ActionPostResponse(transaction=encode_transaction(tx))


@router.post(
    "/{token}",
    response_model=ActionPostResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def post_action(
    request: ActionPostRequest,
    address: str = Depends(token_address),
    service: ActionsService = Depends(get_service),
):
    return await _build_buy(address, str(DEFAULT_BUY_AMOUNT_SOL), request, service)


@router.post(
    "/{token}/{amount}",
    response_model=ActionPostResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def post_action_with_amount(
    request: ActionPostRequest,
    amount: str = Path(..., description="Amount of SOL to spend", examples=["1"]),
    address: str = Depends(token_address),
    service: ActionsService = Depends(get_service),
):
    return await _build_buy(address, amount, request, service)
