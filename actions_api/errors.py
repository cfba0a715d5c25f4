from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ActionsError(Exception):
    """Base error for the actions service."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, kind: str, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.__cause__ = cause


class InvalidParameterError(ActionsError):
    """A path or body parameter could not be used as given."""

    status_code = 422

    @classmethod
    def invalid_pubkey(cls, name: str, value: str) -> "InvalidParameterError":
        return cls("invalid_pubkey", f"{name} is not a valid public key: {value!r}")

    @classmethod
    def invalid_amount(cls, value: str) -> "InvalidParameterError":
        return cls("invalid_amount", f"amount must be a non-negative number: {value!r}")


class UpstreamError(ActionsError):
    """The RPC provider or the instruction builder failed."""

    status_code = status.HTTP_502_BAD_GATEWAY

    @classmethod
    def transport(cls, target: str, cause: BaseException) -> "UpstreamError":
        return cls("transport", f"{target} request failed: {cause}", cause=cause)

    @classmethod
    def http_status(cls, target: str, code: int) -> "UpstreamError":
        return cls("http_status", f"{target} http {code}")

    @classmethod
    def decode_response(cls, target: str, cause: BaseException) -> "UpstreamError":
        return cls("decode_response", f"{target} response decode failed: {cause}", cause=cause)

    @classmethod
    def rpc_error(cls, target: str, error: object) -> "UpstreamError":
        return cls("rpc_error", f"{target} returned error: {error}")

    @classmethod
    def missing_result(cls, target: str) -> "UpstreamError":
        return cls("missing_result", f"{target} response has no result")


def error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err.get("loc", ()) if item not in ("body", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):  # type: ignore
        return error(_format_validation_error(exc), InvalidParameterError.status_code)

    @app.exception_handler(InvalidParameterError)
    async def _invalid_parameter(request: Request, exc: InvalidParameterError):  # type: ignore
        return error(exc.message, exc.status_code)

    @app.exception_handler(UpstreamError)
    async def _upstream_error(request: Request, exc: UpstreamError):  # type: ignore
        logger.error("Upstream call failed", exc_info=exc, extra={"kind": exc.kind, "path": request.url.path})
        return error(exc.message, exc.status_code)
