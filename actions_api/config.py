from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Solana JSON-RPC endpoint, also serving the DAS ``getAsset`` method
    rpc_url: str = Field(..., description="Solana JSON-RPC endpoint (RPC_URL)")
    commitment: Literal["processed", "confirmed", "finalized"] = Field(default="finalized")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")

    # Optional priority fee instructions prepended to every prepared transaction
    compute_unit_price: Optional[int] = Field(default=None, ge=0)
    compute_unit_limit: Optional[int] = Field(default=None, gt=0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]
