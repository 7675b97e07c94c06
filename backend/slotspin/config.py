"""Application configuration from environment (SLOTSPIN_ prefix)."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server settings. Paytables are code constants, not settings."""

    model_config = ConfigDict(env_prefix="SLOTSPIN_")

    # Server
    debug: bool = False

    # Protocol
    protocol_version: str = "1.0"

    # Wallet handling at the host boundary
    starting_balance: int = 999
    credit_amount: int = 100
    enforce_sufficient_funds: bool = True


settings = Settings()
