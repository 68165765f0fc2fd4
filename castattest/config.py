"""
Application configuration using Pydantic Settings.

Load order:
1. Environment variables
2. .env file (if present)
3. Default values
"""

import re
from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Base mainnet EAS predeploy
DEFAULT_EAS_CONTRACT_ADDRESS = "0x4200000000000000000000000000000000000021"
DEFAULT_CAST_SCHEMA_UID = (
    "0xd88b6019cbfad1a9b093f2b4dcd96e443923f3ed434ed1a01677e2558f0b1f9c"
)
ALCHEMY_BASE_URL = "https://base-mainnet.g.alchemy.com/v2/"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_BYTES32_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Webhook service configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============ Environment ============
    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    debug: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ============ Security ============
    zapier_secret: SecretStr | None = Field(
        default=None,
        description="Shared secret the webhook caller sends as `token`",
    )
    private_key: SecretStr | None = Field(
        default=None,
        description="Attester private key used to sign attest transactions",
    )

    # ============ Blockchain ============
    alchemy_key: SecretStr | None = Field(
        default=None,
        description="Alchemy API key for the Base mainnet provider",
    )
    rpc_url: str | None = Field(
        default=None,
        description="Explicit JSON-RPC URL, overrides the Alchemy provider",
    )
    chain_id: int = Field(default=8453, ge=1)
    eas_contract_address: str = Field(
        default=DEFAULT_EAS_CONTRACT_ADDRESS,
        description="EAS registry contract address",
    )
    eas_schema_uid: str = Field(
        default=DEFAULT_CAST_SCHEMA_UID,
        description="Registered schema UID for cast attestations",
    )
    eas_wait_for_receipt: bool = Field(
        default=False,
        description="Wait for the receipt and log the new attestation UID",
    )

    # ============ Monitoring ============
    sentry_dsn: str | None = None
    prometheus_enabled: bool = True

    # ============ Validators ============
    @field_validator("eas_contract_address")
    @classmethod
    def validate_ethereum_address(cls, v: str) -> str:
        """Validate Ethereum address format."""
        if not _ADDRESS_RE.match(v):
            raise ValueError("Invalid Ethereum address format")
        return v

    @field_validator("eas_schema_uid")
    @classmethod
    def validate_schema_uid(cls, v: str) -> str:
        """Validate the schema UID is a 0x-prefixed 32-byte hex string."""
        if not _BYTES32_RE.match(v):
            raise ValueError("Invalid schema UID format")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    @property
    def provider_url(self) -> str | None:
        """Get the JSON-RPC URL, preferring an explicit RPC_URL."""
        if self.rpc_url:
            return self.rpc_url
        if self.alchemy_key is not None and self.alchemy_key.get_secret_value():
            return ALCHEMY_BASE_URL + self.alchemy_key.get_secret_value()
        return None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()
