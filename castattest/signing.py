"""Key management for signing attestation transactions."""

from abc import ABC, abstractmethod
from typing import Any

from eth_account import Account
from pydantic import SecretStr

from castattest.errors import ConfigurationError
from castattest.utils.logging import get_logger

logger = get_logger(__name__)


class BaseKeyManager(ABC):
    """Abstract base class for key management."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Get the signer address."""

    @abstractmethod
    async def sign_transaction(self, tx_dict: dict[str, Any]) -> bytes:
        """Sign a transaction and return the raw signed bytes."""

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""


class LocalKeyManager(BaseKeyManager):
    """Signs with a private key held in process configuration."""

    def __init__(self, private_key: SecretStr | str | None):
        """Validate the key and derive the signer address.

        Raises:
            ConfigurationError: the key is missing or malformed.
        """
        if isinstance(private_key, SecretStr):
            private_key = private_key.get_secret_value()
        if not private_key:
            raise ConfigurationError(
                "PRIVATE_KEY is not defined in the environment variables"
            )

        # Normalize key format
        key_hex = private_key if private_key.startswith("0x") else f"0x{private_key}"

        try:
            account = Account.from_key(key_hex)
        except Exception as e:
            logger.error("invalid_private_key", error=type(e).__name__)
            raise ConfigurationError("Invalid private key format") from e

        self._private_key: bytes | None = bytes.fromhex(key_hex[2:])
        self._address = account.address
        logger.info("local_key_manager_initialized", address=self._address)

    @property
    def address(self) -> str:
        return self._address

    async def sign_transaction(self, tx_dict: dict[str, Any]) -> bytes:
        """Sign transaction with local key."""
        if not self._private_key:
            raise RuntimeError("Key manager closed")

        signed = Account.sign_transaction(tx_dict, self._private_key)
        return signed.raw_transaction

    async def close(self) -> None:
        """Drop the key reference."""
        self._private_key = None
