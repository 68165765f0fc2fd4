"""Client for submitting attestations to the EAS registry contract."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from eth_utils import to_checksum_address

from castattest.config import Settings
from castattest.errors import ConfigurationError, SubmissionError
from castattest.schema import CAST_SCHEMA_FIELDS, SchemaField, SchemaItem, encode_items
from castattest.signing import BaseKeyManager, LocalKeyManager
from castattest.utils.logging import get_logger

logger = get_logger(__name__)

NO_EXPIRATION = 0
ZERO_BYTES32 = b"\x00" * 32

# EAS contract ABI (attest + Attested event)
EAS_ABI = [
    {
        "inputs": [
            {
                "components": [
                    {"name": "schema", "type": "bytes32"},
                    {
                        "components": [
                            {"name": "recipient", "type": "address"},
                            {"name": "expirationTime", "type": "uint64"},
                            {"name": "revocable", "type": "bool"},
                            {"name": "refUID", "type": "bytes32"},
                            {"name": "data", "type": "bytes"},
                            {"name": "value", "type": "uint256"},
                        ],
                        "name": "data",
                        "type": "tuple",
                    },
                ],
                "name": "request",
                "type": "tuple",
            }
        ],
        "name": "attest",
        "outputs": [{"name": "", "type": "bytes32"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "recipient", "type": "address"},
            {"indexed": True, "name": "attester", "type": "address"},
            {"indexed": False, "name": "uid", "type": "bytes32"},
            {"indexed": True, "name": "schemaUID", "type": "bytes32"},
        ],
        "name": "Attested",
        "type": "event",
    },
]


class BaseAttestationClient(ABC):
    """Narrow interface to the attestation network: encode, then submit."""

    schema_fields: Sequence[SchemaField] = CAST_SCHEMA_FIELDS

    def encode(self, items: Sequence[SchemaItem]) -> bytes:
        """Encode schema items into attestation data."""
        try:
            return encode_items(items, self.schema_fields)
        except ValueError as e:
            raise SubmissionError(str(e)) from e

    @abstractmethod
    async def submit(self, schema_uid: str, recipient: str, data: bytes) -> str:
        """Submit a revocable, non-expiring attestation; return the tx hash."""

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class EASClient(BaseAttestationClient):
    """Submits attestations through web3 with a local signing key."""

    def __init__(
        self,
        settings: Settings,
        key_manager: BaseKeyManager | None = None,
    ) -> None:
        """Build the provider, contract and signer from settings.

        No network calls are made here.

        Raises:
            ConfigurationError: provider or signing credential missing.
        """
        from web3 import AsyncHTTPProvider, AsyncWeb3

        provider_url = settings.provider_url
        if not provider_url:
            raise ConfigurationError("ALCHEMY_KEY or RPC_URL must be set")

        self._key_manager = key_manager or LocalKeyManager(settings.private_key)
        self._chain_id = settings.chain_id
        self._wait_for_receipt = settings.eas_wait_for_receipt

        self._web3: Any = AsyncWeb3(AsyncHTTPProvider(provider_url))
        self._contract: Any = self._web3.eth.contract(
            address=to_checksum_address(settings.eas_contract_address),
            abi=EAS_ABI,
        )

        logger.info(
            "eas_client_initialized",
            contract=self._contract.address,
            attester=self._key_manager.address,
            chain_id=self._chain_id,
        )

    async def health_check(self) -> bool:
        """Check RPC connection health."""
        try:
            return bool(await self._web3.is_connected())
        except Exception:
            return False

    async def submit(self, schema_uid: str, recipient: str, data: bytes) -> str:
        signer = self._key_manager.address
        request = (
            bytes.fromhex(schema_uid[2:]),
            (
                to_checksum_address(recipient),
                NO_EXPIRATION,
                True,
                ZERO_BYTES32,
                data,
                0,
            ),
        )

        try:
            nonce = await self._web3.eth.get_transaction_count(signer, "pending")
            tx_dict = await self._contract.functions.attest(request).build_transaction(
                {
                    "from": signer,
                    "nonce": nonce,
                    "chainId": self._chain_id,
                    "value": 0,
                }
            )
            signed_tx = await self._key_manager.sign_transaction(tx_dict)
            tx_hash = await self._web3.eth.send_raw_transaction(signed_tx)
        except Exception as e:
            logger.error(
                "attestation_submit_failed",
                error=str(e),
                schema=schema_uid,
                recipient=recipient,
            )
            raise SubmissionError(f"Attestation submission failed: {e}") from e

        tx_hash_hex = self._web3.to_hex(tx_hash)
        logger.info(
            "attestation_submitted",
            tx_hash=tx_hash_hex,
            schema=schema_uid,
            recipient=recipient,
            nonce=nonce,
        )

        if self._wait_for_receipt:
            await self._log_attestation_uid(tx_hash_hex)

        return tx_hash_hex

    async def _log_attestation_uid(self, tx_hash: str) -> None:
        """Wait for the receipt and log the UID from the Attested event."""
        try:
            receipt = await self._web3.eth.wait_for_transaction_receipt(tx_hash)
        except Exception as e:
            logger.warning("attestation_receipt_unavailable", tx_hash=tx_hash, error=str(e))
            return

        if receipt["status"] != 1:
            logger.error("attestation_reverted", tx_hash=tx_hash, block=receipt["blockNumber"])
            return

        events = self._contract.events.Attested().process_receipt(receipt)
        for event in events:
            logger.info(
                "attestation_confirmed",
                tx_hash=tx_hash,
                uid=self._web3.to_hex(event["args"]["uid"]),
                block=receipt["blockNumber"],
            )

    async def close(self) -> None:
        await self._key_manager.close()
        logger.info("eas_client_closed")


def create_attestation_client(settings: Settings) -> BaseAttestationClient:
    """Factory for the production attestation client."""
    return EASClient(settings)
