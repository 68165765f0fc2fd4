"""Shared test constants and fakes."""

from collections.abc import Sequence

from castattest.schema import SchemaItem
from castattest.services.eas import BaseAttestationClient

SECRET = "zapier-shared-secret"
# Well-known development key, never funded on mainnet
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
RECIPIENT = "0x000000000000000000000000000000000000dEaD"
FAKE_TX_HASH = "0x" + "ab" * 32


class FakeAttestationClient(BaseAttestationClient):
    """Records encode/submit calls instead of touching a chain."""

    def __init__(self, tx_hash: str = FAKE_TX_HASH, error: Exception | None = None):
        self.tx_hash = tx_hash
        self.error = error
        self.encoded_items: list[list[SchemaItem]] = []
        self.submissions: list[tuple[str, str, bytes]] = []
        self.healthy = True
        self.closed = False

    def encode(self, items: Sequence[SchemaItem]) -> bytes:
        self.encoded_items.append(list(items))
        return super().encode(items)

    async def submit(self, schema_uid: str, recipient: str, data: bytes) -> str:
        self.submissions.append((schema_uid, recipient, data))
        if self.error is not None:
            raise self.error
        return self.tx_hash

    async def health_check(self) -> bool:
        return self.healthy

    async def close(self) -> None:
        self.closed = True
