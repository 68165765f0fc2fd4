"""Turns webhook cast notifications into EAS attestations."""

import hmac
import time
from collections.abc import Callable

from castattest.config import Settings
from castattest.errors import AuthenticationError, ConfigurationError
from castattest.models import AttestationRequest
from castattest.schema import SchemaItem, build_cast_items, normalize_cast_hash
from castattest.services.eas import BaseAttestationClient, create_attestation_client
from castattest.utils.logging import get_logger

logger = get_logger(__name__)


class CastAttestationService:
    """Authenticate, normalize, encode and submit one cast attestation.

    Submissions are not deduplicated: the same cast sent twice produces two
    attestations with different timestamps.
    """

    def __init__(
        self,
        settings: Settings,
        client: BaseAttestationClient,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if settings.zapier_secret is None or not settings.zapier_secret.get_secret_value():
            raise ConfigurationError("ZAPIER_SECRET is not defined")

        self._secret = settings.zapier_secret.get_secret_value().encode()
        self._schema_uid = settings.eas_schema_uid
        self._client = client
        self._clock = clock
        self._last_timestamp = 0

    @property
    def client(self) -> BaseAttestationClient:
        return self._client

    def authenticate(self, token: str) -> None:
        """Raise AuthenticationError unless token matches the shared secret."""
        if not hmac.compare_digest(token.encode(), self._secret):
            raise AuthenticationError("Invalid token")

    def next_timestamp(self) -> int:
        """Whole seconds since epoch, never behind a previous call."""
        ts = max(int(self._clock()), self._last_timestamp)
        self._last_timestamp = ts
        return ts

    def build_items(self, request: AttestationRequest, timestamp: int) -> list[SchemaItem]:
        return build_cast_items(
            timestamp=timestamp,
            fid=request.fid,
            cast_hash=normalize_cast_hash(request.cast_hash),
            cast_content=request.cast_content,
            cast_image_link=request.cast_image_link,
            assoc_brand=request.assoc_brand,
        )

    async def submit(self, request: AttestationRequest) -> str:
        """Attest a cast and return the submission transaction hash.

        Raises:
            AuthenticationError: wrong shared secret, nothing is submitted.
            SubmissionError: encoding or on-chain submission failed.
        """
        self.authenticate(request.token)

        items = self.build_items(request, self.next_timestamp())
        encoded = self._client.encode(items)
        logger.info(
            "attestation_encoded",
            fid=request.fid,
            cast_hash=items[2].value,
            recipient=request.attest_wallet,
            data="0x" + encoded.hex(),
        )

        tx_hash = await self._client.submit(
            self._schema_uid, request.attest_wallet, encoded
        )
        logger.info("cast_attested", tx_hash=tx_hash, fid=request.fid)
        return tx_hash


def build_attestation_service(
    settings: Settings,
    client: BaseAttestationClient | None = None,
) -> CastAttestationService:
    """Create the service, building the EAS client from settings if needed.

    Raises:
        ConfigurationError: a required credential is missing.
    """
    if client is None:
        client = create_attestation_client(settings)
    return CastAttestationService(settings, client)
