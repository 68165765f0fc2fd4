"""Services package."""

from castattest.services.attestation import CastAttestationService, build_attestation_service
from castattest.services.eas import BaseAttestationClient, EASClient, create_attestation_client

__all__ = [
    "BaseAttestationClient",
    "CastAttestationService",
    "EASClient",
    "build_attestation_service",
    "create_attestation_client",
]
