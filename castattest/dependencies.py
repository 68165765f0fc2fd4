"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from castattest.config import Settings
from castattest.services.attestation import CastAttestationService, build_attestation_service


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


async def get_attestation_service(request: Request) -> CastAttestationService:
    """
    Get the attestation service, building it on first use.

    Normally the lifespan builds it at startup; a ConfigurationError raised
    here stops the request before anything is submitted. Without the
    lifespan, concurrent first requests may each build a client and only
    the last one stored is closed on shutdown.
    """
    state = request.app.state
    if state.attestation_service is None:
        state.attestation_service = build_attestation_service(
            state.settings, state.attestation_client
        )
    return state.attestation_service


AppSettings = Annotated[Settings, Depends(get_app_settings)]
AttestationService = Annotated[CastAttestationService, Depends(get_attestation_service)]
