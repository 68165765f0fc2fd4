"""Webhook endpoint that mints cast attestations."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from castattest.dependencies import AttestationService
from castattest.errors import MethodError
from castattest.models import AttestationRequest, AttestationResponse, ErrorResponse

router = APIRouter(prefix="/api", tags=["attestations"])

LIVENESS_MESSAGE = "EAS mint endpoint is live"


@router.post(
    "/mint",
    response_model=AttestationResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Mint a cast attestation",
)
async def mint_attestation(
    payload: AttestationRequest,
    service: AttestationService,
) -> AttestationResponse:
    """Authenticate the caller and submit the cast to EAS.

    Returns the submission transaction hash; confirmation is left to the
    caller.
    """
    tx_hash = await service.submit(payload)
    return AttestationResponse(
        tx_hash=tx_hash,
        message=f"EAS Proof minted with transaction hash: {tx_hash}",
    )


@router.get("/mint", response_class=PlainTextResponse, summary="Liveness probe")
async def mint_liveness() -> str:
    return LIVENESS_MESSAGE


@router.api_route(
    "/mint",
    methods=["PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
    include_in_schema=False,
)
async def mint_invalid_method() -> None:
    raise MethodError("Invalid request")
