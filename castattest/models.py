"""Pydantic models for API requests and responses."""

import re
from typing import Any

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, field_validator

UINT32_MAX = 2**32 - 1

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]+$")


# ============ Attestation Models ============


class AttestationRequest(BaseModel):
    """Cast metadata delivered by the webhook caller."""

    model_config = ConfigDict(extra="forbid")

    cast_hash: str = Field(..., min_length=1, description="Cast hash, hex, 0x optional")
    fid: int = Field(..., ge=0, le=UINT32_MAX, description="Farcaster id of the author")
    attest_wallet: str = Field(..., description="Recipient of the attestation")
    cast_content: str
    cast_image_link: str
    assoc_brand: str
    token: str

    @field_validator("fid", mode="before")
    @classmethod
    def reject_bool_fid(cls, v: Any) -> Any:
        """Numeric strings are fine; JSON booleans would coerce to 0/1."""
        if isinstance(v, bool):
            raise ValueError("fid must be a number")
        return v

    @field_validator("cast_hash")
    @classmethod
    def validate_cast_hash(cls, v: str) -> str:
        if not _HEX_RE.match(v):
            raise ValueError("cast_hash must be a hex string")
        return v

    @field_validator("attest_wallet")
    @classmethod
    def validate_attest_wallet(cls, v: str) -> str:
        """Accept any valid address and store it checksummed."""
        if not is_address(v):
            raise ValueError("attest_wallet must be an Ethereum address")
        return to_checksum_address(v)


class AttestationResponse(BaseModel):
    """Successful submission response."""

    tx_hash: str
    message: str


# ============ Error Models ============


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: list | dict | None = None


# ============ Health Models ============


class HealthCheck(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str
    blockchain: str
