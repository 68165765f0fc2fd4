"""castattest.schema

EAS schema definition for cast provenance attestations.

Schema string (Solidity-style):

    uint32 timestamp, uint32 farcasterID, string castHash,
    string castTextContent, string castImageLink, string associatedBrand

The schema is registered once in the EAS SchemaRegistry; its UID is a
deployment constant (``EAS_SCHEMA_UID``). Attestation data is the plain ABI
encoding of the field values in schema order, which is what the EAS SDK
``SchemaEncoder`` produces, so field order and types here must never drift
from the registered schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from eth_abi import encode

CAST_SCHEMA = (
    "uint32 timestamp, uint32 farcasterID, string castHash, "
    "string castTextContent, string castImageLink, string associatedBrand"
)


@dataclass(frozen=True, slots=True)
class SchemaField:
    name: str
    type: str


@dataclass(frozen=True, slots=True)
class SchemaItem:
    """A schema field paired with the value to encode."""

    name: str
    type: str
    value: Any


def parse_schema(schema: str) -> tuple[SchemaField, ...]:
    """Split a Solidity-style schema string into ordered fields."""
    fields = []
    for part in schema.split(","):
        tokens = part.split()
        if len(tokens) != 2:
            raise ValueError(f"Invalid schema field: {part.strip()!r}")
        fields.append(SchemaField(name=tokens[1], type=tokens[0]))
    return tuple(fields)


CAST_SCHEMA_FIELDS = parse_schema(CAST_SCHEMA)


def normalize_cast_hash(cast_hash: str) -> str:
    """Strip a leading 0x; upstream sources are inconsistent about it."""
    return cast_hash[2:] if cast_hash.startswith("0x") else cast_hash


def build_cast_items(
    timestamp: int,
    fid: int,
    cast_hash: str,
    cast_content: str,
    cast_image_link: str,
    assoc_brand: str,
) -> list[SchemaItem]:
    """Pair cast values with the schema fields, in schema order.

    ``cast_hash`` is expected to be normalized already.
    """
    values = (
        timestamp,
        fid,
        cast_hash,
        cast_content,
        cast_image_link,
        assoc_brand,
    )
    return [
        SchemaItem(name=f.name, type=f.type, value=v)
        for f, v in zip(CAST_SCHEMA_FIELDS, values, strict=True)
    ]


def encode_items(
    items: Sequence[SchemaItem],
    fields: Sequence[SchemaField] = CAST_SCHEMA_FIELDS,
) -> bytes:
    """ABI-encode items after checking them against the schema layout.

    Raises:
        ValueError: item names or types do not match the schema, or a value
            does not fit its type.
    """
    layout = [(i.name, i.type) for i in items]
    expected = [(f.name, f.type) for f in fields]
    if layout != expected:
        raise ValueError(f"Schema mismatch: got {layout}, expected {expected}")

    try:
        return encode([i.type for i in items], [i.value for i in items])
    except Exception as e:
        raise ValueError(f"Cannot encode schema data: {e}") from e
