"""Farcaster cast provenance attestations on EAS."""

__version__ = "0.1.0"
