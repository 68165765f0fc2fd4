#!/usr/bin/env python3
"""Entry point for running the cast attestation webhook."""

import uvicorn

from castattest.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "castattest.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )
