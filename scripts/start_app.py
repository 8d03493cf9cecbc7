#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from toplist.config import Settings
from toplist.util.logging import setup_logging
from toplist.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        settings.validate_for_startup()

        logfire.info(
            "Starting FastAPI application",
            cooldown_hours=settings.voting.cooldown_hours,
            trust_forwarded_for=settings.network.trust_forwarded_for,
        )

        uvicorn.run(
            "toplist.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=settings.network.trust_forwarded_for,
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
