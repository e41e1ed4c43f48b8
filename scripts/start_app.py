#!/usr/bin/env python3
"""Start the portal API with Logfire tracking of startup errors."""

import sys

import logfire
import uvicorn

from portal.config import Settings
from portal.util.logging import setup_logging
from portal.util.observability import configure_logfire


def main() -> int:
    """Configure logging and observability, then serve the API."""
    settings = Settings()

    setup_logging(settings)
    # Must run before the app module is imported by uvicorn
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting portal API",
            environment=settings.environment,
            port=settings.port,
        )

        uvicorn.run(
            "portal.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
        )

        return 0

    except Exception as e:
        logfire.error(
            "Portal API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
