"""
Server entrypoint. Run with:

  python -m cso_proxy

Listens on CSO_PORT (default 8080); see cso_proxy.core.config for the other settings.
"""

import logging
import sys

import uvicorn

from cso_proxy.core.config import get_settings
from cso_proxy.core.logging import configure_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Configure logging and serve the application until interrupted."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    try:
        uvicorn.run(
            "cso_proxy.main:app",
            host="0.0.0.0",
            port=settings.PORT,
            proxy_headers=True,
            forwarded_allow_ips="*",
            log_config=None,
            log_level=settings.LOG_LEVEL.lower(),
        )
        return 0
    except Exception as e:
        logger.exception("Server failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
