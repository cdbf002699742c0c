"""
Process entrypoint: ``python -m usersapi`` or the ``users-api`` script.

Loads configuration, builds the server and runs it. Any fatal startup
error is logged and turned into a non-zero exit status.
"""

import logging
import sys

from usersapi.core.config import ConfigError, load_settings
from usersapi.domain.users.errors import StorageConnectionError
from usersapi.server import Server, ServerError
from usersapi.shared.logging import configure_logging

logger = logging.getLogger("usersapi")


def main() -> int:
    """Run the users API until it is stopped.

    Returns:
        0 on a clean shutdown (including Ctrl-C), 1 if startup failed.
    """
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging()
        logger.error("Configuration error: %s", exc.message)
        return 1

    configure_logging(level=settings.log_level)
    server = Server(settings)
    try:
        server.start()
    except StorageConnectionError as exc:
        logger.error("Database unavailable: %s", exc.message)
        return 1
    except ServerError as exc:
        logger.error("Server failed: %s", exc.message)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted before serving; exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
