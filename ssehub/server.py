import argparse
import logging

import uvicorn

from ssehub.core.config import settings
from ssehub.core.logging import setup_logging

setup_logging()
logger = logging.getLogger("ssehub.server")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Serve the SSE broadcast hub.")
    parser.add_argument("--port", type=int, default=settings.PORT)
    args = parser.parse_args(argv)

    logger.info("Listening on %s:%d", settings.HOST, args.port)
    # uvicorn logs and exits non-zero if the port cannot be bound
    uvicorn.run(
        "ssehub.main:app",
        host=settings.HOST,
        port=args.port,
        log_config=None,
        timeout_graceful_shutdown=settings.SHUTDOWN_GRACE_SECONDS,
    )


if __name__ == "__main__":
    main()
