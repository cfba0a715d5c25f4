"""
Run the Actions server here
"""

import argparse
import logging
import sys

import uvicorn

from actions_api import create_app, get_settings

logger = logging.getLogger("actions_api")


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="pump.fun Solana Actions server")
    parser.add_argument('--host', default=settings.host, help=f'Interface to bind (default: {settings.host})')
    parser.add_argument('-p', '--port', type=int, default=settings.port, help=f'Port to listen on (default: {settings.port})')
    parser.add_argument('--log-level', default=settings.log_level, help='Logging level (default: from LOG_LEVEL)')
    args = parser.parse_args(argv)

    settings = settings.model_copy(update={"host": args.host, "port": args.port, "log_level": args.log_level})
    app = create_app(settings)

    logger.info(
        "Server is running on port %s\n"
        "Visit http://localhost:%s/swagger-ui to explore existing actions\n"
        "Visit https://actions.dialect.to to unfurl action into a Blink",
        settings.port,
        settings.port,
    )

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
