"""Command-line entry point for serving the CV chat API."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import uvicorn

from cvchat.api import create_app
from cvchat.config import config
from cvchat.exceptions import StartupError
from cvchat.state import initialize

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Build the CLI parser and read command-line arguments."""  # noqa: DOC201
    parser = argparse.ArgumentParser(
        description="Serve the CV chat HTTP API.",
    )
    parser.add_argument(
        "--host",
        default=config.HOST,
        help=f"Bind address for the HTTP server (default: {config.HOST}).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.PORT,
        help=f"Port for the HTTP server (default: {config.PORT}).",
    )
    parser.add_argument(
        "--dataset",
        type=Path,
        default=config.CV_DATASET_PATH,
        help=f"Path to the CV dataset JSON file (default: {config.CV_DATASET_PATH}).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Validate configuration, build the index, then serve requests."""  # noqa: DOC201
    args = parse_args(argv)

    config.setup_logging()
    logger = config.get_logger(__name__)

    try:
        config.validate()
    except ValueError:
        logger.exception("Configuration invalid")
        return 1

    try:
        ready_state = initialize(dataset_path=args.dataset)
    except StartupError:
        logger.exception("Fatal error during initialization")
        return 1

    app = create_app(ready_state=ready_state)
    logger.info("Server listening on http://%s:%s", args.host, args.port)
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=config.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
