"""Run one of the windowstats HTTP services under uvicorn.

Host and port default to the values in :mod:`windowstats.core.config`
(``SERVICE_HOST``, ``NUMBERS_PORT``, ``STOCKS_PORT``).

Examples
--------

    # Average calculator on the configured port (9876 by default)
    python -m windowstats.scripts.run_service --service numbers

    # Stock aggregator on a custom port
    python -m windowstats.scripts.run_service --service stocks --port 8080
"""

from __future__ import annotations

import argparse
from typing import Optional

import uvicorn

from windowstats.core.config import get_config
from windowstats.core.logging import get_logger


logger = get_logger(__name__)

APP_PATHS = {
    "numbers": "windowstats.numbers.app:app",
    "stocks": "windowstats.stocks.app:app",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a windowstats HTTP service")
    parser.add_argument(
        "--service",
        choices=sorted(APP_PATHS),
        required=True,
        help="Which service to run",
    )
    parser.add_argument("--host", type=str, help="Bind address (default: SERVICE_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (default: per-service config)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = get_config()

    host = args.host or config.service_host
    port = args.port
    if port is None:
        port = config.numbers_port if args.service == "numbers" else config.stocks_port

    logger.info("Starting %s service on %s:%d", args.service, host, port)
    uvicorn.run(
        APP_PATHS[args.service],
        host=host,
        port=port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
