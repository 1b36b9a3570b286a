"""
windowstats: Logging Setup

Both HTTP services log through the root logger: one line per event to
stdout and the same line to ``LOG_FILE``. Module loggers hang off the
``windowstats`` logger so its level can be tuned on its own.

Upstream credentials are never passed to these loggers.

External dependencies:
- logging: Python standard library logging framework

Thread safety: Thread-safe (logging module is process-global and
thread-safe under normal usage)
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

import logging
import sys
from typing import Optional

from windowstats.core.config import WindowStatsConfig, get_config

NAMESPACE = "windowstats"

# ============================================================================
# Public API
# ============================================================================


def setup_logging(config: Optional[WindowStatsConfig] = None) -> None:
    """Attach the console and file handlers at ``LOG_LEVEL``.

    Does nothing once the root logger has handlers, whether they came from
    an earlier call or from the host application.

    Args:
        config: Settings to read ``logging.level`` and ``logging.file``
            from. Defaults to :func:`get_config`.
    """

    if config is None:
        config = get_config()

    root_logger = logging.getLogger()

    # Already configured.
    if root_logger.handlers:
        return

    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(config.logging.file)
    file_handler.setFormatter(formatter)

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger(NAMESPACE).setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` under ``windowstats``.

    ``__name__`` of a ``windowstats`` module is used as is; any other name
    is prefixed, so ``"client"`` and ``"windowstats.client"`` are the same
    logger.
    """

    setup_logging()
    if name == NAMESPACE or name.startswith(NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{NAMESPACE}.{name}")
