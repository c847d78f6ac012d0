"""Logging configuration for embedgate."""

import logging
import sys

from embedgate.config import settings

# Filter, consent store and middleware all log through this logger
logger = logging.getLogger("embedgate")


def setup_logging(debug: bool | None = None) -> None:
    """Route embedgate logs to stderr.

    At DEBUG every iframe classification and skipped provider is logged,
    which is noisy on busy pages; INFO keeps startup and consent store
    warnings only. Other libraries stay at WARNING.

    Args:
        debug: Force DEBUG on or off; defaults to EMBEDGATE_DEBUG.

    """
    if debug is None:
        debug = settings.embedgate_debug

    # Reloads (uvicorn --reload) would otherwise stack handlers
    logging.root.handlers = []
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    logger.info(
        "embedgate embed filter logging at %s, per-iframe decisions %s",
        logging.getLevelName(level),
        "shown" if debug else "hidden",
    )
