"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with `event key=value`
messages; this only configures the root handler once at startup.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from . import settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    logging.basicConfig(level=settings.log_level(), format=LOG_FORMAT)


def install_loop_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    """
    Log exceptions that escape fire-and-forget asyncio tasks.
    """

    def _handler(_: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        message = context.get("message") or "unhandled event loop error"
        if exc is not None:
            logger.error("unhandled_loop_exception message=%s", message, exc_info=exc)
        else:
            logger.error("unhandled_loop_exception message=%s", message)

    loop.set_exception_handler(_handler)
