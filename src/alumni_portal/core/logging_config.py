"""Logging setup for the application."""

import logging
from typing import Optional

from alumni_portal.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once.

    Args:
        level: Optional level name overriding ``LOG_LEVEL``.
    """
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
    # uvicorn's access log duplicates the request lines we care about
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
