from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# urllib3 logs full request URLs at DEBUG, including the token request's query string
_URL_LOGGERS = ("urllib3.connection", "urllib3.connectionpool")


def configure_logging(level: Optional[int] = None) -> None:
    """Set up logging for a script or service that uses ``zohocrm``.

    ``level`` defaults to WARNING. A handler is only installed when the root
    logger has none yet; otherwise just the level changes, so an application's
    own logging setup is left alone. urllib3's URL loggers are capped at
    WARNING whatever ``level`` is.
    """
    effective = logging.WARNING if level is None else level
    root = logging.getLogger()

    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(effective)

    for name in _URL_LOGGERS:
        url_logger = logging.getLogger(name)
        if url_logger.getEffectiveLevel() < logging.WARNING:
            url_logger.setLevel(logging.WARNING)
