import logging
import sys

from storefront.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return the named logger, attaching a stdout handler the first time.

    Output looks like ``[CATALOG] message`` so the concern is visible when
    several loggers share a console.
    """
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(
            logging.Formatter(f"[{name.upper()}] %(levelname)s %(message)s")
        )
        log.addHandler(h)
        log.propagate = False
    return log
