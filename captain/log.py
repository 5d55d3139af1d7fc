"""Logging setup for the captain component."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO"):
    """Applies basic logging configuration."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
