"""Logging setup for applications embedding gridkit.

The library itself only creates module loggers; nothing here runs on import.
"""

from __future__ import annotations

import logging

from gridkit.config.settings import get_settings

LOG_FORMAT = "%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger at ``settings.log_level`` (DEBUG if *verbose*)."""
    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
