"""Logging setup shared by CLI entry points"""

import logging
import sys


def configure_logging(log_level: int | str) -> logging.Logger:
    """Attach a single stderr handler to the root logger at the given level."""
    level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(handler)
    return root
