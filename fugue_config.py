"""
Environment-driven settings for Fugue replicas and scripts.
"""

import logging
import os

DEFAULT_MAX_CACHED_PREFIXES = 1000
DEFAULT_LOG_LEVEL = "INFO"


def get_max_cached_prefixes() -> int:
    """
    Cache capacity for replicas built without an explicit limit.

    Reads FUGUE_MAX_CACHED_PREFIXES, defaulting to 1000.

    Raises:
        ValueError: If the variable is not a positive integer
    """
    raw = os.environ.get("FUGUE_MAX_CACHED_PREFIXES", str(DEFAULT_MAX_CACHED_PREFIXES))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"FUGUE_MAX_CACHED_PREFIXES must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"FUGUE_MAX_CACHED_PREFIXES must be positive, got {value}")
    return value


def get_log_level() -> int:
    """Logging level from FUGUE_LOG_LEVEL, INFO if unset or unknown."""
    name = os.environ.get("FUGUE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level
