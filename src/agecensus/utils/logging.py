import os
import sys

from loguru import logger


def get_env_bool(name, default=None):
    env_var = os.environ.get(name, None)
    return default if env_var is None else (env_var.lower().strip() in ("yes", "true", "t", "1"))


AGECENSUS_COLORIZE_LOGS = get_env_bool("AGECENSUS_COLORIZE_LOGS")
AGECENSUS_LOG_LEVEL = os.environ.get("AGECENSUS_LOG_LEVEL", "INFO").upper()


def setup_default_logger(level: str = AGECENSUS_LOG_LEVEL):
    """
    Reset loguru to a single stderr sink
    Args:
      level: minimum level to emit (Default value = AGECENSUS_LOG_LEVEL)

    Returns:

    """
    logger.remove()
    logger.add(sys.stderr, colorize=AGECENSUS_COLORIZE_LOGS, level=level)


def log_regions(regions, limit: int = 10):
    """
    Log the regions a multi-region query is about to scan
    Args:
      regions: list of region identifiers
      limit: how many names to print before truncating (Default value = 10)

    Returns:

    """
    shown = ", ".join(map(str, regions[:limit]))
    more = f" (+{len(regions) - limit} more)" if len(regions) > limit else ""
    logger.info(f"Scanning {len(regions)} regions: [{shown}]{more}")


# set colorization based on env vars
setup_default_logger()
