from __future__ import annotations
from pathlib import Path
import logging
import os

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "ecotrace", level: str | None = None) -> logging.Logger:
    """Return a named logger, configuring the root handler on first use.

    LOG_LEVEL in the environment wins over ``level`` (usually taken from config.yaml).
    """
    lvl = (os.getenv("LOG_LEVEL") or level or "INFO").upper()
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format=_LOG_FORMAT)
    logger.setLevel(getattr(logging, lvl, logging.INFO))
    return logger


def find_project_root() -> Path:
    # start at this file and walk up looking for a 'config' directory
    here = Path(__file__).resolve()
    for parent in [here.parent] + list(here.parents):
        if (parent / "config" / "config.yaml").exists():
            return parent
    # fallback: assume two levels up (project root)
    return here.parents[2]
