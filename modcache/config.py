"""
Configuration - Settings and Logging

Settings come from the environment (optionally a .env file). Logging is only
configured by entry points, never on import of the library modules.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "modcache"
LOG_FORMAT = "%(asctime)s - [Mod Content Cache] %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the cache."""
    data_dir: Path
    log_level: str = "INFO"


def load_settings(data_dir: Optional[str] = None) -> Settings:
    """
    Read settings from the environment.

    Args:
        data_dir: Overrides MODCACHE_DATA_DIR when given

    Returns:
        Settings instance
    """
    load_dotenv()
    raw_dir = data_dir or os.getenv("MODCACHE_DATA_DIR")
    return Settings(
        data_dir=Path(raw_dir).expanduser() if raw_dir else DEFAULT_DATA_DIR,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT
    )
