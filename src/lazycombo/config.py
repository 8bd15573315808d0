"""Configuration for lazycombo components."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from lazycombo.logger import get_logger

logger = get_logger("config")

ENV_PREFIX = "LAZYCOMBO_"


@dataclass
class ComboConfig:
    """Configuration for a lazy combo box and its lookup worker pool."""

    # Lookup execution
    max_workers: int = 4
    thread_name_prefix: str = "lazycombo-lookup"

    # Widget defaults
    text_member: Optional[str] = None
    is_editable: bool = True

    # Demo app
    lookup_delay: float = 0.3

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ComboConfig":
        """
        Build a configuration from ``LAZYCOMBO_*`` environment variables.

        A ``.env`` file is loaded first (existing variables win). Unparseable
        numbers fall back to the default with a warning.

        Args:
            dotenv_path: Optional explicit path to a .env file

        Returns:
            ComboConfig populated from the environment
        """
        load_dotenv(dotenv_path)
        defaults = cls()

        return cls(
            max_workers=_env_int("MAX_WORKERS", defaults.max_workers),
            thread_name_prefix=os.getenv(f"{ENV_PREFIX}THREAD_NAME_PREFIX", defaults.thread_name_prefix),
            text_member=os.getenv(f"{ENV_PREFIX}TEXT_MEMBER") or defaults.text_member,
            is_editable=_env_bool("EDITABLE", defaults.is_editable),
            lookup_delay=_env_float("LOOKUP_DELAY", defaults.lookup_delay),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper(),
            log_file=os.getenv(f"{ENV_PREFIX}LOG_FILE") or defaults.log_file,
            console_output=_env_bool("CONSOLE_OUTPUT", defaults.console_output),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {ENV_PREFIX}{name}={raw!r}, using {default}")
        return default
    if value < 1:
        logger.warning(f"{ENV_PREFIX}{name} must be positive, using {default}")
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {ENV_PREFIX}{name}={raw!r}, using {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")
