"""Root logger setup for the weather client.

``WEATHERDESK_LOG_LEVEL`` (a level name or number) wins over everything.
Otherwise a truthy ``WEATHERDESK_DEBUG`` or ``WEATHERDESK_DEBUG_LOGGING``
selects DEBUG, and the settings flag decides last.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "WEATHERDESK_LOG_LEVEL"
DEBUG_ENVS = ("WEATHERDESK_DEBUG", "WEATHERDESK_DEBUG_LOGGING")

# urllib3 logs every pooled connection at DEBUG.
_CHATTY_LOGGERS = ("urllib3",)


def _parse_level(text: Optional[str]) -> Optional[int]:
    value = (text or "").strip()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else None


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    env = os.environ if environ is None else environ
    level = _parse_level(env.get(LEVEL_ENV))
    if level is not None:
        return level
    for name in DEBUG_ENVS:
        if (env.get(name) or "").strip().lower() in {"1", "true", "yes", "on"}:
            return logging.DEBUG
    return None


def _set_level(level: int) -> None:
    logging.getLogger().setLevel(level)
    chatty_level = logging.INFO if level < logging.INFO else level
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)


def configure_root(default_level: int = logging.INFO) -> int:
    """Install the console handler once and return the effective level."""
    level = env_level()
    if level is None:
        level = default_level
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    _set_level(level)
    return level


def apply_debug_preference(debug_enabled: bool) -> int:
    """Follow the settings debug flag unless the environment pins a level."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    _set_level(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_debug_enabled() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG
