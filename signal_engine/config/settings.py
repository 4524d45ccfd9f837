"""
Process-level settings for the signal engine.

These control the ambient behaviour of the command-line tool (logging, where
price files live, which strategy file to load). The scoring functions never
read them: every threshold that affects a result arrives through a
``StrategyConfig`` passed by the caller.

Values come from code defaults, overridden by a ``.env`` file or environment
variables with the ``SIGNAL_ENGINE_`` prefix, e.g.
``SIGNAL_ENGINE_LOG_LEVEL=DEBUG``.
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Main settings object.
    """
    model_config = SettingsConfigDict(
        env_prefix='SIGNAL_ENGINE_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
    )

    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    DATA_DIR: str = "data"  # Directory holding <SYMBOL>.csv price files
    STRATEGY_FILE: Optional[str] = None  # JSON strategy definition; defaults apply when unset
