"""Settings lookup for the Spotify top tracks client

A value comes from the process environment first, then from a ``.env``
file (merged into the environment at startup), then from the default
declared in settings.py. The default's type decides how the raw string
is coerced.
"""

import logging
import os
from pathlib import Path
from typing import Any, List, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes")


class ConfigLoader:
    """Environment-backed settings with typed defaults"""

    def __init__(self, env_path: Optional[str] = None):
        """
        Args:
            env_path: .env file to merge; ``./.env`` when omitted
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        # variables already set in the process are not overridden
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded settings from {self.env_path}")
        else:
            logger.debug(f"No .env at {self.env_path}, using process environment and defaults")

    def get(self, env_var: str, default: Any) -> Any:
        """Value of ``env_var`` coerced to the type of ``default``

        Unparseable numbers fall back to the default with a warning.
        ``~/`` defaults are expanded to the user's home directory.
        """
        raw = os.getenv(env_var)
        if raw is None:
            if isinstance(default, str) and default.startswith("~/"):
                return str(Path(default).expanduser())
            return default
        return self._coerce(env_var, raw, default)

    def _coerce(self, env_var: str, raw: str, default: Any) -> Any:
        # bool before int: bool is an int subclass
        if isinstance(default, bool):
            return raw.lower() in TRUE_VALUES
        if isinstance(default, list):
            return [item for item in raw.replace(",", " ").split() if item]
        if isinstance(default, (int, float)):
            try:
                return type(default)(raw)
            except ValueError:
                logger.warning(f"{env_var}={raw!r} is not a valid {type(default).__name__}, using default: {default}")
                return default
        return raw

    def get_list(self, env_var: str, default: List[str]) -> List[str]:
        """Comma or space separated list, e.g. OAuth scopes"""
        return list(self.get(env_var, list(default)))


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Process-wide loader, created on first use"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
