import os
import json
import logging
from typing import Any, Dict

DB_PATH: str = os.path.expanduser(os.environ.get("ACTIVITYLOG_DB", "~/.local/share/activitylog.db"))

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser(
    os.environ.get("ACTIVITYLOG_CONFIG", "~/.config/activitylog/settings.json")
)

# Debug mode - logs detailed request and query information
DEBUG_MODE: bool = os.environ.get("ACTIVITYLOG_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.expanduser("~/.local/share/activitylog_debug.log")

logger = logging.getLogger(__name__)


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages dynamic application settings loaded from the user's JSON file.

    This class holds settings that can be reloaded at runtime.
    """
    DEFAULT_FREQUENT_NAMES_LIMIT: int = 8
    DEFAULT_PAGE_SIZE: int = 50
    DEFAULT_HOST: str = "127.0.0.1"
    DEFAULT_PORT: int = 5050
    DEFAULT_TICK_SECONDS: float = 1.0
    DEFAULT_REFRESH_SECONDS: float = 30.0

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.frequent_names_limit: int = self.DEFAULT_FREQUENT_NAMES_LIMIT
        self.page_size: int = self.DEFAULT_PAGE_SIZE
        self.host: str = self.DEFAULT_HOST
        self.port: int = self.DEFAULT_PORT
        self.tick_seconds: float = self.DEFAULT_TICK_SECONDS
        self.default_refresh_seconds: float = self.DEFAULT_REFRESH_SECONDS

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    return json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.config_path, e)
        return {}

    def reload(self) -> None:
        """
        Reload configuration from disk, updating this object's attributes.
        """
        self._user_config = self._load_user_config()

        self.frequent_names_limit = int(self._user_config.get(
            'frequent_names_limit', self.DEFAULT_FREQUENT_NAMES_LIMIT
        ))
        self.page_size = int(self._user_config.get('page_size', self.DEFAULT_PAGE_SIZE))
        self.host = str(self._user_config.get('host', self.DEFAULT_HOST))
        self.port = int(self._user_config.get('port', self.DEFAULT_PORT))
        self.tick_seconds = float(self._user_config.get('tick_seconds', self.DEFAULT_TICK_SECONDS))
        self.default_refresh_seconds = float(self._user_config.get(
            'default_refresh_seconds', self.DEFAULT_REFRESH_SECONDS
        ))


# --- Singleton Instance ---
settings = Config()
