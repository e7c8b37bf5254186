"""Configuration loaded from an optional YAML file merged over defaults."""

import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CDPLOG_CONFIG"


class Config:
    """Configuration manager that loads from YAML and merges with defaults."""

    DEFAULTS = {
        "output": {
            "format": "text",
            "color": False,
            "summaries": True,
        },
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s [CDPLOG] %(levelname)s %(name)s %(message)s",
        },
    }

    def __init__(self, config_path=None):
        self._config = copy.deepcopy(self.DEFAULTS)

        if config_path is not None:
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    user_config = yaml.safe_load(f)

                if user_config and isinstance(user_config, dict):
                    self._config = self._deep_merge(self._config, user_config)
                logger.info("Loaded YAML config from %s", config_path)
            except FileNotFoundError:
                logger.warning("Config file %s not found, using defaults", config_path)
            except yaml.YAMLError as e:
                logger.warning("Invalid YAML in %s, using defaults: %s", config_path, e)

    @staticmethod
    def _deep_merge(base, override):
        """Recursively merge override dict into base dict."""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)
        return result

    def __getitem__(self, key):
        return self._config[key]


def load_config(path: str | None = None) -> Config:
    """Build a Config from *path*, falling back to ``$CDPLOG_CONFIG``."""
    return Config(path or os.environ.get(CONFIG_ENV_VAR) or None)
