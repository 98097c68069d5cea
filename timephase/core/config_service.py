"""
Configuration Service - YAML settings with environment overrides
"""
import os
import yaml
from typing import Any, Dict, List, Optional
from pathlib import Path

from .logging_service import get_logger


PACKAGED_CONFIG = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


class ConfigService:
    """
    Centralized configuration management with environment overrides.

    Priority order:
    1. Environment variables (highest)
    2. YAML config file
    3. Default values (lowest)

    The command line duration is applied on top by the application.
    """

    _instance: Optional['ConfigService'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        """Singleton pattern for global config access"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize only once"""
        if not self._config:
            self.reload()

    def reload(self) -> None:
        """Load config from file and environment"""
        self._config = self._get_defaults()
        self._merge(self._config, self._load_yaml_config())
        self._apply_env_overrides()

    def _config_paths(self) -> List[Path]:
        """Candidate config files, first existing one wins"""
        paths = []
        if env_path := os.environ.get('TIMEPHASE_CONFIG'):
            paths.append(Path(env_path))
        paths.extend([
            Path.home() / ".config" / "timephase" / "config.yaml",  # User path
            Path("config/default.yaml"),  # Development path
            PACKAGED_CONFIG,  # Installed package
        ])
        return paths

    def _load_yaml_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        for config_path in self._config_paths():
            if config_path.exists():
                try:
                    with open(config_path, 'r') as f:
                        loaded = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    get_logger().warning(f"Failed to load {config_path}: {e}")
                    continue
                if not isinstance(loaded, dict):
                    get_logger().warning(f"Ignoring {config_path}: top level is not a mapping")
                    continue
                return loaded

        # Defaults already in place
        return {}

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge override into base"""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides"""
        # Timing
        if env_interval := os.environ.get('TIMEPHASE_INTERVAL'):
            self.set('display.interval', env_interval)

        if env_threshold := os.environ.get('TIMEPHASE_THRESHOLD'):
            self.set('display.threshold', env_threshold)

        if env_offset := os.environ.get('TIMEPHASE_OFFSET'):
            self.set('display.offset', env_offset)

        # Timezone
        if env_tz := os.environ.get('TIMEZONE'):
            self._config['timezone'] = env_tz

        # Logging
        if env_level := os.environ.get('LOG_LEVEL'):
            self.set('logging.level', env_level)

    def _get_defaults(self) -> Dict[str, Any]:
        """Return default configuration"""
        return {
            'timezone': None,
            'display': {
                'interval': '10ms',
                'threshold': '0.1ms',
                'offset': '-123us',
                'clear_width': 208,
            },
            'logging': {
                'level': 'WARNING',
            }
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value using dot notation
        Example: config.get('display.interval')
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration dict"""
        return self._config.copy()

    def set(self, key: str, value: Any) -> None:
        """
        Set config value using dot notation
        Example: config.set('display.interval', '1s')
        """
        keys = key.split('.')
        target = self._config

        for k in keys[:-1]:
            target = target.setdefault(k, {})

        target[keys[-1]] = value


# Global instance
config = ConfigService()
