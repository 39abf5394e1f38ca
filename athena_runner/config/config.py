"""
Configuration management
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = 'athena.yaml'

# Environment variables that override values from the YAML file
ENV_OVERRIDES = {
    'AWS_DEFAULT_REGION': 'athena.region',
    'AWS_ACCESS_KEY_ID': 'athena.access_key_id',
    'AWS_SECRET_ACCESS_KEY': 'athena.secret_access_key',
}


class Config:
    """
    Unified configuration manager

    Loads athena.yaml from a config directory, merges it over the built-in
    defaults and applies credential overrides from the environment.
    """

    def __init__(self, config_dir: str = "config", env: Dict[str, str] = None):
        """
        Initialize configuration

        Args:
            config_dir: Directory containing athena.yaml
            env: Environment mapping (defaults to os.environ)
        """
        self.config_dir = Path(config_dir)
        self._config = self._get_default_config()
        self._load_configs()
        self._apply_env(os.environ if env is None else env)

    def _load_configs(self):
        """Load the configuration file, if present"""
        filepath = self.config_dir / CONFIG_FILENAME
        if not filepath.exists():
            logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, self.config_dir)
            return

        with open(filepath, 'r') as f:
            config_data = yaml.safe_load(f)
        if config_data:
            self._config = self._merge(self._config, config_data)

    def _merge(self, base: Dict, override: Dict) -> Dict:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = self._merge(base[key], value)
            else:
                base[key] = value
        return base

    def _apply_env(self, env: Dict[str, str]):
        for var, key in ENV_OVERRIDES.items():
            if env.get(var):
                self.set(key, env[var])

    def _get_default_config(self) -> Dict:
        """Get default configuration"""
        return {
            'athena': {
                'region': None,
                'database': None,
                'workgroup': 'primary',
                'catalog': None,
                'output_location': None,
            },
            'polling': {
                'queued_interval': 0.05,
                'running_interval': 0.01,
                'timeout': None,
                'max_polls': None,
            },
            'service': {
                'swallow_errors': False,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key (supports nested keys like 'polling.timeout')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set a configuration value using a dotted key"""
        keys = key.split('.')
        target = self._config
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value
