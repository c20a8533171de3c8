"""
Configuration utilities
"""

import copy
import logging
import yaml
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'network': {
        'directory': 'data/networks',
        'pattern': '*.txt'
    },
    'algorithm': {
        'detect_negative_cycles': True
    },
    'report': {
        'show_matrices': True,
        'draining_report': False,
        'reference_check': True
    },
    'output': {
        'results_directory': 'data/results',
        'save_results': True,
        'verbose': False
    },
    'visualization': {
        'save_plots': False,
        'style': 'light'
    }
}


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Project configuration loaded from YAML on top of the built-in defaults"""

    def __init__(self, config_path: str = "config.yaml"):
        self.config_path = Path(config_path)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            logger.warning(f"Config file {self.config_path} not found, using defaults")
            return copy.deepcopy(DEFAULT_CONFIG)

        with open(self.config_path, 'r') as file:
            loaded = yaml.safe_load(file) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")
        logger.debug(f"Config loaded from {self.config_path}")
        return _merge(DEFAULT_CONFIG, loaded)

    def get(self, key_path: str, default=None):
        """Looks up a value with dot notation (e.g. 'output.results_directory')"""
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any):
        """Sets a value with dot notation"""
        keys = key_path.split('.')
        config_ref = self.config

        for key in keys[:-1]:
            if key not in config_ref:
                config_ref[key] = {}
            config_ref = config_ref[key]

        config_ref[keys[-1]] = value
