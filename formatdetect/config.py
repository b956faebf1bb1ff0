#!/usr/bin/env python3
"""
formatdetect Configuration Management
"""

import copy
import os
from pathlib import Path
from typing import Any

from .config_schemas.schemas import FormatDetectConfig
from .config_store import ConfigStore
from .core.workers import resolve_worker_count
from .exceptions import ConfigurationError
from .utils.logger import get_logger

logger = get_logger(__name__)


class Config:
    """Configuration manager for formatdetect"""

    DEFAULT_CONFIG: dict[str, dict[str, Any]] = FormatDetectConfig().to_dict()

    def __init__(self, config_path: str | None = None):
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.config_path = config_path or self._get_default_config_path()

        if config_path and not os.path.exists(config_path):
            raise ConfigurationError(f"Config file not found: {config_path}")

        if os.path.exists(self.config_path):
            self.load_config()

        self._typed_config = self._build_typed_config()

    @staticmethod
    def _get_default_config_path() -> str:
        """Get default configuration file path"""
        return str(Path.home() / ".formatdetect" / "config.json")

    def load_config(self):
        """Load configuration from file"""
        user_config = ConfigStore.load(self.config_path)
        if user_config is not None:
            self._merge_config(user_config)

    def save_config(self):
        """Save configuration to file"""
        ConfigStore.save(self.config_path, self.config)

    def _merge_config(self, user_config: dict[str, Any]):
        """Merge user configuration with defaults"""
        for section, settings in user_config.items():
            if section in self.config and isinstance(settings, dict):
                self.config[section].update(settings)
            else:
                self.config[section] = settings

    def _build_typed_config(self) -> FormatDetectConfig:
        try:
            return FormatDetectConfig.from_dict(self.config)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration in {self.config_path}: {e}") from e

    @property
    def typed_config(self) -> FormatDetectConfig:
        return self._typed_config

    def get(self, section: str, key: str | None = None, default=None):
        """Get configuration value"""
        if key is None:
            return self.config.get(section, default)
        return self.config.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value):
        """Set configuration value and revalidate"""
        self.config.setdefault(section, {})[key] = value
        self._typed_config = self._build_typed_config()

    def effective_max_workers(self, requested: int | None = None) -> int:
        """Worker bound: explicit request, else configured value, else CPU-derived"""
        if requested is None:
            requested = self.typed_config.detection.max_workers
        return resolve_worker_count(requested)

    def get_catalog_path(self) -> str | None:
        """Configured catalog path, resolved against the config file's directory"""
        catalog_path = self.typed_config.detection.catalog_path
        if not catalog_path or os.path.isabs(catalog_path):
            return catalog_path
        return str(Path(self.config_path).parent / catalog_path)

    def __getitem__(self, key):
        """Allow dict-like access"""
        return self.config[key]

    def __contains__(self, key):
        """Allow 'in' operator"""
        return key in self.config
