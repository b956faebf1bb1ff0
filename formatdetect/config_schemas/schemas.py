#!/usr/bin/env python3
"""
formatdetect Configuration Schemas - Typed Dataclasses
Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from ..domain.formats import DetectionPolicy

VALID_POLICIES = tuple(policy.value for policy in DetectionPolicy)
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DetectionConfig:
    """Detector settings"""

    max_workers: int | None = None
    default_policy: str = DetectionPolicy.FIRST_MATCH.value
    catalog_path: str | None = None

    def __post_init__(self):
        """Validate configuration values"""
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.default_policy not in VALID_POLICIES:
            raise ValueError(f"default_policy must be one of {', '.join(VALID_POLICIES)}")

    @property
    def policy(self) -> DetectionPolicy:
        return DetectionPolicy(self.default_policy)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration"""

    level: str = "WARNING"
    log_dir: str | None = None

    def __post_init__(self):
        """Validate configuration values"""
        if self.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(VALID_LOG_LEVELS)}")

    @property
    def numeric_level(self) -> int:
        return logging.getLevelName(self.level.upper())


@dataclass(frozen=True)
class OutputConfig:
    """Output formatting configuration"""

    json_indent: int = 2
    show_progress: bool = True

    def __post_init__(self):
        """Validate configuration values"""
        if self.json_indent < 0:
            raise ValueError("json_indent must be non-negative")


@dataclass(frozen=True)
class FormatDetectConfig:
    """Main formatdetect configuration container"""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "FormatDetectConfig":
        """Create configuration from dictionary; unknown sections are ignored"""
        if not isinstance(config_dict, dict):
            raise TypeError("config_dict must be a dictionary")

        kwargs: dict[str, Any] = {}

        if "detection" in config_dict:
            kwargs["detection"] = DetectionConfig(**config_dict["detection"])

        if "logging" in config_dict:
            kwargs["logging"] = LoggingConfig(**config_dict["logging"])

        if "output" in config_dict:
            kwargs["output"] = OutputConfig(**config_dict["output"])

        return cls(**kwargs)

    def merge(self, other: "FormatDetectConfig") -> "FormatDetectConfig":
        """Merge with another configuration, with other taking precedence"""
        return FormatDetectConfig.from_dict({**self.to_dict(), **other.to_dict()})
