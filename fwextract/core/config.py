"""
Configuration management for fwextract.

Handles loading, validation, and access to configuration settings
from YAML files and environment variables.
"""

import os
import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from .exceptions import InvalidConfigError
from .models import FirmwareType

logger = logging.getLogger(__name__)


@dataclass
class ExtractorConfig:
    """Firmware extractor configuration."""

    default_extension: str = "bin"
    fallback_prefix: str = "data_"
    enabled_types: List[str] = field(default_factory=lambda: ["gc", "sdma"])
    menu_prefix: str = ""  # e.g. "AMD Firmware\\"

    def firmware_types(self) -> List[FirmwareType]:
        """Enabled firmware types in registration order."""
        return sorted({FirmwareType.from_string(t) for t in self.enabled_types})


@dataclass
class NotifyConfig:
    """Which outcomes are reported to the user with a message box."""

    missing_header: bool = True
    cancelled: bool = False
    success: bool = False


@dataclass
class Config:
    """Main configuration container."""

    log_level: str = "INFO"
    log_file: Optional[str] = None

    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)
    notify: NotifyConfig = field(default_factory=NotifyConfig)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Load configuration from YAML file and environment variables."""
        config_data = {}

        default_paths = [
            Path("./fwextract.yaml"),
            Path.home() / ".fwextract" / "config.yaml",
        ]

        if config_path:
            config_file = Path(config_path)
            if not config_file.exists():
                raise InvalidConfigError(f"Configuration file not found: {config_path}")
        else:
            config_file = None
            for path in default_paths:
                if path.exists():
                    config_file = path
                    break

        if config_file:
            logger.info(f"Loading configuration from {config_file}")
            try:
                with open(config_file, "r") as f:
                    config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfigError(f"Invalid YAML in {config_file}: {e}") from e
            if not isinstance(config_data, dict):
                raise InvalidConfigError(f"Configuration root must be a mapping: {config_file}")

        config_data = cls._apply_env_overrides(config_data)

        return cls._from_dict(config_data)

    @classmethod
    def _apply_env_overrides(cls, config_data: Dict) -> Dict:
        """Apply environment variable overrides."""
        env_mappings = {
            "FWEXTRACT_LOG_LEVEL": ("log_level",),
            "FWEXTRACT_LOG_FILE": ("log_file",),
            "FWEXTRACT_ENABLED_TYPES": ("extractor", "enabled_types"),
            "FWEXTRACT_CONFIRM_SUCCESS": ("notify", "success"),
            "FWEXTRACT_NOTIFY_MISSING": ("notify", "missing_header"),
        }

        for env_var, path in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                cls._set_nested(config_data, path, value)

        return config_data

    @staticmethod
    def _set_nested(data: Dict, path: tuple, value: Any):
        """Set a nested dictionary value."""
        for key in path[:-1]:
            data = data.setdefault(key, {})

        # Type conversion
        if isinstance(value, str):
            if value.lower() in ("true", "false"):
                value = value.lower() == "true"
            elif path[-1] == "enabled_types":
                value = [v.strip() for v in value.split(",") if v.strip()]

        data[path[-1]] = value

    @classmethod
    def _from_dict(cls, data: Dict) -> "Config":
        """Create Config instance from dictionary."""
        data = dict(data)
        extractor_data = data.pop("extractor", {}) or {}
        notify_data = data.pop("notify", {}) or {}

        try:
            return cls(
                extractor=ExtractorConfig(**extractor_data),
                notify=NotifyConfig(**notify_data),
                **{k: v for k, v in data.items() if k in cls.__dataclass_fields__},
            )
        except TypeError as e:
            raise InvalidConfigError(f"Unknown configuration key: {e}") from e

    def save(self, path: str):
        """Save configuration to YAML file."""
        import dataclasses

        with open(path, "w") as f:
            yaml.dump(dataclasses.asdict(self), f, default_flow_style=False)

        logger.info(f"Configuration saved to {path}")

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.log_level}")

        if not self.extractor.enabled_types:
            errors.append("At least one firmware type must be enabled")
        for type_name in self.extractor.enabled_types:
            try:
                FirmwareType.from_string(type_name)
            except ValueError as e:
                errors.append(str(e))

        ext = self.extractor.default_extension
        if not ext or "." in ext or "/" in ext:
            errors.append(f"Invalid default extension: {ext!r}")

        return errors
