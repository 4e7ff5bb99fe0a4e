"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (PROCINDEX_*)
  2. Project config (.procindex/config.yaml)
  3. User config (~/.procindex/config.yaml)
  4. Defaults
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .core.dialects import DEFAULT_DIALECTS, DialectRegistry
from .core.types import (
    ClassNameResolver,
    DEFAULT_BASE_PACKAGE,
    DEFAULT_BUILTIN_TYPES,
    DEFAULT_PACKAGE_SEPARATOR,
)
from .core.listener import DEFAULT_WILDCARD_MARKER

logger = logging.getLogger(__name__)

DIALECT_NAMES = [d.name for d in DEFAULT_DIALECTS]
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ResolverConfig:
    """Class-name resolution settings."""
    base_package: str = DEFAULT_BASE_PACKAGE
    builtin_types: List[str] = field(default_factory=lambda: list(DEFAULT_BUILTIN_TYPES))
    package_separator: str = DEFAULT_PACKAGE_SEPARATOR
    wildcard_marker: str = DEFAULT_WILDCARD_MARKER

    def create_resolver(self) -> ClassNameResolver:
        return ClassNameResolver(
            base_package=self.base_package,
            builtin_types=self.builtin_types,
            separator=self.package_separator,
        )

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not self.package_separator:
            return "Package separator must not be empty"
        if not self.wildcard_marker:
            return "Wildcard marker must not be empty"
        for name in self.builtin_types:
            if self.package_separator in name:
                return f"Built-in type '{name}' must be a simple name"
        return None


@dataclass
class DialectsConfig:
    """Which expression dialects contribute type references."""
    enabled: List[str] = field(default_factory=lambda: list(DIALECT_NAMES))

    def create_registry(self) -> DialectRegistry:
        return DialectRegistry.with_defaults(self.enabled)

    def validate(self) -> Optional[str]:
        unknown = [n for n in self.enabled if n not in DIALECT_NAMES]
        if unknown:
            return f"Unknown dialect(s) {', '.join(unknown)}. Valid: {', '.join(DIALECT_NAMES)}"
        return None


@dataclass
class PipelineConfig:
    """Build pipeline settings."""
    workers: int = 4
    publish_to_metadata: bool = True

    def validate(self) -> Optional[str]:
        if self.workers < 1:
            return "Workers must be >= 1"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    format: str = "auto"   # "auto" | "table" | "json"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"

        valid_formats = ("auto", "table", "json")
        if self.format not in valid_formats:
            return f"Unknown format '{self.format}'. Valid: {', '.join(valid_formats)}"
        return None


@dataclass
class LoggingConfig:
    level: str = "WARNING"

    def validate(self) -> Optional[str]:
        if self.level.upper() not in LOG_LEVELS:
            return f"Unknown log level '{self.level}'. Valid: {', '.join(LOG_LEVELS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    dialects: DialectsConfig = field(default_factory=DialectsConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> Optional[str]:
        """First validation error across all sections, or None."""
        for section in (self.resolver, self.dialects, self.pipeline, self.display, self.logging):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "resolver": {
                "base_package": self.resolver.base_package,
                "builtin_types": list(self.resolver.builtin_types),
                "package_separator": self.resolver.package_separator,
                "wildcard_marker": self.resolver.wildcard_marker,
            },
            "dialects": {
                "enabled": list(self.dialects.enabled),
            },
            "pipeline": {
                "workers": self.pipeline.workers,
                "publish_to_metadata": self.pipeline.publish_to_metadata,
            },
            "display": {
                "symbols": self.display.symbols,
                "format": self.display.format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        resolver_data = data.get("resolver", {})
        dialects_data = data.get("dialects", {})
        pipeline_data = data.get("pipeline", {})
        display_data = data.get("display", {})
        logging_data = data.get("logging", {})

        return cls(
            resolver=ResolverConfig(
                base_package=resolver_data.get("base_package", DEFAULT_BASE_PACKAGE),
                builtin_types=list(resolver_data.get("builtin_types", DEFAULT_BUILTIN_TYPES)),
                package_separator=resolver_data.get("package_separator", DEFAULT_PACKAGE_SEPARATOR),
                wildcard_marker=resolver_data.get("wildcard_marker", DEFAULT_WILDCARD_MARKER),
            ),
            dialects=DialectsConfig(
                enabled=list(dialects_data.get("enabled", DIALECT_NAMES)),
            ),
            pipeline=PipelineConfig(
                workers=int(pipeline_data.get("workers", 4)),
                publish_to_metadata=bool(pipeline_data.get("publish_to_metadata", True)),
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                format=display_data.get("format", "auto"),
            ),
            logging=LoggingConfig(
                level=logging_data.get("level", "WARNING"),
            ),
        )


# Settings reachable through get()/set(): "section.setting" -> value parser
_SETTINGS = {
    "resolver.base_package": str,
    "resolver.package_separator": str,
    "resolver.wildcard_marker": str,
    "resolver.builtin_types": lambda v: [s.strip() for s in v.split(",") if s.strip()],
    "dialects.enabled": lambda v: [s.strip() for s in v.split(",") if s.strip()],
    "pipeline.workers": int,
    "pipeline.publish_to_metadata": lambda v: v.lower() in ("true", "1", "yes", "on"),
    "display.symbols": str,
    "display.format": str,
    "logging.level": str.upper,
}

# Environment overrides: variable -> setting key
_ENV_OVERRIDES = {
    "PROCINDEX_BASE_PACKAGE": "resolver.base_package",
    "PROCINDEX_DIALECTS": "dialects.enabled",
    "PROCINDEX_WORKERS": "pipeline.workers",
    "PROCINDEX_FORMAT": "display.format",
    "PROCINDEX_LOG_LEVEL": "logging.level",
}


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment variables
      2. Project config (.procindex/config.yaml)
      3. User config (~/.procindex/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".procindex"
    USER_CONFIG_FILE = "config.yaml"
    PROJECT_CONFIG_DIR = ".procindex"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, user_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.user_dir = Path(user_dir) if user_dir else self.USER_CONFIG_DIR
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.user_dir / self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read_yaml(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read_yaml(self.project_config_path))

        # Layer 3: Environment overrides
        for env_key, setting in _ENV_OVERRIDES.items():
            raw = os.environ.get(env_key)
            if not raw:
                continue
            try:
                value = _SETTINGS[setting](raw)
            except ValueError:
                logger.warning("Ignoring %s=%r: not a valid value", env_key, raw)
                continue
            section, name = setting.split(".")
            config_data.setdefault(section, {})[name] = value

        self._config = Config.from_dict(config_data)
        return self._config

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring malformed config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", path)
            return {}
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self._write_yaml(self.project_config_path, config)

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self._write_yaml(self.user_config_path, config)

    def _write_yaml(self, path: Path, config: Config):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)
        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "resolver.base_package")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        parser = _SETTINGS.get(key)
        if parser is None:
            return f"Unknown setting: {key}. Valid: {', '.join(_SETTINGS)}"

        try:
            parsed = parser(value)
        except ValueError:
            return f"Invalid value for {key}: {value}"

        config = Config.from_dict(self.load().to_dict())
        section, setting = key.split(".")
        setattr(getattr(config, section), setting, parsed)

        error = getattr(config, section).validate()
        if error:
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)
        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value as display text."""
        if key not in _SETTINGS:
            return None
        section, setting = key.split(".")
        value = getattr(getattr(self.load(), section), setting)
        if isinstance(value, list):
            return ", ".join(value)
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        lines = ["Configuration:", ""]
        current_section = None
        for key in _SETTINGS:
            section, setting = key.split(".")
            if section != current_section:
                if current_section is not None:
                    lines.append("")
                lines.append(f"{section.title()}:")
                current_section = section
            lines.append(f"  {setting}: {self.get(key)}")
        lines.extend([
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])
        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
