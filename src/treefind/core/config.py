"""
Settings module for treefind.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default settings file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default settings values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    return section_defaults.get(key, fallback)


@dataclass
class TraversalConfig:
    """Configuration for directory traversal."""

    sort_entries: bool = field(
        default_factory=lambda: _get_default("traversal", "sort_entries", True)
    )
    follow_root_links: bool = field(
        default_factory=lambda: _get_default("traversal", "follow_root_links", True)
    )

    def __post_init__(self) -> None:
        """Coerce flags given as strings (e.g. quoted YAML values) to booleans."""
        self.sort_entries = _coerce_bool(self.sort_entries)
        self.follow_root_links = _coerce_bool(self.follow_root_links)


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class TreefindConfig:
    """Main settings class for treefind."""

    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "TreefindConfig":
        """
        Load settings from a YAML or JSON file.

        Args:
            path: Path to the settings file (.yaml, .yml, or .json)

        Returns:
            TreefindConfig instance with loaded values

        Raises:
            FileNotFoundError: If the settings file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "TreefindConfig":
        """Create TreefindConfig from a dictionary."""
        config = cls()

        if "traversal" in data:
            config.traversal = TraversalConfig(**data["traversal"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "TreefindConfig":
        """
        Apply environment variable overrides to the settings.

        Environment variables follow the pattern: TREEFIND_<SECTION>_<KEY>
        Examples:
            - TREEFIND_TRAVERSAL_SORT_ENTRIES
            - TREEFIND_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Traversal config
            "TREEFIND_TRAVERSAL_SORT_ENTRIES": ("traversal", "sort_entries", _parse_bool),
            "TREEFIND_TRAVERSAL_FOLLOW_ROOT_LINKS": (
                "traversal",
                "follow_root_links",
                _parse_bool,
            ),
            # Logging config
            "TREEFIND_LOGGING_LEVEL": ("logging", "level", str),
            "TREEFIND_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert settings to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize settings to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return _parse_bool(value)
    return bool(value)


def load_config(
    config_path: Optional[Path | str] = None, apply_env: bool = True
) -> TreefindConfig:
    """
    Load settings with optional environment variable overrides.

    Args:
        config_path: Optional path to settings file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        TreefindConfig instance
    """
    if config_path:
        config = TreefindConfig.from_file(config_path)
    else:
        config = TreefindConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def setup_logging(logging_config: LoggingConfig, verbose: bool = False) -> None:
    """
    Configure the root logger to write to stderr.

    Does nothing when the root logger already has handlers.

    Args:
        logging_config: Level and format to apply
        verbose: Force DEBUG level regardless of the configured level
    """
    level = logging.DEBUG if verbose else logging.getLevelName(logging_config.level.upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {logging_config.level!r}, using WARNING")
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=logging_config.format,
        stream=sys.stderr,
    )
