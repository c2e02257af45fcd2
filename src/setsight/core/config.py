"""
Configuration Management for SetSight

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables
- Command line arguments

Configuration precedence (highest to lowest):
1. Command line arguments
2. Environment variables (SETSIGHT_*)
3. Configuration file
4. Default values
"""

import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from setsight.core.constants import HIGHLIGHT_RANDOM_COUNT, SELF_DESTRUCT_HIGHLIGHT_THRESHOLD

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class LoaderConfig:
    """Configuration for replay discovery."""

    file_pattern: str = "*.json"
    recursive: bool = False


@dataclass
class StatsConfig:
    """Configuration for stat aggregation and the highlight recap."""

    # Seed for highlight selection; None draws fresh entropy every run
    seed: int | None = None
    highlight_random_count: int = HIGHLIGHT_RANDOM_COUNT
    self_destruct_threshold: int = SELF_DESTRUCT_HIGHLIGHT_THRESHOLD


@dataclass
class ExportConfig:
    """Configuration for output files."""

    output_file: str = "output.json"
    json_indent: int | None = None
    csv_delimiter: str = ","


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # level name ("DEBUG") or number (10)
    level: str | int = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class SetSightConfig:
    """Main configuration container."""

    loader: LoaderConfig = field(default_factory=LoaderConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_version: str = "1.0"


# ============================================================================
# Configuration Loading
# ============================================================================


def resolve_log_level(level: str | int) -> int:
    """
    Turn a configured log level into a logging level number.

    Accepts names in any case ("debug"), numbers (10) and numeric strings
    ("10"), since YAML and environment variables can produce any of them.

    Raises:
        ValueError: If the name is not a known logging level
    """
    if isinstance(level, int):
        return level

    text = str(level).strip()
    if text.isdigit():
        return int(text)

    number = logging.getLevelName(text.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def get_default_config_paths() -> list[Path]:
    """Get the default paths to search for configuration files."""
    home = Path.home()
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(home / ".config"))

    return [
        Path.cwd() / "setsight.yaml",
        Path.cwd() / "setsight.toml",
        Path.cwd() / "setsight.json",
        Path.cwd() / ".setsight.yaml",
        Path(xdg_config) / "setsight" / "config.yaml",
        home / ".setsight.yaml",
    ]


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Parse a YAML config; syntax errors surface as ValueError like JSON and TOML."""
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_toml_config(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml_config(path)
    elif suffix == ".toml":
        return load_toml_config(path)
    elif suffix == ".json":
        return load_json_config(path)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


def _coerce_env_value(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.lstrip("-").isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    env_mappings = {
        "SETSIGHT_LOG_LEVEL": ("logging", "level"),
        "SETSIGHT_FILE_PATTERN": ("loader", "file_pattern"),
        "SETSIGHT_RECURSIVE": ("loader", "recursive"),
        "SETSIGHT_SEED": ("stats", "seed"),
        "SETSIGHT_HIGHLIGHT_COUNT": ("stats", "highlight_random_count"),
        "SETSIGHT_OUTPUT_FILE": ("export", "output_file"),
    }

    # free-form strings, never coerced
    string_vars = {"SETSIGHT_LOG_LEVEL", "SETSIGHT_FILE_PATTERN", "SETSIGHT_OUTPUT_FILE"}

    for env_var, (section, key) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            coerced = value if env_var in string_vars else _coerce_env_value(value)
            config.setdefault(section, {})[key] = coerced

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def dict_to_config(data: dict[str, Any]) -> SetSightConfig:
    """Convert a dictionary to SetSightConfig, ignoring unknown keys."""
    config = SetSightConfig()

    for section_name in ("loader", "stats", "export", "logging"):
        section = getattr(config, section_name)
        for key, value in (data.get(section_name) or {}).items():
            if hasattr(section, key):
                setattr(section, key, value)
            else:
                logger.debug(f"Ignoring unknown config key: {section_name}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> SetSightConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged SetSightConfig
    """
    config_data: dict[str, Any] = {}

    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    if include_env:
        config_data = merge_configs(config_data, load_env_config())

    return dict_to_config(config_data)


# ============================================================================
# Configuration Saving
# ============================================================================


def config_to_dict(config: SetSightConfig) -> dict[str, Any]:
    return asdict(config)


def save_config(config: SetSightConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (.yaml, .yml or .json)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unknown config format: {suffix}")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Global Configuration
# ============================================================================

_global_config: SetSightConfig | None = None


def get_config() -> SetSightConfig:
    """Get the global configuration, loading it if necessary."""
    global _global_config

    if _global_config is None:
        _global_config = load_config()

    return _global_config


def set_config(config: SetSightConfig) -> None:
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = None


# ============================================================================
# Configuration Templates
# ============================================================================

DEFAULT_CONFIG_YAML = """# SetSight Configuration

# Replay discovery
loader:
  file_pattern: "*.json"
  recursive: false

# Stat aggregation
stats:
  # seed: 42  # fix the highlight recap between runs
  highlight_random_count: 2
  self_destruct_threshold: 1

# Output files
export:
  output_file: output.json
  # json_indent: 2
  csv_delimiter: ","

# Logging settings
logging:
  level: INFO
"""


def generate_default_config(path: Path) -> None:
    """Generate a default configuration file."""
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        path.write_text(DEFAULT_CONFIG_YAML)
    else:
        save_config(SetSightConfig(), path)

    logger.info(f"Generated default config at: {path}")
