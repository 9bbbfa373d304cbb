"""YAML configuration file loading with Pydantic validation."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from zpmbench.errors import ConfigError

from .models import BenchConfig


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(f"Expected a mapping at the top of {path}")
            return data
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path | None = None) -> BenchConfig:
    """Load and validate a benchmark configuration file.

    A relative ``project_dir`` is resolved against the config file's
    directory. Without a path, the defaults are returned.

    Raises:
        ConfigError: If loading or validation fails.
    """
    if path is None:
        return BenchConfig()

    data = load_yaml(path)
    try:
        config = BenchConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e

    if "project_dir" in data and not config.project_dir.is_absolute():
        config.project_dir = (Path(path).parent / config.project_dir).resolve()
    return config
