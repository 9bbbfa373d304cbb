"""Configuration loading for zpmbench."""

from .loader import load_config, load_yaml
from .models import BenchConfig

__all__ = ["BenchConfig", "load_config", "load_yaml"]
