"""Template rendering and mount planning."""

from .mounts import MountEntry, MountPlanner, volume_args
from .renderer import TemplateRenderer

__all__ = ["MountEntry", "MountPlanner", "TemplateRenderer", "volume_args"]
