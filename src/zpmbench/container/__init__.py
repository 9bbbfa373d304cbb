"""Docker CLI adapter."""

from .docker_manager import DockerManager

__all__ = ["DockerManager"]
