"""Pydantic models for zpmbench configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

# Project root (src/zpmbench/config -> src/zpmbench -> src -> project).
# It holds the Dockerfile and is the docker build context.
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent

DEFAULT_IMAGE = "zsh-plugin-manager-benchmark"


def _default_project_dir() -> Path:
    # An installed (non-editable) package has no Dockerfile next to it; use
    # the working directory, which must then be a checkout of the project.
    if (PROJECT_ROOT / "Dockerfile").is_file():
        return PROJECT_ROOT
    return Path.cwd()


class BenchConfig(BaseModel):
    """Where to stage files, which image to build and how to run it."""

    project_dir: Path = Field(default_factory=_default_project_dir)
    image: str = DEFAULT_IMAGE
    dockerfile: str | None = None  # Relative to project_dir; None = docker default
    docker_binary: str = "docker"
    benchmark_tool: str = "hyperfine"
    container_home: str = "/root"
    interactive: bool = True  # Pass -it to docker run
    rendered_dirname: str = "rendered"
    results_dirname: str = "results"

    @property
    def rendered_dir(self) -> Path:
        """Staging directory for rendered templates."""
        return self.project_dir / self.rendered_dirname

    @property
    def results_dir(self) -> Path:
        """Host directory bound to /results inside the container."""
        return self.project_dir / self.results_dirname

    @property
    def dockerfile_path(self) -> Path | None:
        if self.dockerfile is None:
            return None
        return self.project_dir / self.dockerfile
