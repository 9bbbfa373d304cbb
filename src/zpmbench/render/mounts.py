"""Stage rendered templates on disk and map them into the container."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable

from zpmbench.errors import StagingError
from zpmbench.kinds import Kind

from .renderer import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MountEntry:
    """A staged host file and where it appears inside the container."""

    host_path: Path
    container_path: PurePosixPath

    def as_volume(self) -> str:
        """Format as a ``docker run -v`` value."""
        return f"{self.host_path}:{self.container_path}"


def container_destination(home: str, relative: str) -> PurePosixPath:
    """Dotfile destination for a bundle entry: ``zshrc`` -> ``<home>/.zshrc``."""
    return PurePosixPath(home) / f".{relative}"


def volume_args(mounts: Iterable[MountEntry]) -> list[str]:
    """Flatten mounts into ``-v host:container`` arguments."""
    args: list[str] = []
    for mount in mounts:
        args.extend(["-v", mount.as_volume()])
    return args


class MountPlanner:
    """Writes a kind's rendered files to ``<rendered_dir>/<kind>/`` and plans mounts.

    The staged tree is left in place after a run so rendered configs can be
    inspected; it is rebuilt from scratch on every plan.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        rendered_dir: Path,
        container_home: str = "/root",
    ) -> None:
        self.renderer = renderer
        self.rendered_dir = Path(rendered_dir)
        self.container_home = container_home

    def staging_dir(self, kind: Kind) -> Path:
        return self.rendered_dir / kind.value

    def plan(self, kind: Kind) -> list[MountEntry]:
        """Render, stage and map every file in the kind's bundle.

        Raises:
            TemplateLoadError, RenderError: If rendering fails. Nothing is
                touched on disk in that case.
            StagingError: If the staging tree cannot be cleared or written.
        """
        rendered = self.renderer.render(kind)

        stage = self.staging_dir(kind)
        self._clear(stage)

        mounts: list[MountEntry] = []
        for relative, contents in sorted(rendered.items()):
            file_path = stage / relative
            self._write(file_path, contents)
            logger.info(f"Rendered {file_path}")
            mounts.append(
                MountEntry(
                    host_path=file_path.resolve(),
                    container_path=container_destination(self.container_home, relative),
                )
            )
        return mounts

    @staticmethod
    def _clear(stage: Path) -> None:
        try:
            shutil.rmtree(stage)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StagingError(f"Failed to clear staging directory {stage}: {e}", stage) from e

    @staticmethod
    def _write(file_path: Path, contents: str) -> None:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingError(
                f"Failed to create directory {file_path.parent}: {e}", file_path.parent
            ) from e
        try:
            file_path.write_text(contents, encoding="utf-8")
        except OSError as e:
            raise StagingError(f"Failed to write {file_path}: {e}", file_path) from e
