"""Docker image builds and container runs via the docker CLI.

Uses subprocess to call the docker binary; no Python Docker SDK.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from zpmbench.errors import ProcessExitError, ProcessLaunchError

logger = logging.getLogger(__name__)


class DockerManager:
    """Builds the benchmark image and runs one-shot containers from it."""

    def __init__(self, binary: str = "docker") -> None:
        self.binary = binary

    def build_image(
        self,
        image: str,
        context_dir: Path,
        dockerfile: Path | None = None,
    ) -> None:
        """Build ``image`` from ``context_dir``.

        Docker's layer cache makes rebuilding an up-to-date image cheap.
        Build output is captured and only logged at debug level.

        Raises:
            ProcessLaunchError: If docker cannot be executed.
            ProcessExitError: If the build fails.
        """
        cmd = [self.binary, "build", "--tag", image]
        if dockerfile is not None:
            cmd.extend(["-f", str(dockerfile)])
        cmd.append(str(context_dir))

        logger.info(f"Building image {image}")
        logger.debug(f"Running: {shlex.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ProcessLaunchError(f"Failed to launch docker build: {e}", cmd) from e

        if result.stdout:
            logger.debug(result.stdout.rstrip())
        if result.returncode != 0:
            raise ProcessExitError(
                f"Failed to build Docker image '{image}' "
                f"(exit {result.returncode}): {result.stderr.strip()}",
                cmd,
                result.returncode,
            )

    def run_container(
        self,
        image: str,
        command: Sequence[str],
        volumes: Iterable[tuple[str, str]] = (),
        env: Mapping[str, str] | None = None,
        extra_args: Sequence[str] = (),
        interactive: bool = True,
    ) -> None:
        """Run ``command`` in a fresh container, streaming its output.

        Args:
            image: Image tag to run.
            command: Arguments after the image name.
            volumes: ``(host_path, container_path)`` bind mounts.
            env: Environment variables set inside the container.
            extra_args: Additional ``docker run`` arguments.
            interactive: Attach stdin and allocate a TTY (``-it``).

        Raises:
            ProcessLaunchError: If docker cannot be executed.
            ProcessExitError: If the container exits non-zero.
        """
        cmd = [self.binary, "run"]
        for host_path, container_path in volumes:
            cmd.extend(["-v", f"{host_path}:{container_path}"])
        for key, value in (env or {}).items():
            cmd.extend(["-e", f"{key}={value}"])
        cmd.extend(extra_args)
        if interactive:
            cmd.append("-it")
        cmd.append(image)
        cmd.extend(command)

        logger.info(f"Starting container: {shlex.join(cmd)}")
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise ProcessLaunchError(f"Failed to launch docker run: {e}", cmd) from e

        if result.returncode != 0:
            raise ProcessExitError(
                f"Container command failed (exit {result.returncode}): "
                f"{shlex.join(command)}",
                cmd,
                result.returncode,
            )
