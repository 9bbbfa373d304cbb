"""Tests for DockerManager - all tests mock subprocess.run."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from zpmbench.container.docker_manager import DockerManager
from zpmbench.errors import ProcessExitError, ProcessLaunchError


class TestBuildImage:
    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_build_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        DockerManager().build_image("zsh-plugin-manager-benchmark", Path("/project"))
        cmd = mock_run.call_args[0][0]
        assert cmd == ["docker", "build", "--tag", "zsh-plugin-manager-benchmark", "/project"]
        assert mock_run.call_args[1]["capture_output"] is True

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_build_with_dockerfile(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        DockerManager().build_image(
            "bench:test", Path("/project"), dockerfile=Path("/project/docker/Dockerfile")
        )
        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("-f") + 1] == "/project/docker/Dockerfile"
        assert cmd[-1] == "/project"

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_custom_binary(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        DockerManager(binary="podman").build_image("bench:test", Path("/project"))
        assert mock_run.call_args[0][0][0] == "podman"

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_build_failure(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="no space left")
        with pytest.raises(ProcessExitError, match="no space left") as excinfo:
            DockerManager().build_image("bench:test", Path("/project"))
        assert excinfo.value.returncode == 1
        assert excinfo.value.command[:2] == ["docker", "build"]

    @patch("zpmbench.container.docker_manager.subprocess.run", side_effect=FileNotFoundError("docker"))
    def test_docker_not_installed(self, mock_run):
        with pytest.raises(ProcessLaunchError, match="Failed to launch docker build") as excinfo:
            DockerManager().build_image("bench:test", Path("/project"))
        assert excinfo.value.command[0] == "docker"


class TestRunContainer:
    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_run_argv(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        DockerManager().run_container(
            "bench:test",
            ["zsh"],
            volumes=[("/p/results", "/results"), ("/p/rendered/zinit/zshrc", "/root/.zshrc")],
        )
        cmd = mock_run.call_args[0][0]
        assert cmd == [
            "docker", "run",
            "-v", "/p/results:/results",
            "-v", "/p/rendered/zinit/zshrc:/root/.zshrc",
            "-it",
            "bench:test",
            "zsh",
        ]

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_output_is_streamed(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        DockerManager().run_container("bench:test", ["zsh"])
        kwargs = mock_run.call_args[1]
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_non_interactive(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        DockerManager().run_container("bench:test", ["sheldon", "--version"], interactive=False)
        cmd = mock_run.call_args[0][0]
        assert "-it" not in cmd
        assert cmd[-3:] == ["bench:test", "sheldon", "--version"]

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_env_and_extra_args(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        DockerManager().run_container(
            "bench:test", ["zsh"], env={"DEFER": "true"}, extra_args=["--rm"]
        )
        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("-e") + 1] == "DEFER=true"
        assert cmd.index("--rm") < cmd.index("bench:test")

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_failure(self, mock_run):
        mock_run.return_value = MagicMock(returncode=125)
        with pytest.raises(ProcessExitError, match="exit 125") as excinfo:
            DockerManager().run_container("bench:test", ["hyperfine", "zsh -ic exit"])
        assert excinfo.value.returncode == 125
        assert excinfo.value.command[-1] == "zsh -ic exit"

    @patch("zpmbench.container.docker_manager.subprocess.run")
    def test_failure_message_quotes_arguments(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1)
        with pytest.raises(ProcessExitError) as excinfo:
            DockerManager().run_container("bench:test", ["hyperfine", "zsh -ic exit"])
        assert str(excinfo.value).endswith("hyperfine 'zsh -ic exit'")

    @patch("zpmbench.container.docker_manager.subprocess.run", side_effect=PermissionError("denied"))
    def test_launch_failure(self, mock_run):
        with pytest.raises(ProcessLaunchError, match="docker run"):
            DockerManager().run_container("bench:test", ["zsh"])
