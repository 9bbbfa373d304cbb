"""Tests for benchmark and version command construction."""

import pytest

from zpmbench.bench.commands import (
    DEFER_ENV,
    SHELL_STARTUP,
    WARMUP_RUNS,
    BenchMode,
    ExternalCommand,
    build_benchmark_command,
    build_shell_command,
    build_version_command,
    report_filename,
)
from zpmbench.kinds import Kind, prepare_command, version_command


def _option(argv, flag):
    return argv[argv.index(flag) + 1]


class TestInstallMode:
    def test_sheldon_install(self):
        argv = build_benchmark_command(BenchMode.INSTALL, Kind.SHELDON).argv
        assert _option(argv, "--export-json") == "/results/install-sheldon.json"
        assert _option(argv, "--prepare") == prepare_command(Kind.SHELDON)

    @pytest.mark.parametrize("kind", list(Kind))
    def test_always_prepares(self, kind):
        argv = build_benchmark_command(BenchMode.INSTALL, kind).argv
        assert "--prepare" in argv
        assert _option(argv, "--prepare")

    def test_full_argv(self):
        argv = build_benchmark_command(BenchMode.INSTALL, Kind.ZPLUG).argv
        assert argv == (
            "hyperfine",
            "--prepare",
            "rm -rf /root/.zplug/repos",
            "--warmup",
            "3",
            "--export-json",
            "/results/install-zplug.json",
            "zsh -ic exit",
        )


class TestLoadMode:
    @pytest.mark.parametrize("kind", list(Kind))
    def test_never_prepares(self, kind):
        assert "--prepare" not in build_benchmark_command(BenchMode.LOAD, kind).argv

    @pytest.mark.parametrize("kind", list(Kind))
    def test_no_defer_override(self, kind):
        argv = build_benchmark_command(BenchMode.LOAD, kind).argv
        assert argv[-1] == SHELL_STARTUP
        assert not any(DEFER_ENV in arg for arg in argv)

    def test_full_argv(self):
        argv = build_benchmark_command(BenchMode.LOAD, Kind.ANTIBODY).argv
        assert argv == (
            "hyperfine",
            "--warmup",
            "3",
            "--export-json",
            "/results/load-antibody.json",
            "zsh -ic exit",
        )


class TestDeferMode:
    def test_zinit_defer(self):
        argv = build_benchmark_command(BenchMode.DEFER, Kind.ZINIT).argv
        assert argv[-1] == "DEFER=true zsh -ic exit"
        assert argv[-1].index("DEFER=true") + len("DEFER=true ") == argv[-1].index("zsh")
        assert _option(argv, "--export-json") == "/results/load-zinit.json"

    @pytest.mark.parametrize("kind", list(Kind))
    def test_never_prepares(self, kind):
        assert "--prepare" not in build_benchmark_command(BenchMode.DEFER, kind).argv

    @pytest.mark.parametrize("kind", list(Kind))
    def test_always_defers(self, kind):
        argv = build_benchmark_command(BenchMode.DEFER, kind).argv
        assert argv[-1].startswith(f"{DEFER_ENV} ")


class TestCommonShape:
    @pytest.mark.parametrize("mode", list(BenchMode))
    def test_warmup(self, mode):
        argv = build_benchmark_command(mode, Kind.ZGEN).argv
        assert _option(argv, "--warmup") == str(WARMUP_RUNS) == "3"

    @pytest.mark.parametrize("mode", list(BenchMode))
    @pytest.mark.parametrize("kind", list(Kind))
    def test_export_path_encodes_mode_and_kind(self, mode, kind):
        path = _option(build_benchmark_command(mode, kind).argv, "--export-json")
        assert path == f"/results/{mode.report_name}-{kind.value}.json"

    def test_install_and_load_paths_are_distinct(self):
        paths = {
            _option(build_benchmark_command(mode, kind).argv, "--export-json")
            for mode in (BenchMode.INSTALL, BenchMode.LOAD)
            for kind in Kind
        }
        assert len(paths) == 2 * len(Kind)

    def test_custom_tool(self):
        argv = build_benchmark_command(BenchMode.LOAD, Kind.ZGEN, tool="/opt/hyperfine").argv
        assert argv[0] == "/opt/hyperfine"


class TestReportFilename:
    def test_names(self):
        assert report_filename(BenchMode.INSTALL, Kind.ANTIGEN) == "install-antigen.json"
        assert report_filename(BenchMode.LOAD, Kind.ANTIGEN) == "load-antigen.json"
        assert report_filename(BenchMode.DEFER, Kind.ANTIGEN) == "load-antigen.json"


class TestOtherCommands:
    @pytest.mark.parametrize("kind", list(Kind))
    def test_version_is_registry_command(self, kind):
        assert list(build_version_command(kind).argv) == version_command(kind)

    def test_shell(self):
        assert build_shell_command().argv == ("zsh",)


class TestExternalCommand:
    def test_display_quotes_arguments(self):
        cmd = build_benchmark_command(BenchMode.DEFER, Kind.ZINIT)
        assert cmd.display().endswith("'DEFER=true zsh -ic exit'")

    def test_display_with_env(self):
        cmd = ExternalCommand(argv=("zsh", "-ic", "exit"), env={"DEFER": "true"})
        assert cmd.display() == "DEFER=true zsh -ic exit"

    def test_default_env_is_empty(self):
        assert dict(ExternalCommand(argv=("zsh",)).env) == {}
