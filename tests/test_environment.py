"""
Tests for the conda tool environment and architecture emulation.
"""

import os
import stat
import subprocess
from pathlib import Path

import pytest

from sraprep.config.manager import ConfigManager
from sraprep.errors import EnvironmentSetupError, ToolNotFoundError
from sraprep.tools.emulation import EmulationSettings, needs_emulation
from sraprep.tools.environment import ToolEnvironment


def make_tool(bin_dir: Path, name: str) -> Path:
    bin_dir.mkdir(parents=True, exist_ok=True)
    tool = bin_dir / name
    tool.write_text("#!/bin/sh\necho \"$@\"\n")
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return tool


@pytest.fixture
def conda_base(temp_dir):
    """A fake conda install with an sra-env environment holding esearch."""
    base = temp_dir / "miniconda3"
    make_tool(base / "envs" / "sra-env" / "bin", "esearch")
    make_tool(base / "envs" / "sra-env" / "bin", "efetch")
    return base


class TestNeedsEmulation:
    """Deciding whether tools run under Rosetta."""

    def test_auto_on_arm64(self):
        assert needs_emulation("auto", "arm64", machine="arm64") is True

    def test_auto_on_x86_64(self):
        assert needs_emulation("auto", "arm64", machine="x86_64") is False

    def test_explicit_modes(self):
        assert needs_emulation(True, machine="x86_64") is True
        assert needs_emulation("false", machine="arm64") is False
        assert needs_emulation("true", machine="x86_64") is True

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            needs_emulation("sometimes")

    def test_auto_uses_platform(self, monkeypatch):
        monkeypatch.setattr("platform.machine", lambda: "arm64")
        assert needs_emulation("auto") is True


class TestEmulationSettings:

    def test_command_prefix(self):
        assert EmulationSettings(enabled=True).command_prefix() == ["arch", "-x86_64"]
        assert EmulationSettings(enabled=False).command_prefix() == []

    def test_from_config(self):
        settings = EmulationSettings.from_config(ConfigManager(), machine="arm64")
        assert settings.enabled is True
        assert settings.target_arch == "x86_64"

    def test_missing_emulated_install(self, temp_dir):
        settings = EmulationSettings(enabled=True, conda_base=temp_dir / "miniconda3-x86_64")

        with pytest.raises(EnvironmentSetupError, match="miniconda3-x86_64"):
            settings.check_emulated_install()

    def test_emulated_install_present(self, temp_dir):
        base = temp_dir / "miniconda3-x86_64"
        (base / "bin").mkdir(parents=True)
        (base / "bin" / "activate").write_text("")

        assert EmulationSettings(enabled=True, conda_base=base).check_emulated_install() == base


class TestToolEnvironment:
    """Activation, tool checks and command construction."""

    def test_activate_puts_env_bin_first(self, conda_base):
        env = ToolEnvironment("sra-env", conda_base=conda_base)

        with env:
            assert env.active
            assert env.prefix == conda_base / "envs" / "sra-env"
            path = env.resolve("esearch")
            assert path == str(conda_base / "envs" / "sra-env" / "bin" / "esearch")

        assert not env.active

    def test_missing_environment(self, temp_dir):
        env = ToolEnvironment("sra-env", conda_base=temp_dir)

        with pytest.raises(EnvironmentSetupError, match="sra-env"):
            env.activate()

    def test_missing_tool(self, conda_base):
        with ToolEnvironment("sra-env", conda_base=conda_base) as env:
            with pytest.raises(ToolNotFoundError) as excinfo:
                env.require("esearch", "definitely-not-a-real-tool")

        assert excinfo.value.tool == "definitely-not-a-real-tool"

    def test_tool_not_found_message_names_package(self):
        error = ToolNotFoundError("esearch", "entrez-direct", "sra-env")
        assert "entrez-direct" in str(error)
        assert "sra-env" in str(error)

    def test_use_before_activate(self, conda_base):
        env = ToolEnvironment("sra-env", conda_base=conda_base)

        with pytest.raises(RuntimeError):
            env.resolve("esearch")

    def test_conda_missing(self, monkeypatch):
        def no_conda(*args, **kwargs):
            raise FileNotFoundError("conda")

        monkeypatch.setattr(subprocess, "run", no_conda)
        env = ToolEnvironment("sra-env", conda_base=None)

        with pytest.raises(EnvironmentSetupError, match="conda not found"):
            env.activate()

    def test_conda_info_base(self, conda_base, monkeypatch):
        def fake_run(cmd, **kwargs):
            assert cmd == ["conda", "info", "--base"]
            return subprocess.CompletedProcess(cmd, 0, stdout=f"{conda_base}\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)

        with ToolEnvironment("sra-env") as env:
            assert env.prefix == conda_base / "envs" / "sra-env"

    def test_no_conda_env_uses_current_path(self, temp_dir, monkeypatch):
        make_tool(temp_dir / "bin", "prefetch")
        monkeypatch.setenv("PATH", str(temp_dir / "bin"))

        with ToolEnvironment(conda_env=None) as env:
            assert env.resolve("prefetch") == str(temp_dir / "bin" / "prefetch")

    def test_command_with_emulation(self, conda_base):
        emulation = EmulationSettings(enabled=True, conda_base=conda_base)
        (conda_base / "bin").mkdir(parents=True, exist_ok=True)
        (conda_base / "bin" / "activate").write_text("")

        with ToolEnvironment("sra-env", emulation=emulation) as env:
            cmd = env.command(["esearch", "-db", "sra"])

        assert cmd[:2] == ["arch", "-x86_64"]
        assert cmd[2].endswith(os.path.join("sra-env", "bin", "esearch"))
        assert cmd[3:] == ["-db", "sra"]

    def test_run_checks_exit_code(self, conda_base, temp_dir):
        failing = make_tool(conda_base / "envs" / "sra-env" / "bin", "prefetch")
        failing.write_text("#!/bin/sh\nexit 4\n")

        with ToolEnvironment("sra-env", conda_base=conda_base) as env:
            with pytest.raises(subprocess.CalledProcessError) as excinfo:
                env.run(["prefetch", "SRR1"], cwd=temp_dir)

        assert excinfo.value.returncode == 4
