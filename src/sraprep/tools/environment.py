"""
Tool Environment
================

Runs the external SRA / Entrez command-line tools from a conda environment
without activating it in the calling shell. Entering the context resolves the
environment prefix and builds a child-process environment with its ``bin``
directory first on PATH; leaving it drops that state again.

Usage:
    with ToolEnvironment.from_config(config) as env:
        env.require("prefetch", "fasterq-dump")
        env.run(["prefetch", "--option-file", "run_accessions.txt"], cwd=raw_dir)
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import EnvironmentSetupError, ToolNotFoundError
from .emulation import EmulationSettings

logger = logging.getLogger(__name__)

# Conda package that ships each tool, used in error messages
TOOL_PACKAGES = {
    "esearch": "entrez-direct",
    "efetch": "entrez-direct",
    "prefetch": "sra-tools",
    "fasterq-dump": "sra-tools",
}


class ToolEnvironment:
    """
    Conda-backed environment for external tools.

    Args:
        conda_env: Environment name (None uses the current PATH as-is)
        conda_base: Conda installation root (None asks `conda info --base`)
        emulation: Emulation settings; when enabled the emulated install is
            used as conda base and commands are prefixed with `arch`
    """

    def __init__(
        self,
        conda_env: Optional[str] = "sra-env",
        conda_base: Optional[Path] = None,
        emulation: Optional[EmulationSettings] = None
    ):
        self.conda_env = conda_env
        self.conda_base = Path(conda_base).expanduser() if conda_base else None
        self.emulation = emulation or EmulationSettings()
        self.prefix: Optional[Path] = None
        self._env: Optional[Dict[str, str]] = None
        self._resolved: Dict[str, str] = {}

    @classmethod
    def from_config(cls, config, machine: Optional[str] = None) -> 'ToolEnvironment':
        return cls(
            conda_env=config.get("environment.conda_env"),
            conda_base=config.get("environment.conda_base"),
            emulation=EmulationSettings.from_config(config, machine=machine),
        )

    def __enter__(self) -> 'ToolEnvironment':
        self.activate()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.deactivate()
        return False

    @property
    def active(self) -> bool:
        return self._env is not None

    def activate(self):
        """Resolve the environment prefix and build the child environment."""
        env = dict(os.environ)

        base = self.conda_base
        if self.emulation.enabled:
            logger.info(f"Emulating {self.emulation.target_arch} for external tools")
            base = self.emulation.check_emulated_install()

        if self.conda_env:
            if base is None:
                base = self._conda_info_base()
            prefix = base if self.conda_env == "base" else base / "envs" / self.conda_env
            if not prefix.is_dir():
                raise EnvironmentSetupError(
                    f"Conda environment '{self.conda_env}' not found at {prefix}. "
                    f"Create it with: conda create -n {self.conda_env} "
                    f"-c bioconda entrez-direct sra-tools"
                )
            env["PATH"] = f"{prefix / 'bin'}{os.pathsep}{env.get('PATH', '')}"
            env["CONDA_PREFIX"] = str(prefix)
            env["CONDA_DEFAULT_ENV"] = self.conda_env
            self.prefix = prefix
            logger.info(f"Activated conda environment '{self.conda_env}' ({prefix})")
        else:
            logger.info("No conda environment configured, using current PATH")

        self._env = env
        self._resolved = {}

    def deactivate(self):
        if self.active and self.conda_env:
            logger.info(f"Deactivating environment '{self.conda_env}'")
        self._env = None
        self._resolved = {}
        self.prefix = None

    def _conda_info_base(self) -> Path:
        try:
            result = subprocess.run(
                ["conda", "info", "--base"],
                capture_output=True,
                text=True,
                check=True
            )
        except FileNotFoundError:
            raise EnvironmentSetupError(
                "conda not found on PATH. Install Miniconda or set "
                "environment.conda_base in the configuration."
            )
        except subprocess.CalledProcessError as e:
            raise EnvironmentSetupError(f"`conda info --base` failed: {e.stderr.strip()}")
        return Path(result.stdout.strip())

    def _require_active(self):
        if not self.active:
            raise RuntimeError("ToolEnvironment used before activate()")

    def resolve(self, tool: str) -> str:
        """Return the absolute path of a tool on the environment PATH."""
        self._require_active()
        if tool not in self._resolved:
            path = shutil.which(tool, path=self._env.get("PATH"))
            if path is None:
                raise ToolNotFoundError(tool, TOOL_PACKAGES.get(tool), self.conda_env)
            self._resolved[tool] = path
        return self._resolved[tool]

    def require(self, *tools: str) -> Dict[str, str]:
        """
        Check that every tool is available.

        Raises:
            ToolNotFoundError: For the first missing tool
        """
        found = {tool: self.resolve(tool) for tool in tools}
        logger.info(f"Environment ready, found: {', '.join(tools)} ✓")
        return found

    def command(self, cmd: List[str]) -> List[str]:
        """Full argv for a tool command, with emulation prefix and resolved binary."""
        return self.emulation.command_prefix() + [self.resolve(cmd[0])] + list(cmd[1:])

    def run(self, cmd: List[str], cwd: Optional[Path] = None, **kwargs) -> subprocess.CompletedProcess:
        """
        Run a tool and fail on non-zero exit.

        Raises:
            subprocess.CalledProcessError: If the tool fails
        """
        full_cmd = self.command(cmd)
        logger.debug(f"Running: {' '.join(full_cmd)}")
        return subprocess.run(full_cmd, cwd=cwd, env=self._env, check=True, **kwargs)

    def popen(self, cmd: List[str], **kwargs) -> subprocess.Popen:
        """Start a tool without waiting, for building pipelines."""
        full_cmd = self.command(cmd)
        logger.debug(f"Starting: {' '.join(full_cmd)}")
        return subprocess.Popen(full_cmd, env=self._env, **kwargs)
