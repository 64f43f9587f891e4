"""
Architecture emulation for x86_64-only tool builds.

edirect and sra-tools conda packages are published for x86_64. On Apple
Silicon they run under Rosetta 2 from a separate x86_64 Miniconda install,
so every tool invocation is prefixed with ``arch -x86_64``.
"""

import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import EnvironmentSetupError

logger = logging.getLogger(__name__)


def needs_emulation(mode="auto", trigger_arch: str = "arm64",
                    machine: Optional[str] = None) -> bool:
    """
    Decide whether tools must run under emulation.

    Args:
        mode: "auto", or an explicit true/false (bool or string)
        trigger_arch: Native architecture that requires emulation
        machine: Override for platform.machine() (tests)
    """
    if isinstance(mode, bool):
        return mode
    mode = str(mode).lower()
    if mode in ("true", "yes", "1"):
        return True
    if mode in ("false", "no", "0"):
        return False
    if mode != "auto":
        raise ValueError(f"Unknown emulation mode: {mode}")

    machine = machine or platform.machine()
    return machine == trigger_arch


@dataclass
class EmulationSettings:
    enabled: bool = False
    target_arch: str = "x86_64"
    conda_base: Path = Path("~/miniconda3-x86_64")

    @classmethod
    def from_config(cls, config, machine: Optional[str] = None) -> 'EmulationSettings':
        enabled = needs_emulation(
            config.get("emulation.mode", "auto"),
            config.get("emulation.trigger_arch", "arm64"),
            machine=machine,
        )
        return cls(
            enabled=enabled,
            target_arch=config.get("emulation.target_arch", "x86_64"),
            conda_base=Path(config.get("emulation.conda_base", "~/miniconda3-x86_64")),
        )

    def command_prefix(self) -> List[str]:
        if not self.enabled:
            return []
        return ["arch", f"-{self.target_arch}"]

    def check_emulated_install(self) -> Path:
        """
        Verify the emulated Miniconda install exists.

        Returns:
            The expanded conda base directory

        Raises:
            EnvironmentSetupError: If bin/activate is missing
        """
        base = self.conda_base.expanduser()
        if not (base / "bin" / "activate").is_file():
            raise EnvironmentSetupError(
                f"{self.target_arch} Miniconda for Rosetta not found. "
                f"This tool requires an emulated {self.target_arch} Miniconda "
                f"install to run on {platform.machine() or 'this machine'}. "
                f"Please install it in: {base}"
            )
        logger.info(f"Using emulated {self.target_arch} conda base: {base}")
        return base
