"""
SLURM Submission
================

Renders a batch script that runs ``sraprep-build <project>`` on a compute node
and submits it with sbatch. Account, partition and notification address come
from the slurm config section, by default the SRAPREP_ACCOUNT,
SRAPREP_PARTITION and SRAPREP_EMAIL environment variables. Options that are
not set are left out of the script so the cluster defaults apply.
"""

import logging
import re
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import ToolNotFoundError

logger = logging.getLogger(__name__)

JOB_ID_RE = re.compile(r"Submitted batch job (\d+)")


@dataclass
class SlurmSettings:
    account: Optional[str] = None
    partition: Optional[str] = None
    mail_user: Optional[str] = None
    mail_type: Optional[str] = "END,FAIL"
    job_name: str = "sraprep"
    mem: Optional[str] = "16G"
    cpus_per_task: Optional[int] = 4
    time: Optional[str] = "24:00:00"

    @classmethod
    def from_config(cls, config) -> 'SlurmSettings':
        section = config.get("slurm", {}) or {}
        fields = cls.__dataclass_fields__
        return cls(**{k: v for k, v in section.items() if k in fields})

    def directives(self, project_name: str, log_dir: Path):
        options = [
            ("job-name", f"{self.job_name}_{project_name}"),
            ("account", self.account),
            ("partition", self.partition),
            ("time", self.time),
            ("mem", self.mem),
            ("cpus-per-task", self.cpus_per_task),
            ("output", str(Path(log_dir) / f"{project_name}_%j.out")),
            ("error", str(Path(log_dir) / f"{project_name}_%j.err")),
        ]
        if self.mail_user:
            options.append(("mail-user", self.mail_user))
            options.append(("mail-type", self.mail_type or "END,FAIL"))
        return [f"#SBATCH --{name}={value}" for name, value in options if value not in (None, "")]


def render_batch_script(
    project_name: str,
    settings: SlurmSettings,
    workdir: Path,
    log_dir: Path,
    python: str = sys.executable,
    config_path: Optional[Path] = None
) -> str:
    """Return the text of the sbatch script for one project."""
    build_cmd = [python, "-m", "sraprep.cli.build", project_name, "--base-dir", str(workdir)]
    if config_path is not None:
        build_cmd += ["--config", str(Path(config_path).resolve())]

    lines = ["#!/bin/bash"]
    lines += settings.directives(project_name, log_dir)
    lines += [
        "",
        "set -euo pipefail",
        "",
        f"cd {shlex.quote(str(workdir))}",
        " ".join(shlex.quote(part) for part in build_cmd),
        "",
    ]
    return "\n".join(lines)


def write_batch_script(script: str, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(script)
    path.chmod(0o755)
    logger.info(f"Batch script written to {path}")
    return path


def submit(script_path: Path) -> str:
    """
    Submit a batch script with sbatch.

    Returns:
        The SLURM job id

    Raises:
        ToolNotFoundError: If sbatch is not installed
        subprocess.CalledProcessError: If sbatch rejects the job
    """
    try:
        result = subprocess.run(
            ["sbatch", str(script_path)],
            capture_output=True,
            text=True,
            check=True
        )
    except FileNotFoundError:
        raise ToolNotFoundError("sbatch", "SLURM")

    match = JOB_ID_RE.search(result.stdout)
    if not match:
        raise RuntimeError(f"Could not parse sbatch output: {result.stdout.strip()}")

    job_id = match.group(1)
    logger.info(f"Submitted batch job {job_id}")
    return job_id
