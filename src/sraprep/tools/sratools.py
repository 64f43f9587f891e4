"""Wrappers for the SRA Toolkit commands used by the builder."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def prefetch(env, accession_file: Path, cwd: Path, max_size: str = "100G"):
    """
    Download every run listed in accession_file into cwd.

    max_size is passed to --max-size so oversized runs are refused instead
    of filling the disk.
    """
    logger.info(f"Running prefetch (max size {max_size})...")
    env.run(
        ["prefetch", "--max-size", str(max_size), "--option-file", str(accession_file)],
        cwd=cwd
    )


def fasterq_dump(env, accession: str, cwd: Path,
                 split_files: bool = True, progress: bool = True):
    """Convert one downloaded run to FASTQ in cwd."""
    cmd = ["fasterq-dump"]
    if split_files:
        cmd.append("--split-files")
    if progress:
        cmd.append("--progress")
    cmd.append(accession)
    env.run(cmd, cwd=cwd)
