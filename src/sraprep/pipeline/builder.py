"""
Download-and-Manifest Builder
=============================

Reads the accession list for a project, downloads every run with prefetch,
converts each one with fasterq-dump (file order, one at a time), pairs the
resulting FASTQ files and publishes the manifest.

Stages run strictly in order and the first failure aborts the build:

    env activated -> tools checked -> accessions read -> prefetch
    -> fasterq-dump per run -> pairs scanned -> manifest written -> validated
"""

import logging
from pathlib import Path
from typing import List

from ..data.accessions import read_accessions
from ..data.layout import ProjectLayout
from ..data.manifest import find_pairs, validate_manifest, write_manifest
from ..errors import EmptyManifestError, NoAccessionsError
from ..tools.sratools import fasterq_dump, prefetch

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("prefetch", "fasterq-dump")


def download_runs(env, layout: ProjectLayout, accessions: List[str], config):
    """Prefetch all runs, then convert them to FASTQ one by one."""
    raw_dir = layout.raw_dir
    logger.info(f"Changing to directory: {raw_dir}")

    prefetch(
        env,
        layout.accession_file,
        cwd=raw_dir,
        max_size=config.get("download.max_size", "100G")
    )

    logger.info("Running fasterq-dump...")
    total = len(accessions)
    for i, accession in enumerate(accessions, 1):
        logger.info(f"[{i}/{total}] Processing {accession}")
        fasterq_dump(
            env,
            accession,
            cwd=raw_dir,
            split_files=config.get("download.split_files", True),
            progress=config.get("download.progress", True)
        )


def build_manifest(layout: ProjectLayout, config) -> Path:
    """Pair FASTQ files in the raw directory and write the manifest."""
    records = find_pairs(
        layout.raw_dir,
        extension=config.get("manifest.extension", "fastq"),
        forward_suffix=config.get("manifest.forward_suffix", "_1"),
        reverse_suffix=config.get("manifest.reverse_suffix", "_2"),
    )
    try:
        manifest_path = write_manifest(records, layout.manifest_path)
        validate_manifest(manifest_path)
    except EmptyManifestError:
        # A manifest from an earlier run must not outlive a failed rebuild
        layout.manifest_path.unlink(missing_ok=True)
        raise
    return manifest_path


def build_project(layout: ProjectLayout, env, config) -> Path:
    """
    Run the full download-and-manifest build for one project.

    Args:
        layout: Project paths
        env: Inactive ToolEnvironment; activated for the duration of the build
        config: ConfigManager

    Returns:
        Path to the published manifest
    """
    with env:
        env.require(*REQUIRED_TOOLS)
        layout.ensure_dirs()

        accessions = read_accessions(layout.accession_file)
        if not accessions:
            raise NoAccessionsError(f"Accession file is empty: {layout.accession_file}")
        logger.info(f"Read {len(accessions)} accessions from {layout.accession_file}")

        download_runs(env, layout, accessions, config)

        logger.info("Creating manifest file...")
        return build_manifest(layout, config)
