"""
Paired-end FASTQ manifest
=========================

Pairs ``<id>_1.fastq`` with ``<id>_2.fastq`` in a download directory and
writes the tab-separated manifest used by ``qiime tools import``
(PairedEndFastqManifestPhred33V2):

    sample-id   absolute-filepath-fwd   absolute-filepath-rev

Pairing relies only on file names. A forward file without its reverse mate
is skipped with a warning.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

import polars as pl

from ..errors import EmptyManifestError

logger = logging.getLogger(__name__)

MANIFEST_COLUMNS = ["sample-id", "absolute-filepath-fwd", "absolute-filepath-rev"]


@dataclass(frozen=True)
class ManifestRecord:
    sample_id: str
    forward: Path
    reverse: Path


def find_pairs(
    directory: Path,
    extension: str = "fastq",
    forward_suffix: str = "_1",
    reverse_suffix: str = "_2"
) -> List[ManifestRecord]:
    """
    Scan directory for forward reads and pair each with its reverse read.

    Args:
        directory: Directory holding the FASTQ files
        extension: File extension without the dot
        forward_suffix: Suffix before the extension marking forward reads
        reverse_suffix: Suffix before the extension marking reverse reads

    Returns:
        Records sorted by forward file name, with absolute paths
    """
    directory = Path(directory).resolve()
    forward_tail = f"{forward_suffix}.{extension}"

    records = []
    for forward in sorted(directory.glob(f"*{forward_tail}")):
        if not forward.is_file():
            continue
        sample_id = forward.name[:-len(forward_tail)]
        if not sample_id:
            logger.warning(f"Forward read {forward.name} has no sample ID. Skipping.")
            continue

        reverse = directory / f"{sample_id}{reverse_suffix}.{extension}"
        if reverse.is_file():
            records.append(ManifestRecord(sample_id, forward, reverse))
        else:
            logger.warning(f"No reverse read ({reverse.name}) found for {sample_id}. Skipping.")

    logger.info(f"Found {len(records)} forward/reverse pairs in {directory}")
    return records


def write_manifest(records: List[ManifestRecord], path: Path) -> Path:
    """
    Write the manifest atomically.

    The table goes to ``<path>.tmp`` first and is moved over path in one
    step, so a partial manifest is never visible under its final name.

    Raises:
        EmptyManifestError: If there are no records; nothing is written
    """
    if not records:
        raise EmptyManifestError("Manifest was not created or no FASTQ pairs were found.")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")

    df = pl.DataFrame({
        "sample-id": [r.sample_id for r in records],
        "absolute-filepath-fwd": [str(r.forward) for r in records],
        "absolute-filepath-rev": [str(r.reverse) for r in records],
    })

    try:
        df.write_csv(tmp_path, separator="\t", quote_style="never")
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.info(f"Manifest created at: {path} ({len(records)} samples)")
    return path


def read_manifest(path: Path) -> pl.DataFrame:
    """Load a manifest with every column as a string."""
    return pl.read_csv(Path(path), separator="\t", infer_schema_length=0, quote_char=None)


def validate_manifest(path: Path) -> pl.DataFrame:
    """
    Check that a manifest exists, has the expected header and at least one row.

    Raises:
        EmptyManifestError: If any check fails
    """
    path = Path(path)
    if not path.is_file():
        raise EmptyManifestError(f"Manifest was not created: {path}")

    df = read_manifest(path)
    if df.columns != MANIFEST_COLUMNS:
        raise EmptyManifestError(f"Unexpected manifest header in {path}: {df.columns}")
    if df.height == 0:
        raise EmptyManifestError(f"Manifest has no samples: {path}")
    return df
