"""Project layout, accession lists and manifests."""

from .layout import ProjectLayout
from .accessions import parse_runinfo, read_accessions, write_accessions, RUN_PATTERN
from .manifest import (
    MANIFEST_COLUMNS,
    ManifestRecord,
    find_pairs,
    write_manifest,
    read_manifest,
    validate_manifest,
)

__all__ = [
    "ProjectLayout",
    "parse_runinfo",
    "read_accessions",
    "write_accessions",
    "RUN_PATTERN",
    "MANIFEST_COLUMNS",
    "ManifestRecord",
    "find_pairs",
    "write_manifest",
    "read_manifest",
    "validate_manifest",
]
