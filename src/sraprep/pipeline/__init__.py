"""Fetch and build stages."""

from .fetcher import fetch_accessions, run_fetch
from .builder import build_manifest, build_project, download_runs

__all__ = [
    'fetch_accessions', 'run_fetch',
    'build_manifest', 'build_project', 'download_runs',
]
