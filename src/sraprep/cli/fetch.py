#!/usr/bin/env python
"""
sraprep Fetch CLI - list the SRA runs of a BioProject
=====================================================

Usage:
    sraprep-fetch PRJNA123456 my_gvhd_study
    sraprep-fetch PRJNA123456 my_gvhd_study --backend eutils

Writes raw_data/<ProjectName>/run_accessions.txt and creates
qiime2_artifacts/. Exits 1 if the environment is missing or no run
accessions are found.
"""

import argparse
import logging
import sys

from .common import add_common_arguments, load_config, run_guarded
from ..pipeline.fetcher import run_fetch
from ..utils.logging import log_banner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Fetch SRA run accessions for a BioProject',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('bioproject_id', help='BioProject accession (e.g. PRJNA123456)')
    parser.add_argument('project_name', help='Project label used for directory names')
    parser.add_argument('--backend', choices=['edirect', 'eutils'], default=None,
                        help='Metadata query backend (default: from config)')
    add_common_arguments(parser)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    def _run():
        config = load_config(args)
        log_banner(logger, f"Fetching accessions: {args.bioproject_id} -> {args.project_name}")
        run_fetch(
            args.bioproject_id,
            args.project_name,
            config,
            base_dir=args.base_dir,
            backend=args.backend,
        )
        logger.info("Data fetching complete.")

    return run_guarded(_run)


if __name__ == '__main__':
    sys.exit(main())
