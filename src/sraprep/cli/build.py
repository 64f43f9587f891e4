#!/usr/bin/env python
"""
sraprep Build CLI - download runs and write the QIIME 2 manifest
================================================================

Usage:
    sraprep-build my_gvhd_study
    sraprep-build my_gvhd_study --max-size 50G

Normally run on a compute node through sraprep-submit. Reads
raw_data/<ProjectName>/run_accessions.txt written by sraprep-fetch.
"""

import argparse
import logging
import sys

from .common import add_common_arguments, load_config, run_guarded
from ..data.layout import ProjectLayout
from ..pipeline.builder import build_project
from ..tools.environment import ToolEnvironment
from ..utils.logging import log_banner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Download SRA runs and build a paired-end FASTQ manifest',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('project_name', help='Project label used by sraprep-fetch')
    parser.add_argument('--max-size', default=None,
                        help='prefetch size cap per run (default: from config, 100G)')
    add_common_arguments(parser)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    def _run():
        config = load_config(args)
        if args.max_size:
            config.set('download.max_size', args.max_size)

        layout = ProjectLayout.from_config(args.project_name, config, base_dir=args.base_dir)
        log_banner(logger, f"Building project: {layout.project_name}")
        logger.info(f"Raw data: {layout.raw_dir}")
        logger.info(f"Manifest: {layout.manifest_path}")

        env = ToolEnvironment.from_config(config)
        build_project(layout, env, config)
        config.save(layout.config_snapshot_path)
        logger.info("Data fetching complete.")

    return run_guarded(_run)


if __name__ == '__main__':
    sys.exit(main())
