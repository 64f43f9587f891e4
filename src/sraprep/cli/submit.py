#!/usr/bin/env python
"""
sraprep Submit CLI - queue the build as a SLURM job
===================================================

Usage:
    export SRAPREP_ACCOUNT=mylab SRAPREP_PARTITION=standard SRAPREP_EMAIL=me@uni.edu
    sraprep-submit my_gvhd_study
    sraprep-submit my_gvhd_study --dry-run   # print the script only
"""

import argparse
import logging
import sys

from .common import add_common_arguments, load_config, resolve_log_dir, run_guarded
from ..data.layout import ProjectLayout
from ..slurm.submit import SlurmSettings, render_batch_script, submit, write_batch_script

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Submit sraprep-build for a project to SLURM',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('project_name', help='Project label used by sraprep-fetch')
    parser.add_argument('--dry-run', action='store_true',
                        help='Print the batch script instead of submitting it')
    add_common_arguments(parser)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    def _run():
        config = load_config(args)
        layout = ProjectLayout.from_config(args.project_name, config, base_dir=args.base_dir)
        log_dir = resolve_log_dir(args, config)

        script = render_batch_script(
            layout.project_name,
            SlurmSettings.from_config(config),
            workdir=layout.base_dir,
            log_dir=log_dir,
            config_path=args.config,
        )

        if args.dry_run:
            print(script)
            return

        script_path = write_batch_script(script, log_dir / f"{layout.project_name}_build.sbatch")
        job_id = submit(script_path)
        print(job_id)

    return run_guarded(_run)


if __name__ == '__main__':
    sys.exit(main())
