"""Shared plumbing for the sraprep command-line tools."""

import argparse
import logging
import subprocess
from pathlib import Path

from ..config.manager import ConfigManager
from ..errors import SraPrepError
from ..utils.logging import setup_logging

logger = logging.getLogger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('--config', type=Path, default=None,
                        help='YAML/JSON config overriding the defaults')
    parser.add_argument('--base-dir', type=Path, default=None,
                        help='Directory holding raw_data/ and qiime2_artifacts/ (default: cwd)')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: from config)')
    parser.add_argument('--no-log-file', action='store_true',
                        help='Log to the console only')


def resolve_log_dir(args, config) -> Path:
    """logging.log_dir, taken relative to --base-dir (or paths.base_dir)."""
    base = args.base_dir if args.base_dir is not None else config.get('paths.base_dir', '.')
    return Path(base).expanduser().resolve() / config.get('logging.log_dir', 'logs')


def load_config(args) -> ConfigManager:
    """Load the config named on the command line and set up logging from it."""
    config = ConfigManager.from_file(args.config)
    config.validate()

    if args.log_level:
        config.set('logging.level', args.log_level)
    if args.no_log_file:
        config.set('logging.log_to_file', False)

    setup_logging(
        level=config.get('logging.level', 'INFO'),
        log_to_console=config.get('logging.log_to_console', True),
        log_to_file=config.get('logging.log_to_file', True),
        log_dir=resolve_log_dir(args, config),
    )
    logger.info(f"Configuration: {config.source or 'built-in defaults'}")
    return config


def run_guarded(func, *args, **kwargs) -> int:
    """
    Call func and translate documented failures into exit codes.

    Returns:
        0 on success, 1 for sraprep errors, the tool's exit code for tool failures
    """
    try:
        func(*args, **kwargs)
    except (SraPrepError, FileNotFoundError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1
    except subprocess.CalledProcessError as e:
        cmd = e.cmd if isinstance(e.cmd, str) else ' '.join(str(c) for c in e.cmd)
        logger.error(f"Command failed with exit code {e.returncode}: {cmd}")
        return e.returncode if e.returncode and e.returncode > 0 else 1
    return 0
