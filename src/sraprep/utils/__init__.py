"""Utility functions."""

from .logging import setup_logging, log_banner

__all__ = ['setup_logging', 'log_banner']
