"""SLURM batch submission for the builder."""

from .submit import SlurmSettings, render_batch_script, write_batch_script, submit

__all__ = ['SlurmSettings', 'render_batch_script', 'write_batch_script', 'submit']
