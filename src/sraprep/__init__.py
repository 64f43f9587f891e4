"""
sraprep: SRA Download and Manifest Builder
==========================================

Fetch run accessions for an NCBI BioProject, download them as paired FASTQ
files and write a manifest for QIIME 2 import.
"""

__version__ = "0.1.0"

from . import config
from . import data
from . import tools
from . import utils

__all__ = ["config", "data", "tools", "utils"]
