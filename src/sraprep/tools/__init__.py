"""External tool environment and SRA Toolkit wrappers."""

from .emulation import EmulationSettings, needs_emulation
from .environment import ToolEnvironment, TOOL_PACKAGES
from .sratools import prefetch, fasterq_dump

__all__ = [
    'EmulationSettings', 'needs_emulation',
    'ToolEnvironment', 'TOOL_PACKAGES',
    'prefetch', 'fasterq_dump',
]
