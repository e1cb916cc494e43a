"""
Action Graph Analyzer - Go build action graph analysis tool
"""

__version__ = "1.0.0"

from .core.analyzer import ActionGraphAnalyzer
from .core.errors import ActionGraphError, NoRootError, PackageNotFoundError
from .core.types import AnalysisConfig, BuildStep

__all__ = [
    "ActionGraphAnalyzer",
    "ActionGraphError",
    "NoRootError",
    "PackageNotFoundError",
    "AnalysisConfig",
    "BuildStep",
]
