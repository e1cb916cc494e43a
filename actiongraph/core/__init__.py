"""Core components for action graph analysis."""

from .analyzer import ActionGraphAnalyzer
from .errors import ActionGraphError, NoRootError, PackageNotFoundError, TemplateError, TraceFormatError
from .types import AnalysisConfig, BuildStep, Mark, PathNode, ReachabilityResult

__all__ = [
    "ActionGraphAnalyzer",
    "ActionGraphError",
    "NoRootError",
    "PackageNotFoundError",
    "TemplateError",
    "TraceFormatError",
    "AnalysisConfig",
    "BuildStep",
    "Mark",
    "PathNode",
    "ReachabilityResult",
]
