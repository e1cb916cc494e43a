"""
Type definitions for action graph analysis.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

# Step ID used by tree nodes that stand for a path prefix rather than a build step.
SYNTHETIC = -1

BUILD_MODE = 'build'
NOP_MODE = 'nop'


@dataclass(frozen=True)
class BuildStep:
    """One action from a Go build action graph."""
    id: int
    mode: str
    package: str = ''
    deps: Tuple[int, ...] = ()
    time_ready_ns: int = 0
    time_start_ns: int = 0
    time_done_ns: int = 0
    objdir: str = ''
    target: str = ''
    priority: int = 0
    built: str = ''
    build_id: str = ''
    action_id: str = ''
    need_build: bool = False
    cmd_real: int = 0
    cmd_user: int = 0
    cmd_sys: int = 0

    @property
    def duration_ns(self) -> int:
        return max(0, self.time_done_ns - self.time_start_ns)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization and row templates."""
        return {
            'id': self.id,
            'mode': self.mode,
            'package': self.package,
            'deps': list(self.deps),
            'duration_ns': self.duration_ns,
            'seconds': self.duration_ns / 1e9,
            'objdir': self.objdir,
            'target': self.target,
            'priority': self.priority,
            'built': self.built,
            'build_id': self.build_id,
            'action_id': self.action_id,
            'need_build': self.need_build,
        }


@dataclass
class PathNode:
    """
    One segment of the package path hierarchy.

    Children are keyed by their full path. Ordering is imposed only when the
    tree is walked for rendering.
    """
    path: str
    depth: int = 0
    cumulative_ns: int = 0
    step_id: int = SYNTHETIC
    children: Dict[str, 'PathNode'] = field(default_factory=dict)

    @property
    def is_synthetic(self) -> bool:
        return self.step_id == SYNTHETIC


class Mark(IntEnum):
    """Per-step classification used by the reachability search."""
    AVOIDED = -1
    UNKNOWN = 0
    KEPT = 1


@dataclass
class TreeRow:
    """A rendered line of the package tree."""
    path: str
    depth: int
    indent_level: int
    step_id: int
    step: Optional[BuildStep]
    own_ns: Optional[int]
    cumulative_ns: int
    cumulative_percent: float

    @property
    def indent(self) -> str:
        return '  ' * self.indent_level

    def to_dict(self) -> Dict:
        own_seconds = '' if self.own_ns is None else f"{self.own_ns / 1e9:.3f}"
        return {
            'package': self.path,
            'path': self.path,
            'depth': self.depth,
            'indent_level': self.indent_level,
            'indent': self.indent,
            'id': self.step_id,
            'mode': self.step.mode if self.step else '',
            'own_ns': self.own_ns,
            'own_seconds': own_seconds,
            'cumulative_ns': self.cumulative_ns,
            'cumulative_seconds': self.cumulative_ns / 1e9,
            'cumulative_percent': self.cumulative_percent,
            'cumulative_percent_int': int(self.cumulative_percent),
        }


@dataclass
class TopRow:
    """A build step with its running share of the total build time."""
    step: BuildStep
    cumulative_percent: float

    def to_dict(self) -> Dict:
        row = self.step.to_dict()
        row['cumulative_percent'] = self.cumulative_percent
        row['cumulative_percent_int'] = int(self.cumulative_percent)
        return row


@dataclass
class TypeRow:
    """Total time spent in one action mode."""
    mode: str
    duration_ns: int
    percent: float
    count: int = 0

    def to_dict(self) -> Dict:
        return {
            'mode': self.mode,
            'duration_ns': self.duration_ns,
            'seconds': self.duration_ns / 1e9,
            'percent': self.percent,
            'count': self.count,
        }


@dataclass
class ReachabilityResult:
    """Steps and dependency edges kept by a reachability query."""
    root_id: int
    target_id: Optional[int]
    nodes: List[int]
    edges: List[Tuple[int, int]]

    def to_dict(self) -> Dict:
        return {
            'root_id': self.root_id,
            'target_id': self.target_id,
            'nodes': list(self.nodes),
            'edges': [list(edge) for edge in self.edges],
        }


class AnalysisConfig:
    """Configuration for action graph analysis."""

    def __init__(
        self,
        level: int = -1,
        limit: int = 20,
        why: str = '',
        focus: Optional[Sequence[str]] = None,
        show_progress: bool = False
    ):
        """
        Initialize analysis configuration.

        Args:
            level: Deepest tree level to display. Negative means unlimited.

            limit: Number of slowest steps listed by top. Zero or negative
                   means all of them.

            why: Package whose dependency paths the graph view is restricted
                 to. Empty shows every step except nop actions.

            focus: Package paths the tree view is pruned to. Empty keeps the
                   whole tree.

            show_progress: If True, prints file loading progress to stderr.
        """
        self.level = level
        self.limit = limit
        self.why = why
        self.focus = list(focus or [])
        self.show_progress = show_progress
