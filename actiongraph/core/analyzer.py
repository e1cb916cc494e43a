"""
Main action graph analyzer orchestrator.
"""

from typing import Dict, Iterator, List, Optional, Sequence

from ..core.types import BUILD_MODE, AnalysisConfig, BuildStep, ReachabilityResult, TopRow, TreeRow, TypeRow
from ..processors import (
    ActionFileProcessor,
    mode_totals,
    reachability_query,
    top_steps,
    total_duration,
    tree_query,
    wall_clock_ns,
)
from ..formatters import format_duration


class ActionGraphAnalyzer:
    """Main orchestrator for action graph analysis."""

    def __init__(
        self,
        level: int = -1,
        limit: int = 20,
        why: str = '',
        focus: Optional[Sequence[str]] = None,
        show_progress: bool = False
    ):
        """
        Initialize the ActionGraphAnalyzer.

        Args:
            level: Default tree depth limit (negative for unlimited)
            limit: Default number of rows listed by top
            why: Default package explained by the graph query
            focus: Default package paths the tree is pruned to
            show_progress: If True, prints file loading progress to stderr
        """
        self.config = AnalysisConfig(
            level=level,
            limit=limit,
            why=why,
            focus=focus,
            show_progress=show_progress
        )

        self.steps: List[BuildStep] = []
        self.total_ns = 0

        self.file_processor = ActionFileProcessor(show_progress=show_progress)

    def process_file(self, file_path: str) -> None:
        """
        Load an action graph file ("-" for stdin).

        Args:
            file_path: Path to the JSON written by go build -debug-actiongraph
        """
        self.load_steps(self.file_processor.process_file(file_path))

    def load_steps(self, steps: Sequence[BuildStep]) -> None:
        """Use an already decoded step sequence."""
        self.steps = list(steps)
        self.total_ns = total_duration(self.steps)

    def tree(self, focus: Optional[Sequence[str]] = None, level: Optional[int] = None) -> Iterator[TreeRow]:
        """Package tree rows, heaviest subtree first."""
        if focus is None:
            focus = self.config.focus
        if level is None:
            level = self.config.level
        return tree_query(self.steps, self.total_ns, focus, level)

    def why(self, package: Optional[str] = None) -> ReachabilityResult:
        """
        Steps and edges on dependency paths from the first build step to package.

        Raises:
            PackageNotFoundError: If package has no build step
            NoRootError: If the trace has no build step
        """
        if package is None:
            package = self.config.why
        return reachability_query(self.steps, package)

    def top(self, limit: Optional[int] = None) -> List[TopRow]:
        """Slowest steps first."""
        if limit is None:
            limit = self.config.limit
        return top_steps(self.steps, self.total_ns, limit)

    def types(self) -> List[TypeRow]:
        """Total time per action mode."""
        return mode_totals(self.steps, self.total_ns)

    def summary(self) -> Dict:
        """Headline numbers for the loaded trace."""
        wall_clock = wall_clock_ns(self.steps)
        return {
            'total_steps': len(self.steps),
            'build_steps': sum(1 for step in self.steps if step.mode == BUILD_MODE),
            'total_time_ns': self.total_ns,
            'total_time_formatted': format_duration(self.total_ns),
            'wall_clock_ns': wall_clock,
            'wall_clock_formatted': format_duration(wall_clock),
        }
