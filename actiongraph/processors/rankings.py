"""
Flat rankings of build steps: slowest steps and time per action mode.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from ..core.types import BuildStep, TopRow, TypeRow
from .tree_walker import percent_of


def total_duration(steps: Sequence[BuildStep]) -> int:
    """Sum of the durations of all steps, in nanoseconds."""
    return sum(step.duration_ns for step in steps)


def wall_clock_ns(steps: Sequence[BuildStep]) -> int:
    """
    Time from the earliest step start to the latest step end.

    Steps that never ran (no start or end time) are ignored.
    """
    ran = [step for step in steps if step.time_start_ns > 0 and step.time_done_ns > 0]
    if not ran:
        return 0
    start = min(step.time_start_ns for step in ran)
    done = max(step.time_done_ns for step in ran)
    return max(0, done - start)


def top_steps(steps: Sequence[BuildStep], total_ns: int, limit: int = 0) -> List[TopRow]:
    """
    List the slowest steps first.

    Args:
        steps: Build steps (not modified)
        total_ns: Grand total used for the running percentage
        limit: Maximum number of rows; zero or negative for all

    Returns:
        TopRow list; cumulative_percent is the share of the total taken by
        this step and every slower one
    """
    ordered = sorted(steps, key=lambda step: step.duration_ns, reverse=True)
    if limit > 0:
        ordered = ordered[:limit]

    rows = []
    cumulative = 0
    for step in ordered:
        cumulative += step.duration_ns
        rows.append(TopRow(step=step, cumulative_percent=percent_of(cumulative, total_ns)))
    return rows


def mode_totals(steps: Sequence[BuildStep], total_ns: int) -> List[TypeRow]:
    """Total time per action mode, slowest mode first."""
    durations: Dict[str, int] = defaultdict(int)
    counts: Dict[str, int] = defaultdict(int)
    for step in steps:
        durations[step.mode] += step.duration_ns
        counts[step.mode] += 1

    rows = [
        TypeRow(
            mode=mode,
            duration_ns=duration,
            percent=percent_of(duration, total_ns),
            count=counts[mode],
        )
        for mode, duration in durations.items()
    ]
    rows.sort(key=lambda row: row.duration_ns, reverse=True)
    return rows
