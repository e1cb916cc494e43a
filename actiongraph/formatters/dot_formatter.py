"""
Graphviz output for reachability results.
"""

import html
import posixpath
from typing import Iterator, Sequence

from ..core.types import BuildStep, ReachabilityResult
from .time_formatter import format_duration


def _dirname(package: str) -> str:
    return posixpath.dirname(package) or '.'


def _basename(package: str) -> str:
    return posixpath.basename(package) or '.'


def node_label(step: BuildStep) -> str:
    """HTML-like label: package directory small, package name large, then mode and time."""
    return (
        f'<FONT POINT-SIZE="12">{html.escape(_dirname(step.package))}</FONT><BR/>'
        f'<FONT POINT-SIZE="22">{html.escape(_basename(step.package))}</FONT><BR/>'
        f'{html.escape(step.mode)} {format_duration(step.duration_ns)}'
    )


def iter_dot(steps: Sequence[BuildStep], result: ReachabilityResult) -> Iterator[str]:
    """Yield the lines of a Graphviz digraph for the kept steps and edges."""
    yield 'digraph {'

    edges_by_step = {}
    for src, dst in result.edges:
        edges_by_step.setdefault(src, []).append(dst)

    for step_id in result.nodes:
        yield f'{step_id} [label=<{node_label(steps[step_id])}>; shape=box];'
        for dep in edges_by_step.get(step_id, []):
            yield f'\t{step_id} -> {dep};'

    yield '}'


def render_dot(steps: Sequence[BuildStep], result: ReachabilityResult) -> str:
    return '\n'.join(iter_dot(steps, result)) + '\n'
