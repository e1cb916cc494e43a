"""
Dependency path search for "why is this package built" queries.
"""

from typing import Callable, List, Optional, Sequence, Set

from ..core.errors import NoRootError, PackageNotFoundError
from ..core.types import BUILD_MODE, NOP_MODE, BuildStep, Mark, ReachabilityResult


class _Frame:
    """Dependency list being explored at one level of the search stack."""

    __slots__ = ('ids', 'index')

    def __init__(self, ids: Sequence[int]):
        self.ids = ids
        self.index = 0

    @property
    def current(self) -> int:
        return self.ids[self.index]

    def advance(self) -> bool:
        """Move to the next sibling. Returns False once the frame is exhausted."""
        self.index += 1
        return self.index < len(self.ids)


def find_root(steps: Sequence[BuildStep]) -> int:
    """
    Return the ID of the first build step.

    Raises:
        NoRootError: If no step has mode "build"
    """
    for step in steps:
        if step.mode == BUILD_MODE:
            return step.id
    raise NoRootError()


def find_target(steps: Sequence[BuildStep], target: str) -> int:
    """
    Return the ID of the first build step of the target package.

    Raises:
        PackageNotFoundError: If no build step matches target exactly
    """
    for step in steps:
        if step.mode == BUILD_MODE and step.package == target:
            return step.id
    raise PackageNotFoundError(target)


def initial_marks(steps: Sequence[BuildStep], target: Optional[str] = None) -> List[Mark]:
    """
    Classify the steps that are known before searching.

    nop steps are avoided: they typically have many Deps and explain nothing.
    With a target, the first build step of that package is kept. Without one,
    every step that is not avoided is kept.

    Raises:
        PackageNotFoundError: If target is given and no build step matches it
    """
    marks = [Mark.UNKNOWN] * len(steps)
    for step in steps:
        if step.mode == NOP_MODE:
            marks[step.id] = Mark.AVOIDED

    if target:
        marks[find_target(steps, target)] = Mark.KEPT
    else:
        marks = [Mark.AVOIDED if m is Mark.AVOIDED else Mark.KEPT for m in marks]

    return marks


def pathfind(start: int, marks: List[Mark], edges: Callable[[int], Sequence[int]]) -> None:
    """
    Mark every step on a path from start to an already kept step as kept.

    Iterative depth first search over an explicit stack of dependency lists.
    Reaching a kept step marks the whole current path kept. A step whose
    dependencies are exhausted without reaching a kept step is marked avoided,
    so it is never explored again. Steps not reachable from start keep their
    mark. marks is updated in place.

    A dependency cycle does not loop: a step whose dependency list is still
    open on the stack is not entered again, and is classified when its own
    list is exhausted.

    Args:
        start: Step ID to search from
        marks: Initial classification from initial_marks
        edges: Returns the dependency IDs of a step
    """
    stack = [_Frame((start,))]
    # Steps whose dependency frame is currently on the stack.
    open_steps: Set[int] = set()

    while stack:
        n = stack[-1].current
        mark = marks[n]

        if n in open_steps:
            # Back edge of a cycle: a dead end for this path.
            pass
        elif mark is Mark.UNKNOWN:
            deps = edges(n)
            if deps:
                open_steps.add(n)
                stack.append(_Frame(deps))
                continue
        elif mark is Mark.KEPT:
            # Mark the path to this point as kept.
            for frame in stack:
                marks[frame.current] = Mark.KEPT

        # Trim the stack.
        while stack:
            frame = stack[-1]
            m = frame.current
            if marks[m] is not Mark.KEPT and m not in open_steps:
                marks[m] = Mark.AVOIDED

            if frame.advance():
                break

            stack.pop()
            if stack:
                # The parent's dependencies are exhausted.
                open_steps.discard(stack[-1].current)


def compute_reachability(
    steps: Sequence[BuildStep],
    root_id: int,
    target: Optional[str] = None
) -> List[Mark]:
    """
    Classify every step for a "why is target built" query.

    Args:
        steps: Build steps indexed by ID
        root_id: Step to search from
        target: Package to explain; None or empty keeps all non-nop steps

    Returns:
        Marks indexed by step ID. Without a target no search is needed.

    Raises:
        PackageNotFoundError: If target is given and no build step matches it
    """
    marks = initial_marks(steps, target)
    if target:
        pathfind(root_id, marks, lambda n: steps[n].deps)
    return marks


def kept_graph(
    steps: Sequence[BuildStep],
    marks: Sequence[Mark],
    root_id: int,
    target_id: Optional[int] = None
) -> ReachabilityResult:
    """Collect kept steps and the dependency edges between them."""
    nodes = []
    edges = []
    for step in steps:
        if marks[step.id] is not Mark.KEPT:
            continue
        nodes.append(step.id)
        for dep in step.deps:
            if marks[dep] is Mark.KEPT:
                edges.append((step.id, dep))
    return ReachabilityResult(root_id=root_id, target_id=target_id, nodes=nodes, edges=edges)


def reachability_query(steps: Sequence[BuildStep], target: Optional[str] = None) -> ReachabilityResult:
    """
    Find the steps and edges that explain why target is part of the build.

    The search starts from the first build step.

    Args:
        steps: Build steps indexed by ID
        target: Package to explain; None or empty returns every non-nop step

    Returns:
        ReachabilityResult with kept step IDs and edges

    Raises:
        PackageNotFoundError: If target is given and no build step matches it
        NoRootError: If the trace has no build step
    """
    target_id = find_target(steps, target) if target else None
    root_id = find_root(steps)
    marks = compute_reachability(steps, root_id, target)
    return kept_graph(steps, marks, root_id, target_id)
