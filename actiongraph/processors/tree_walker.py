"""
Ordered traversal of package path trees for rendering.
"""

from typing import Iterator, List, Optional, Sequence

from ..core.types import BuildStep, PathNode, TreeRow
from .tree_builder import build_focus_tree, build_tree, prune_tree


def percent_of(part_ns: int, total_ns: int) -> float:
    if total_ns <= 0:
        return 0.0
    return 100 * part_ns / total_ns


def walk_tree(
    root: PathNode,
    steps: Sequence[BuildStep],
    total_ns: int,
    level: int = -1
) -> Iterator[TreeRow]:
    """
    Walk the tree depth first, heaviest children first.

    The walk uses an explicit stack of sibling groups rather than recursion,
    so deep package paths cannot exhaust the interpreter stack.

    Args:
        root: Root node from build_tree (optionally pruned)
        steps: Steps the tree was built from, indexed by ID
        total_ns: Grand total used for percentages
        level: Deepest node depth to emit; negative for unlimited

    Yields:
        TreeRow for each emitted node, indented by its position in the walk
    """
    groups: List[List[PathNode]] = [[root]]
    while groups:
        # Step up from exhausted sibling groups.
        last = len(groups) - 1
        if not groups[last]:
            groups.pop()
            continue

        node = groups[last].pop()

        if level < 0 or node.depth <= level:
            step = None if node.is_synthetic else steps[node.step_id]
            yield TreeRow(
                path=node.path,
                depth=node.depth,
                indent_level=last,
                step_id=node.step_id,
                step=step,
                own_ns=step.duration_ns if step else None,
                cumulative_ns=node.cumulative_ns,
                cumulative_percent=percent_of(node.cumulative_ns, total_ns),
            )

        # Children are filtered on their own depth; after pruning a node past
        # the level can still have children within it.
        if node.children:
            # Heaviest last, since siblings are popped from the end; ties
            # keep insertion order.
            children = sorted(node.children.values(), key=lambda n: n.cumulative_ns, reverse=True)
            children.reverse()
            groups.append(children)


def tree_query(
    steps: Sequence[BuildStep],
    total_ns: int,
    focus: Optional[Sequence[str]] = None,
    level: int = -1
) -> Iterator[TreeRow]:
    """
    Build, prune and walk a fresh package tree.

    Args:
        steps: Build steps indexed by ID
        total_ns: Grand total used for percentages
        focus: Package paths to restrict the tree to
        level: Deepest node depth to emit; negative for unlimited

    Returns:
        Lazy sequence of TreeRow; each call starts from a new tree
    """
    root = build_tree(steps)
    if focus:
        prune_tree(root, build_focus_tree(focus))
    return walk_tree(root, steps, total_ns, level)
