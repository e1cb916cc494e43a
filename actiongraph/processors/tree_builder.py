"""
Package path tree builder for build steps.
"""

from typing import Iterable, Iterator, List, Sequence

from ..core.types import BUILD_MODE, SYNTHETIC, BuildStep, PathNode

ROOT_PATH = '(root)'
STDLIB_PREFIX = 'std/'


def is_stdlib(package: str) -> bool:
    """
    Guess whether a package belongs to the standard library.

    Packages whose first path element has no "." (no domain) are assumed to
    be standard library. Go modules don't need to start with a domain, so this
    is a heuristic rather than a guarantee.
    """
    first = package.split('/', 1)[0]
    return '.' not in first


def path_prefixes(package: str) -> Iterator[str]:
    """Yield each "/" delimited prefix of package, ending with package itself."""
    p = 0
    while True:
        p = package.find('/', p + 1)
        if p == -1:
            yield package
            return
        yield package[:p]


def build_tree(steps: Iterable[BuildStep]) -> PathNode:
    """
    Roll the durations of build steps up a package path tree.

    Args:
        steps: Build steps; only steps with mode "build" are counted

    Returns:
        Synthetic root node whose cumulative time is the total of all build steps
    """
    root = PathNode(path=ROOT_PATH)

    for step in steps:
        if step.mode != BUILD_MODE:
            continue

        package = step.package
        if is_stdlib(package):
            package = STDLIB_PREFIX + package

        duration = step.duration_ns
        node = root
        node.cumulative_ns += duration
        for depth, path in enumerate(path_prefixes(package), start=1):
            child = node.children.get(path)
            if child is None:
                child = PathNode(path=path, depth=depth)
                node.children[path] = child
            node = child
            node.cumulative_ns += duration

        # The leaf takes the step ID even if it was created as an intermediate.
        node.step_id = step.id

    return root


def build_focus_tree(focus: Sequence[str]) -> PathNode:
    """
    Build the tree of package paths to keep when pruning.

    Every focus path becomes a concrete node (ID 0); its ancestors stay synthetic.
    """
    focus_steps: List[BuildStep] = [
        BuildStep(id=0, mode=BUILD_MODE, package=package.rstrip('/.'))
        for package in focus
    ]
    return build_tree(focus_steps)


def prune_tree(root: PathNode, keep: PathNode) -> None:
    """
    Remove descendants of root that are not on the way to, or below, a node in keep.

    Depths are renumbered so each kept focus path sits at depth 0 and its
    descendants count from there. The tree is modified in place.

    Args:
        root: Tree built from the steps
        keep: Tree built from the focus paths with build_focus_tree
    """
    work = [(root, keep)]

    while work:
        real, kept = work.pop()

        if kept.step_id == SYNTHETIC:
            # Branch node of the focus tree: keep only children it shares.
            for path, child in list(real.children.items()):
                child.depth = 0
                kept_child = kept.children.get(path)
                if kept_child is None:
                    del real.children[path]
                else:
                    work.append((child, kept_child))
        else:
            # Focus path: keep everything below, counting depth from here.
            for path, child in real.children.items():
                child.depth -= kept.depth
                kept_child = kept.children.get(path)
                if kept_child is None:
                    kept_child = PathNode(path=path, depth=kept.depth, step_id=0)
                work.append((child, kept_child))
