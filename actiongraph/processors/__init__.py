"""Processors for action graph loading and analysis."""

from .file_processor import ActionFileProcessor, parse_timestamp
from .tree_builder import build_tree, build_focus_tree, prune_tree, is_stdlib
from .tree_walker import walk_tree, tree_query
from .reachability import compute_reachability, reachability_query, find_root, pathfind
from .rankings import top_steps, mode_totals, total_duration, wall_clock_ns

__all__ = [
    "ActionFileProcessor",
    "parse_timestamp",
    "build_tree",
    "build_focus_tree",
    "prune_tree",
    "is_stdlib",
    "walk_tree",
    "tree_query",
    "compute_reachability",
    "reachability_query",
    "find_root",
    "pathfind",
    "top_steps",
    "mode_totals",
    "total_duration",
    "wall_clock_ns",
]
