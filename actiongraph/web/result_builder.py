"""
Result builder for web interface output.
"""

from typing import Optional, Sequence

from ..formatters import format_duration, render_dot


def prepare_results(
    analyzer,
    focus: Optional[Sequence[str]] = None,
    level: Optional[int] = None,
    why: Optional[str] = None,
    limit: Optional[int] = None
):
    """
    Convert analyzer results to a structured format for JSON/HTML output.

    Every query runs before anything is returned, so a failed graph query
    produces no partial results.

    Args:
        analyzer: ActionGraphAnalyzer instance with a loaded trace
        focus: Package paths to prune the tree to
        level: Tree depth limit (negative for unlimited)
        why: Package to explain in the graph section
        limit: Number of slowest steps to list

    Returns:
        Dictionary with structured results for rendering

    Raises:
        ActionGraphError: If the graph query fails
    """
    # Graph first: it is the only query that can fail.
    graph = analyzer.why(why)
    steps = analyzer.steps

    tree_rows = []
    for row in analyzer.tree(focus, level):
        entry = row.to_dict()
        entry['own_formatted'] = '' if row.own_ns is None else format_duration(row.own_ns)
        entry['cumulative_formatted'] = format_duration(row.cumulative_ns)
        tree_rows.append(entry)

    top_rows = []
    for row in analyzer.top(limit):
        entry = row.to_dict()
        entry['duration_formatted'] = format_duration(row.step.duration_ns)
        top_rows.append(entry)

    type_rows = []
    for row in analyzer.types():
        entry = row.to_dict()
        entry['duration_formatted'] = format_duration(row.duration_ns)
        type_rows.append(entry)

    graph_nodes = []
    for step_id in graph.nodes:
        step = steps[step_id]
        graph_nodes.append({
            'id': step_id,
            'mode': step.mode,
            'package': step.package,
            'duration_ns': step.duration_ns,
            'duration_formatted': format_duration(step.duration_ns),
        })

    return {
        'summary': analyzer.summary(),
        'tree': tree_rows,
        'top': top_rows,
        'types': type_rows,
        'graph': {
            'root_id': graph.root_id,
            'target_id': graph.target_id,
            'why': why if why is not None else analyzer.config.why,
            'nodes': graph_nodes,
            'edges': [list(edge) for edge in graph.edges],
            'dot': render_dot(steps, graph),
        },
    }
