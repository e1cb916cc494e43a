"""
Unit tests for actiongraph.processors.tree_walker module.
"""
import pytest
from actiongraph.processors.tree_builder import build_tree
from actiongraph.processors.tree_walker import percent_of, tree_query, walk_tree

SECOND = 1_000_000_000


class TestWalkTree:
    """Tests for walk_tree() ordering and row contents."""

    def test_heaviest_children_first(self, step_factory):
        steps = [
            step_factory(0, package='x.org/y', seconds=2),
            step_factory(1, package='x.org/z', seconds=3),
        ]
        rows = list(walk_tree(build_tree(steps), steps, 5 * SECOND))

        assert [r.path for r in rows] == ['(root)', 'x.org', 'x.org/z', 'x.org/y']

    def test_equal_children_keep_insertion_order(self, step_factory):
        steps = [step_factory(i, package=f'x.org/p{i}', seconds=1) for i in range(4)]
        rows = list(walk_tree(build_tree(steps), steps, 4 * SECOND))

        assert [r.path for r in rows[2:]] == ['x.org/p0', 'x.org/p1', 'x.org/p2', 'x.org/p3']

    def test_wide_sibling_group(self, step_factory):
        n = 20_000
        steps = [step_factory(i, package=f'pkg{i}', seconds=(i % 7) + 1) for i in range(n)]
        rows = list(walk_tree(build_tree(steps), steps, 1))

        assert len(rows) == n + 2
        times = [r.cumulative_ns for r in rows[2:]]
        assert times == sorted(times, reverse=True)

    def test_depth_first_order(self, sample_steps):
        rows = list(walk_tree(build_tree(sample_steps), sample_steps, 16 * SECOND))

        assert [r.path for r in rows] == [
            '(root)',
            'std',
            'std/runtime',
            'std/fmt',
            'example.com',
            'example.com/app',
            'example.com/app/lib',
        ]
        assert [r.indent_level for r in rows] == [0, 1, 2, 2, 1, 2, 3]

    def test_synthetic_rows_have_no_own_time(self, sample_steps):
        rows = {r.path: r for r in walk_tree(build_tree(sample_steps), sample_steps, 16 * SECOND)}

        assert rows['(root)'].own_ns is None
        assert rows['(root)'].step is None
        assert rows['std'].own_ns is None
        assert rows['std/runtime'].own_ns == 6 * SECOND
        assert rows['std/runtime'].step is sample_steps[4]
        assert rows['example.com/app'].own_ns == 1 * SECOND
        assert rows['example.com/app'].cumulative_ns == 4 * SECOND

    def test_percent_of_grand_total(self, sample_steps):
        rows = {r.path: r for r in walk_tree(build_tree(sample_steps), sample_steps, 16 * SECOND)}

        assert rows['(root)'].cumulative_percent == pytest.approx(75.0)
        assert rows['std/runtime'].cumulative_percent == pytest.approx(37.5)

    def test_step_zero_reports_own_time(self, step_factory):
        """The first step is a real step, not an intermediate node."""
        steps = [step_factory(0, package='example.com/a', seconds=2)]
        rows = list(walk_tree(build_tree(steps), steps, 2 * SECOND))

        assert rows[-1].path == 'example.com/a'
        assert rows[-1].own_ns == 2 * SECOND

    def test_level_limits_depth(self, sample_steps):
        rows = list(walk_tree(build_tree(sample_steps), sample_steps, 16 * SECOND, level=1))

        assert [r.path for r in rows] == ['(root)', 'std', 'example.com']

    def test_level_zero_shows_root_only(self, sample_steps):
        rows = list(walk_tree(build_tree(sample_steps), sample_steps, 16 * SECOND, level=0))

        assert [r.path for r in rows] == ['(root)']

    def test_indent_string(self, sample_steps):
        rows = list(walk_tree(build_tree(sample_steps), sample_steps, 16 * SECOND))

        assert rows[0].indent == ''
        assert rows[-1].indent == '      '


class TestTreeQuery:
    """Tests for tree_query() focus handling."""

    def test_focus_restricts_rows(self, sample_steps):
        rows = list(tree_query(sample_steps, 16 * SECOND, focus=['example.com/app']))

        assert [r.path for r in rows] == [
            '(root)',
            'example.com',
            'example.com/app',
            'example.com/app/lib',
        ]

    def test_focus_with_level_zero(self, sample_steps):
        rows = list(tree_query(sample_steps, 16 * SECOND, focus=['example.com/app'], level=0))

        assert [r.path for r in rows] == ['(root)', 'example.com', 'example.com/app']

    def test_nested_focus_below_skipped_node(self, step_factory):
        """A focus path is shown even when an intermediate node is past the level."""
        steps = [
            step_factory(0, package='pkg.io/one', seconds=1),
            step_factory(1, package='pkg.io/one/two/three', seconds=2),
            step_factory(2, package='pkg.io/one/two/four', seconds=3),
        ]
        rows = list(tree_query(
            steps, 6 * SECOND,
            focus=['pkg.io/one', 'pkg.io/one/two/three'],
            level=0,
        ))

        assert [r.path for r in rows] == ['(root)', 'pkg.io', 'pkg.io/one', 'pkg.io/one/two/three']

    def test_query_is_restartable(self, sample_steps):
        first = [r.path for r in tree_query(sample_steps, 16 * SECOND, focus=['fmt'])]
        second = [r.path for r in tree_query(sample_steps, 16 * SECOND, focus=['fmt'])]

        assert first == second == ['(root)', 'std', 'std/fmt']

    def test_no_focus_shows_everything(self, sample_steps):
        rows = list(tree_query(sample_steps, 16 * SECOND))
        assert len(rows) == 7


class TestPercentOf:
    """Tests for percent_of()."""

    def test_zero_total(self):
        assert percent_of(5, 0) == 0.0

    def test_share(self):
        assert percent_of(1, 4) == 25.0
