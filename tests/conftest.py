"""
Pytest configuration and shared fixtures for action graph analyzer tests.
"""
import json
import pytest

from actiongraph.core.types import BuildStep

SECOND = 1_000_000_000

# 2024-03-01T10:00:00Z in nanoseconds since the Unix epoch.
BASE_NS = 1709287200 * SECOND


def make_step(step_id, mode='build', package='', deps=(), seconds=0.0, start=0.0):
    """Helper to create a BuildStep that ran for the given number of seconds."""
    start_ns = BASE_NS + int(start * SECOND)
    return BuildStep(
        id=step_id,
        mode=mode,
        package=package,
        deps=tuple(deps),
        time_start_ns=start_ns,
        time_done_ns=start_ns + int(seconds * SECOND),
    )


def make_record(step_id, mode='build', package='', deps=(), start='2024-03-01T10:00:00Z',
                done='2024-03-01T10:00:01Z'):
    """Helper to create an action record as written by go build -debug-actiongraph."""
    record = {
        "ID": step_id,
        "Mode": mode,
        "Package": package,
        "TimeReady": start,
        "TimeStart": start,
        "TimeDone": done,
        "Cmd": None,
    }
    if deps:
        record["Deps"] = list(deps)
    return record


@pytest.fixture
def sample_steps():
    """
    Small build of a program with one library and two standard library packages.

        0 link   example.com/app        -> 1
        1 build  example.com/app        -> 2, 3, 5
        2 build  example.com/app/lib    -> 4
        3 build  fmt                    -> 4
        4 build  runtime
        5 nop                           -> 2, 3, 4
    """
    return [
        make_step(0, mode='link', package='example.com/app', deps=[1], seconds=4.0, start=10.0),
        make_step(1, package='example.com/app', deps=[2, 3, 5], seconds=1.0, start=9.0),
        make_step(2, package='example.com/app/lib', deps=[4], seconds=3.0, start=6.0),
        make_step(3, package='fmt', deps=[4], seconds=2.0, start=6.0),
        make_step(4, package='runtime', seconds=6.0, start=0.0),
        make_step(5, mode='nop', deps=[2, 3, 4], seconds=0.0, start=9.0),
    ]


@pytest.fixture
def sample_records():
    """Action records for a three step build."""
    return [
        make_record(0, mode='build', package='example.com/app', deps=[1, 2],
                    start='2024-03-01T10:00:02Z', done='2024-03-01T10:00:03.5Z'),
        make_record(1, mode='build', package='example.com/app/lib', deps=[2],
                    start='2024-03-01T10:00:00.25Z', done='2024-03-01T10:00:02Z'),
        make_record(2, mode='build', package='strings',
                    start='2024-03-01T10:00:00Z', done='2024-03-01T10:00:00.25Z'),
        make_record(3, mode='nop', deps=[0, 1, 2],
                    start='0001-01-01T00:00:00Z', done='0001-01-01T00:00:00Z'),
    ]


@pytest.fixture
def sample_action_file(tmp_path, sample_records):
    """Create a temporary action graph JSON file for testing."""
    action_file = tmp_path / "compile.json"
    with open(action_file, "w") as f:
        json.dump(sample_records, f)

    return str(action_file)


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file and return a helper function."""
    counter = {'n': 0}

    def _create_file(data):
        counter['n'] += 1
        file_path = tmp_path / f"test_{counter['n']}.json"
        with open(file_path, "w") as f:
            json.dump(data, f)
        return str(file_path)

    return _create_file


@pytest.fixture
def step_factory():
    """Return the make_step helper."""
    return make_step
