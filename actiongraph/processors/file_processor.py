"""
Action graph JSON file processing using streaming parser.
"""

import re
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, BinaryIO, Dict, List

import ijson

from ..core.errors import TraceFormatError
from ..core.types import BuildStep

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# RFC 3339 as written by Go's time.Time JSON encoding, with up to 9 fractional digits.
TIMESTAMP_PATTERN = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})'
    r'(?:\.(\d{1,9}))?'
    r'(?:([Zz])|([+-])(\d{2}):(\d{2}))$'
)


def parse_timestamp(value: Any) -> int:
    """
    Parse an RFC 3339 timestamp into nanoseconds since the Unix epoch.

    Args:
        value: Timestamp string such as "2024-03-01T10:00:00.123456789+01:00".
               None or an empty string parse as 0.

    Returns:
        Nanoseconds since 1970-01-01T00:00:00Z (negative for earlier instants)

    Raises:
        TraceFormatError: If the value is not a valid timestamp
    """
    if value is None or value == '':
        return 0
    if not isinstance(value, str):
        raise TraceFormatError(f"invalid timestamp {value!r}")

    match = TIMESTAMP_PATTERN.match(value)
    if not match:
        raise TraceFormatError(f"invalid timestamp {value!r}")

    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, utc, sign, off_hours, off_minutes = match.groups()[6:]

    if utc:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_hours), minutes=int(off_minutes))
        tz = timezone(-offset if sign == '-' else offset)

    try:
        instant = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError as e:
        raise TraceFormatError(f"invalid timestamp {value!r}: {e}") from e

    delta = instant - UNIX_EPOCH
    seconds = delta.days * 86400 + delta.seconds
    nanos = int(fraction.ljust(9, '0')) if fraction else 0
    return seconds * 1_000_000_000 + nanos


def _as_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    return int(value)


def step_from_record(record: Dict[str, Any], position: int) -> BuildStep:
    """
    Build a BuildStep from one decoded action record.

    Args:
        record: Action dictionary as written by `go build -debug-actiongraph`
        position: Index of the record in the action array

    Returns:
        BuildStep for the record

    Raises:
        TraceFormatError: If the record is not an action or its ID does not
                          match its position in the array
    """
    if not isinstance(record, dict):
        raise TraceFormatError(f"action {position} is not an object")

    try:
        step_id = _as_int(record.get('ID'))
        step = BuildStep(
            id=step_id,
            mode=record.get('Mode') or '',
            package=record.get('Package') or '',
            deps=tuple(int(dep) for dep in (record.get('Deps') or [])),
            time_ready_ns=parse_timestamp(record.get('TimeReady')),
            time_start_ns=parse_timestamp(record.get('TimeStart')),
            time_done_ns=parse_timestamp(record.get('TimeDone')),
            objdir=record.get('Objdir') or '',
            target=record.get('Target') or '',
            priority=_as_int(record.get('Priority')),
            built=record.get('Built') or '',
            build_id=record.get('BuildID') or '',
            action_id=record.get('ActionID') or '',
            need_build=bool(record.get('NeedBuild', False)),
            cmd_real=_as_int(record.get('CmdReal')),
            cmd_user=_as_int(record.get('CmdUser')),
            cmd_sys=_as_int(record.get('CmdSys')),
        )
    except TraceFormatError:
        raise
    except (TypeError, ValueError) as e:
        raise TraceFormatError(f"action {position}: {e}") from e

    # Steps are looked up by ID everywhere, so IDs must be dense array positions.
    if step.id != position:
        raise TraceFormatError(f"action at position {position} has ID {step.id}")
    return step


class ActionFileProcessor:
    """Processes Go build action graph JSON files using streaming parser."""

    def __init__(self, show_progress: bool = False):
        self.show_progress = show_progress

    def _progress(self, message: str) -> None:
        if self.show_progress:
            print(message, file=sys.stderr)

    def process_stream(self, stream: BinaryIO) -> List[BuildStep]:
        """
        Decode the action array from a binary stream.

        Args:
            stream: Binary file object positioned at the start of the JSON

        Returns:
            List of build steps indexed by their ID

        Raises:
            TraceFormatError: If the JSON is invalid or not an array of actions
        """
        steps = []
        try:
            events = ijson.parse(stream)
            first = next(events, None)
            if first is None or first[1] != 'start_array':
                found = first[1] if first else 'no JSON value'
                raise TraceFormatError(f"expected a JSON array of actions, got {found}")
            for record in ijson.items(events, 'item'):
                steps.append(step_from_record(record, len(steps)))
                if len(steps) % 1000 == 0:
                    self._progress(f"  Read {len(steps)} actions...")
        except ijson.JSONError as e:
            raise TraceFormatError(f"decoding JSON: {e}") from e
        return steps

    def process_file(self, file_path: str) -> List[BuildStep]:
        """
        Read an action graph file. A path of "-" reads standard input.

        Args:
            file_path: Path to the action graph JSON file

        Returns:
            List of build steps indexed by their ID
        """
        self._progress(f"Processing {file_path}...")

        if file_path == '-':
            steps = self.process_stream(sys.stdin.buffer)
        else:
            with open(file_path, 'rb') as f:
                steps = self.process_stream(f)

        self._progress(f"Completed reading file: {len(steps)} actions found.")
        return steps
