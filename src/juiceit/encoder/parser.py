"""HandBrake output parsers for scan results and progress tracking."""

import re
from dataclasses import dataclass

TITLE_COUNT_RE = re.compile(r"scan: DVD has (\d+) title")

# Encoding: task 1 of 1, 45.23 % (148.34 fps, avg 152.11 fps, ETA 00h12m34s)
PROGRESS_RE = re.compile(
    r"Encoding:.* (\d{1,3}\.\d{1,2}) %"
    r"(?: \(([\d.]+) fps, avg ([\d.]+) fps, ETA (\S+)\))?"
)
TASK_RE = re.compile(r"task (\d+) of (\d+)")


@dataclass
class EncodeProgress:
    """Encoding progress information."""

    percent: float = 0.0
    eta: str = ""
    fps: float = 0.0
    avg_fps: float = 0.0
    pass_num: int = 1
    total_passes: int = 1


def parse_progress_line(line: str) -> EncodeProgress | None:
    """Parse a HandBrake progress line.

    Args:
        line: Line of HandBrake stdout

    Returns:
        EncodeProgress if line contains progress info, None otherwise
    """
    match = PROGRESS_RE.search(line)
    if not match:
        return None

    progress = EncodeProgress(percent=float(match.group(1)))
    if match.group(2):
        progress.fps = float(match.group(2))
    if match.group(3):
        progress.avg_fps = float(match.group(3))
    if match.group(4):
        progress.eta = match.group(4)

    task_match = TASK_RE.search(line)
    if task_match:
        progress.pass_num = int(task_match.group(1))
        progress.total_passes = int(task_match.group(2))

    return progress


def parse_title_count(output: str) -> int | None:
    """Find the number of titles reported by ``HandBrakeCLI --scan``.

    HandBrake logs a line such as ``[12:00:01] scan: DVD has 3 title(s)``
    once the disc has been read.

    Args:
        output: Full scan output

    Returns:
        Title count, or None if the scan did not report one
    """
    match = TITLE_COUNT_RE.search(output)
    if not match:
        return None
    return int(match.group(1))


def split_output_lines(buffer: str) -> tuple[list[str], str]:
    """Split buffered output into complete lines and a trailing remainder.

    HandBrake rewrites its progress line in place with carriage returns, so both
    ``\\r`` and ``\\n`` end a line. Empty fragments are dropped.

    Returns:
        Tuple of (complete lines, unterminated remainder)
    """
    parts = re.split(r"[\r\n]", buffer)
    remainder = parts.pop()
    return [p for p in parts if p.strip()], remainder
