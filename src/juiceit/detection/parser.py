"""Parsers for OS disk utility output."""

import re

VOLUME_NAME_RE = re.compile(r"Volume Name:[ \t]*(.*)")


def parse_volume_name(output: str) -> str | None:
    """Extract the volume label from ``diskutil info`` output.

    Example line::

        Volume Name:               THE_MATRIX

    Args:
        output: Full diskutil stdout

    Returns:
        The trimmed label, or None if the field is missing or empty
    """
    match = VOLUME_NAME_RE.search(output)
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


def parse_dvd_device(output: str) -> str | None:
    """Find the DVD drive device in ``drutil status`` output.

    drutil prints one line per drive with the media type and the device node,
    for example::

        Type: DVD-ROM              Name: /dev/disk5

    The first line whose type is a DVD wins, and its last token is returned.

    Args:
        output: Full drutil stdout

    Returns:
        Device identifier (e.g. /dev/disk5), or None if no DVD is listed
    """
    for line in output.splitlines():
        if "Type: DVD" not in line:
            continue
        parts = line.split()
        if parts:
            return parts[-1]
    return None
