"""Disc detection and dependency checks."""

from juiceit.detection.dependencies import check_handbrake, check_libdvdcss
from juiceit.detection.drive import DiscDrive

__all__ = ["DiscDrive", "check_handbrake", "check_libdvdcss"]
