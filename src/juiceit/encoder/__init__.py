"""HandBrake encoder module."""

from juiceit.encoder.handbrake import HandBrake
from juiceit.encoder.parser import EncodeProgress

__all__ = ["EncodeProgress", "HandBrake"]
