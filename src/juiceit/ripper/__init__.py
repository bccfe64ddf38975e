"""DVD title ripping module."""

from juiceit.ripper.counter import TitleCounter
from juiceit.ripper.sequencer import Sequencer
from juiceit.ripper.track import TrackRipper

__all__ = ["Sequencer", "TitleCounter", "TrackRipper"]
