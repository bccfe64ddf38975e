"""Rip a single title to an MP4 file."""

from pathlib import Path

import structlog

from juiceit.config.options import RipOptions
from juiceit.core.job import RipJob
from juiceit.encoder.handbrake import HandBrake, ProgressCallback

log = structlog.get_logger()


class TrackRipper:
    """Encode individual titles from one device with fixed rip options."""

    def __init__(self, handbrake: HandBrake, device: str, options: RipOptions) -> None:
        """Initialize track ripper.

        Args:
            handbrake: HandBrake wrapper
            device: Device path of the DVD drive
            options: Rip options (output directory, codec, quality, filters)
        """
        self.handbrake = handbrake
        self.device = device
        self.options = options

    async def rip(self, job: RipJob, progress_callback: ProgressCallback | None = None) -> Path:
        """Rip one title.

        Raises:
            RipError: If the encoder exits with a non-zero status
        """
        output_path = job.output_path(self.options.output_dir)
        log.info("Ripping title", title=job.title_index, output=output_path.name)

        return await self.handbrake.encode_title(
            self.device,
            job.title_index,
            output_path,
            self.options,
            progress_callback=progress_callback,
        )
