"""End-to-end rip of every title on a disc."""

from collections.abc import Callable
from pathlib import Path

import structlog

from juiceit.cache.scan_cache import ScanCache
from juiceit.config.options import RipOptions
from juiceit.config.settings import Settings
from juiceit.core.job import RipJob, plan_jobs
from juiceit.detection.dependencies import check_handbrake, check_libdvdcss
from juiceit.detection.drive import DiscDrive
from juiceit.encoder.handbrake import HandBrake
from juiceit.encoder.parser import EncodeProgress
from juiceit.ripper.counter import TitleCounter
from juiceit.ripper.track import TrackRipper

log = structlog.get_logger()


class Sequencer:
    """Drive dependency checks, title counting and sequential ripping."""

    def __init__(
        self,
        settings: Settings,
        options: RipOptions,
        handbrake: HandBrake | None = None,
        drive: DiscDrive | None = None,
        check_dependencies: bool = True,
    ) -> None:
        """Initialize sequencer.

        Args:
            settings: Application settings
            options: Rip options for this run
            handbrake: HandBrake wrapper, built from settings when omitted
            drive: Disc drive, built from settings when omitted
            check_dependencies: Verify HandBrakeCLI and libdvdcss before starting
        """
        self.settings = settings
        self.options = options
        self.handbrake = handbrake or HandBrake(
            settings.handbrake_path,
            preset=settings.handbrake_preset,
            frame_rate=settings.frame_rate,
        )
        self.drive = drive or DiscDrive(settings.drutil_path, settings.diskutil_path)
        self.cache = ScanCache(options.output_dir, settings.cache_filename)
        self.check_dependencies = check_dependencies

    async def ensure_dependencies(self) -> None:
        """Raise MissingDependencyError if an external requirement is absent."""
        await check_handbrake(self.settings.handbrake_path)
        await check_libdvdcss(self.settings.brew_path, self.settings.libdvdcss_formula)

    async def run(
        self,
        on_title_start: Callable[[RipJob, int], None] | None = None,
        on_progress: Callable[[RipJob, EncodeProgress], None] | None = None,
        on_title_done: Callable[[RipJob, Path], None] | None = None,
    ) -> list[Path]:
        """Rip every title on the disc, one at a time, in title order.

        A failed title stops the run. Files ripped before it are kept.

        Args:
            on_title_start: Called with the job and total title count before each rip
            on_progress: Called with encode progress while a title rips
            on_title_done: Called with the job and output path after each rip

        Returns:
            Paths of the ripped files

        Raises:
            JuiceItError: On a missing dependency, no disc, or a failed subprocess
        """
        if self.check_dependencies:
            await self.ensure_dependencies()

        device = await self.drive.resolve_dvd_source(self.options.dvd_source)
        volume_name = await self.drive.get_volume_name(device)

        self.cache.discard_if_stale(volume_name)

        counter = TitleCounter(self.handbrake, self.cache, self.drive)
        num_titles = await counter.count(device, volume_name)
        log.info("Number of titles", num_titles=num_titles)

        ripper = TrackRipper(self.handbrake, device, self.options.with_source(device))
        jobs = plan_jobs(num_titles, self.settings.track_prefix)
        ripped: list[Path] = []

        for job in jobs:
            if on_title_start:
                on_title_start(job, num_titles)

            callback = None
            if on_progress:
                callback = lambda progress, job=job: on_progress(job, progress)

            output_path = await ripper.rip(job, progress_callback=callback)
            ripped.append(output_path)

            if on_title_done:
                on_title_done(job, output_path)

        log.info("Ripping complete", titles=len(ripped), output_dir=str(self.options.output_dir))
        return ripped
