"""Title counting with scan caching."""

import structlog

from juiceit.cache.scan_cache import ScanCache
from juiceit.detection.drive import DiscDrive
from juiceit.encoder.handbrake import HandBrake

log = structlog.get_logger()


class TitleCounter:
    """Count the titles on the inserted disc, reusing a cached scan when possible."""

    def __init__(self, handbrake: HandBrake, cache: ScanCache, drive: DiscDrive) -> None:
        self.handbrake = handbrake
        self.cache = cache
        self.drive = drive

    async def count(self, device: str, volume_name: str | None = None) -> int:
        """Return the number of rippable titles on the disc.

        Args:
            device: Device path of the DVD drive
            volume_name: Volume name already looked up; looked up again when None

        Returns:
            Title count (0 if the scan reports none)

        Raises:
            ScanError: If the scan subprocess fails
        """
        if volume_name is None:
            volume_name = await self.drive.get_volume_name(device)

        record = self.cache.load()
        if record is not None:
            log.info(
                "Comparing cached volume name",
                cached=record.volume_name,
                current=volume_name,
            )
            if self.cache.validate(record, volume_name):
                log.info("Using cached title information", num_titles=record.num_titles)
                return record.num_titles
            log.info("Volume names do not match, cache will be ignored")
        else:
            log.info("No usable cache, fetching title information from the disc")

        num_titles = await self.handbrake.scan_title_count(device)
        if num_titles is None:
            log.warning("No titles found", device=device)
            return 0

        if volume_name is None:
            log.warning("Volume name unknown, not caching scan result", num_titles=num_titles)
        else:
            self.cache.store(volume_name, num_titles)

        return num_titles
