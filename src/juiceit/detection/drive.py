"""Disc identity probing via drutil and diskutil."""

import subprocess

import anyio
import structlog

from juiceit.detection.parser import parse_dvd_device, parse_volume_name
from juiceit.exceptions import DiscNotFoundError

log = structlog.get_logger()


class DiscDrive:
    """Query the OS disk utilities about the optical drive."""

    def __init__(self, drutil: str = "drutil", diskutil: str = "diskutil") -> None:
        """Initialize the disc drive.

        Args:
            drutil: Path to drutil binary
            diskutil: Path to diskutil binary
        """
        self.drutil = drutil
        self.diskutil = diskutil

    async def _run(self, cmd: list[str]) -> str | None:
        """Run a command, returning stdout or None if it failed to run or exited non-zero."""
        try:
            process = await anyio.run_process(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            log.warning("Failed to run command", command=cmd[0], error=str(e))
            return None

        if process.returncode != 0:
            log.warning(
                "Command failed",
                command=" ".join(cmd),
                returncode=process.returncode,
                stderr=process.stderr.decode("utf-8", errors="replace").strip() or None,
            )
            return None

        return process.stdout.decode("utf-8", errors="replace")

    async def get_volume_name(self, device: str) -> str | None:
        """Get the volume label of the disc in a device.

        Args:
            device: Device path (e.g., /dev/disk5)

        Returns:
            Volume label, or None if no disc is present or the lookup failed
        """
        output = await self._run([self.diskutil, "info", device])
        if output is None:
            return None

        name = parse_volume_name(output)
        log.info("Current volume name", device=device, volume_name=name)
        return name

    async def detect_dvd_source(self) -> str | None:
        """Auto-detect the device of the drive holding a DVD.

        Returns:
            Device identifier, or None if no DVD drive reports a disc
        """
        output = await self._run([self.drutil, "status"])
        if output is None:
            return None

        device = parse_dvd_device(output)
        if device:
            log.info("Detected DVD source", device=device)
        return device

    async def resolve_dvd_source(self, explicit: str | None) -> str:
        """Return the explicit device, or auto-detect one.

        Raises:
            DiscNotFoundError: If no device was given and none was detected
        """
        if explicit:
            return explicit

        device = await self.detect_dvd_source()
        if not device:
            raise DiscNotFoundError(
                "No DVD source detected. Please provide a valid DVD source using --dvdSource."
            )
        return device
