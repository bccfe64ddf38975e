"""HandBrake async wrapper for disc scanning and title encoding."""

import asyncio
import codecs
from collections.abc import Callable
from pathlib import Path

import structlog

from juiceit.config.options import RipOptions
from juiceit.encoder.parser import (
    EncodeProgress,
    parse_progress_line,
    parse_title_count,
    split_output_lines,
)
from juiceit.exceptions import MissingDependencyError, RipError, ScanError

log = structlog.get_logger()

ProgressCallback = Callable[[EncodeProgress], None]

READ_CHUNK_SIZE = 4096


async def _read_lines(stream: asyncio.StreamReader, on_line: Callable[[str], None]) -> None:
    """Feed every line of a stream to a callback, splitting on CR and LF."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        buffer += decoder.decode(chunk)
        lines, buffer = split_output_lines(buffer)
        for line in lines:
            on_line(line.strip())

    buffer += decoder.decode(b"", final=True)
    if buffer.strip():
        on_line(buffer.strip())


class HandBrake:
    """Async wrapper for HandBrakeCLI."""

    def __init__(
        self,
        executable: str = "HandBrakeCLI",
        preset: str = "HQ 1080p30 Surround",
        frame_rate: str = "30",
    ) -> None:
        """Initialize HandBrake wrapper.

        Args:
            executable: Path to HandBrakeCLI binary
            preset: HandBrake preset applied to every title
            frame_rate: Target frame rate applied to every title
        """
        self.executable = executable
        self.preset = preset
        self.frame_rate = frame_rate

    def _launch_failed(self, error: OSError) -> MissingDependencyError:
        if isinstance(error, FileNotFoundError):
            return MissingDependencyError(
                f"HandBrakeCLI not found at '{self.executable}'. "
                "Please install HandBrake and ensure HandBrakeCLI is in PATH."
            )
        return MissingDependencyError(
            f"Cannot run HandBrakeCLI at '{self.executable}': {error.strerror or error}"
        )

    async def scan_title_count(self, device: str) -> int | None:
        """Scan a disc and return the number of titles HandBrake reports.

        Args:
            device: Device path (e.g., /dev/disk5)

        Returns:
            Title count, or None if the scan output does not mention one

        Raises:
            ScanError: If the scan exits with a non-zero status
        """
        cmd = [self.executable, "-i", device, "--title", "0", "--scan"]
        log.info("Fetching disc title information", device=device, command=" ".join(cmd))

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            raise self._launch_failed(e) from e

        stdout, _ = await process.communicate()
        output = stdout.decode("utf-8", errors="replace")
        log.debug("Scan output", output=output)

        if process.returncode != 0:
            raise ScanError(
                f"HandBrakeCLI process exited with code {process.returncode}",
                returncode=process.returncode,
            )

        count = parse_title_count(output)
        log.info("Disc scan complete", device=device, titles=count)
        return count

    def build_encode_command(
        self,
        device: str,
        title_index: int,
        output_path: Path,
        options: RipOptions,
    ) -> list[str]:
        """Build the HandBrakeCLI command line for one title."""
        cmd = [
            self.executable,
            "-i", device,
            "-o", str(output_path),
            "-e", options.video_codec,
            "-q", options.quality_arg,
            "-t", str(title_index),
            "--subtitle", str(options.subtitle_track),
            "--subtitle-lang-list", options.subtitle_language,
            "--decomb",
            "--detelecine",
            "--rate", self.frame_rate,
            "--preset", self.preset,
        ]

        if options.deinterlace:
            cmd.append("--deinterlace")

        return cmd

    async def encode_title(
        self,
        device: str,
        title_index: int,
        output_path: Path,
        options: RipOptions,
        progress_callback: ProgressCallback | None = None,
    ) -> Path:
        """Encode a single disc title to a file.

        Args:
            device: Device path (e.g., /dev/disk5)
            title_index: 1-based title number
            output_path: Path for output file
            options: Rip options (codec, quality, filters, subtitles)
            progress_callback: Optional callback for progress updates, called in
                the order HandBrake prints them

        Returns:
            Path to encoded file

        Raises:
            RipError: If HandBrake exits with a non-zero status
        """
        cmd = self.build_encode_command(device, title_index, output_path, options)
        log.info(
            "Running HandBrakeCLI",
            title=title_index,
            output=output_path.name,
            command=" ".join(cmd),
        )

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise self._launch_failed(e) from e

        assert process.stdout is not None
        assert process.stderr is not None

        def on_stdout(line: str) -> None:
            progress = parse_progress_line(line)
            if progress and progress_callback:
                progress_callback(progress)

        def on_stderr(line: str) -> None:
            log.info("handbrake-info", title=title_index, message=line)

        await asyncio.gather(
            _read_lines(process.stdout, on_stdout),
            _read_lines(process.stderr, on_stderr),
        )
        returncode = await process.wait()

        if returncode != 0:
            raise RipError(
                f"HandBrakeCLI process exited with code {returncode}",
                title_index=title_index,
                returncode=returncode,
            )

        log.info("Encode complete", title=title_index, output=str(output_path))
        return output_path
