"""Checks for the external tools juiceit shells out to."""

import subprocess

import anyio
import structlog

from juiceit.exceptions import MissingDependencyError

log = structlog.get_logger()


async def _succeeds(cmd: list[str]) -> bool:
    """Return True if the command runs and exits 0."""
    try:
        process = await anyio.run_process(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return process.returncode == 0


async def check_handbrake(executable: str = "HandBrakeCLI") -> None:
    """Ensure HandBrakeCLI is installed.

    Raises:
        MissingDependencyError: If ``HandBrakeCLI --version`` fails
    """
    if not await _succeeds([executable, "--version"]):
        raise MissingDependencyError(
            "HandBrakeCLI is not installed. "
            "Please install it using 'brew install handbrake' to use this tool."
        )
    log.debug("Found HandBrakeCLI", executable=executable)


async def check_libdvdcss(brew: str = "brew", formula: str = "libdvdcss") -> None:
    """Ensure the DVD decryption library is installed.

    Raises:
        MissingDependencyError: If the package query fails
    """
    if not await _succeeds([brew, "list", formula]):
        raise MissingDependencyError(
            f"{formula} is not installed. "
            f"Please install it using 'brew install {formula}' to use this tool."
        )
    log.debug("Found decryption library", formula=formula)
