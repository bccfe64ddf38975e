"""Scan result cache keyed by disc volume name.

A full HandBrake scan of a DVD is slow, so the title count of the last scanned
disc is kept in a hidden JSON file inside the output directory::

    {"volumeName": "THE_MATRIX", "numTitles": 12}

The record is only reused when the volume name of the disc currently in the
drive matches exactly. Any other disc (or an unreadable file) invalidates it.
"""

import os
import tempfile
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from juiceit.exceptions import CacheCorruptionError, CacheError

log = structlog.get_logger()

DEFAULT_CACHE_FILENAME = ".dvd_cache.json"


class CacheRecord(BaseModel):
    """Title count remembered for one disc."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    volume_name: str = Field(alias="volumeName")
    num_titles: int = Field(ge=0, alias="numTitles")


def parse_cache_record(raw: str | bytes) -> CacheRecord:
    """Parse the cache file contents.

    Raises:
        CacheCorruptionError: If the text is not a valid cache record
    """
    try:
        return CacheRecord.model_validate_json(raw)
    except ValidationError as e:
        raise CacheCorruptionError(f"Malformed scan cache: {e.error_count()} error(s)") from e


class ScanCache:
    """Persisted volume name -> title count record for one output directory."""

    def __init__(self, output_dir: Path, filename: str = DEFAULT_CACHE_FILENAME) -> None:
        """Initialize scan cache.

        Args:
            output_dir: Directory the cache file lives in
            filename: Name of the hidden cache file
        """
        self.path = Path(output_dir) / filename
        log.debug("Cache file path", path=str(self.path))

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> CacheRecord | None:
        """Load the cached record.

        Returns:
            The record, or None if the file is absent or malformed
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            log.warning("Ignoring unreadable scan cache", path=str(self.path), error=str(e))
            return None

        try:
            record = parse_cache_record(raw)
        except CacheCorruptionError as e:
            log.warning("Ignoring unreadable scan cache", path=str(self.path), error=e.message)
            return None

        log.debug(
            "Loaded scan cache",
            volume_name=record.volume_name,
            num_titles=record.num_titles,
        )
        return record

    @staticmethod
    def validate(record: CacheRecord | None, volume_name: str | None) -> bool:
        """Check whether a record belongs to the disc with the given volume name."""
        if record is None or volume_name is None:
            return False
        return record.volume_name == volume_name

    def store(self, volume_name: str, num_titles: int) -> CacheRecord:
        """Persist a record, replacing any previous one atomically.

        Args:
            volume_name: Volume name of the scanned disc
            num_titles: Number of titles found by the scan

        Returns:
            The stored record

        Raises:
            CacheError: If the file cannot be written
        """
        record = CacheRecord(volume_name=volume_name, num_titles=num_titles)
        payload = record.model_dump_json(by_alias=True)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=self.path.name,
                suffix=".tmp",
            )
        except OSError as e:
            raise CacheError(f"Cannot write scan cache '{self.path}': {e.strerror or e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise CacheError(f"Cannot write scan cache '{self.path}': {e.strerror or e}") from e
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        log.info(
            "Cache created",
            volume_name=volume_name,
            num_titles=num_titles,
        )
        return record

    def invalidate(self) -> None:
        """Delete the cache file if present.

        Raises:
            CacheError: If the file cannot be removed
        """
        if self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                raise CacheError(
                    f"Cannot remove scan cache '{self.path}': {e.strerror or e}"
                ) from e
            log.debug("Removed scan cache", path=str(self.path))

    def discard_if_stale(self, volume_name: str | None) -> bool:
        """Delete the cache file unless it belongs to the current disc.

        A file that cannot be parsed is stale as well.

        Args:
            volume_name: Volume name of the disc currently in the drive

        Returns:
            True if a file was removed
        """
        if not self.exists():
            return False

        record = self.load()
        if self.validate(record, volume_name):
            return False

        self.invalidate()
        log.info(
            "Cache cleared due to volume name change",
            cached=record.volume_name if record else None,
            current=volume_name,
        )
        return True
