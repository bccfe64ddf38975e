"""Per-run rip options resolved from the command line."""

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from juiceit.config.settings import Settings
from juiceit.exceptions import OutputDirectoryError

log = structlog.get_logger()


class RipOptions(BaseModel):
    """Immutable configuration for a single ripping run."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path
    dvd_source: str | None = None
    video_codec: str = "x264"
    quality: float = Field(default=20, ge=0, le=51)
    deinterlace: bool = True
    subtitle_track: int = Field(default=1, ge=1)
    subtitle_language: str = "eng"

    @field_validator("output_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand user home directory in paths."""
        return Path(v).expanduser()

    @property
    def quality_arg(self) -> str:
        """Quality formatted for the encoder command line (20.0 -> "20")."""
        return f"{self.quality:g}"

    def with_source(self, dvd_source: str) -> "RipOptions":
        """Return a copy bound to a resolved DVD source."""
        return self.model_copy(update={"dvd_source": dvd_source})


def resolve_options(
    settings: Settings,
    output: Path | None = None,
    dvd_source: str | None = None,
    quality: float = 20,
    deinterlace: bool = True,
    subtitles: int = 1,
    sub_lang: str = "eng",
) -> RipOptions:
    """Build rip options and make sure the output directory exists.

    Args:
        settings: Application settings (supplies the codec)
        output: Output directory, defaults to the current working directory
        dvd_source: Explicit device path, or None to auto-detect later
        quality: Encoder quality level
        deinterlace: Whether to add the explicit deinterlace filter
        subtitles: Subtitle track index (1-based)
        sub_lang: Subtitle language code

    Returns:
        Frozen RipOptions

    Raises:
        OutputDirectoryError: If the output directory cannot be created
    """
    options = RipOptions(
        output_dir=output if output is not None else Path.cwd(),
        dvd_source=dvd_source or None,
        video_codec=settings.video_codec,
        quality=quality,
        deinterlace=deinterlace,
        subtitle_track=subtitles,
        subtitle_language=sub_lang,
    )

    if not options.output_dir.exists():
        log.debug("Creating output directory", path=str(options.output_dir))
    try:
        options.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(
            f"Cannot create output directory '{options.output_dir}': {e.strerror or e}"
        ) from e

    return options
