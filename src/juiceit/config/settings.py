"""Pydantic settings for juiceit configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="JUICEIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # External tools
    handbrake_path: str = Field(
        default="HandBrakeCLI",
        description="Path to HandBrakeCLI binary",
    )
    drutil_path: str = Field(
        default="drutil",
        description="Path to drutil, used to auto-detect the DVD drive",
    )
    diskutil_path: str = Field(
        default="diskutil",
        description="Path to diskutil, used to read the disc volume name",
    )
    brew_path: str = Field(
        default="brew",
        description="Path to brew, used to confirm libdvdcss is installed",
    )
    libdvdcss_formula: str = Field(
        default="libdvdcss",
        description="Package name queried to confirm DVD decryption support",
    )

    # Encoding settings
    video_codec: Literal["x264", "x265", "nvenc_h264", "nvenc_h265"] = Field(
        default="x264",
        description="Video encoder to use",
    )
    handbrake_preset: str = Field(
        default="HQ 1080p30 Surround",
        description="HandBrake preset to use",
    )
    frame_rate: str = Field(
        default="30",
        description="Target frame rate passed to HandBrake",
    )

    # Output
    cache_filename: str = Field(
        default=".dvd_cache.json",
        description="Name of the scan cache file kept in the output directory",
    )
    track_prefix: str = Field(
        default="Track",
        description="Base name for ripped titles (Track_1.mp4, Track_2.mp4, ...)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
