"""Per-title rip jobs."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class RipJob(BaseModel):
    """One title to rip and the file name it is written to."""

    model_config = ConfigDict(frozen=True)

    title_index: int = Field(ge=1)
    output_name: str

    def output_path(self, output_dir: Path) -> Path:
        """Full path of the MP4 file for this job."""
        return Path(output_dir) / f"{self.output_name}.mp4"


def plan_jobs(num_titles: int, prefix: str = "Track") -> list[RipJob]:
    """Create one job per title, numbered 1..num_titles in order."""
    return [
        RipJob(title_index=index, output_name=f"{prefix}_{index}")
        for index in range(1, num_titles + 1)
    ]
