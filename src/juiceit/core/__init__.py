"""Core models."""

from juiceit.core.job import RipJob, plan_jobs

__all__ = [
    "RipJob",
    "plan_jobs",
]
