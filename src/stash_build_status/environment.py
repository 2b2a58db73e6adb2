"""Concourse build metadata for the running step."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import (
    DEFAULT_TEAM_NAME,
    ENV_ATC_EXTERNAL_URL,
    ENV_BUILD_ID,
    ENV_BUILD_JOB_NAME,
    ENV_BUILD_NAME,
    ENV_BUILD_PIPELINE_NAME,
    ENV_BUILD_TEAM_NAME,
)


@dataclass(frozen=True)
class BuildEnvironment:
    """Build metadata Concourse exposes to resource scripts.

    Read once at the start of a run and passed down, so nothing below the
    CLI looks at the process environment.
    """

    job_name: str = ""
    build_id: str = ""
    build_name: str = ""
    pipeline_name: str = ""
    team_name: str = ""
    atc_external_url: str = ""

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "BuildEnvironment":
        """Create the build environment from environment variables.

        Environment variables:
            BUILD_JOB_NAME: Name of the job running the step
            BUILD_ID: Internal build ID
            BUILD_NAME: Build number within the job
            BUILD_PIPELINE_NAME: Pipeline name
            BUILD_TEAM_NAME: Team name (may be empty on older Concourse)
            ATC_EXTERNAL_URL: External URL of the Concourse web node

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            BuildEnvironment instance
        """
        if env is None:
            env = os.environ
        return cls(
            job_name=env.get(ENV_BUILD_JOB_NAME, ""),
            build_id=env.get(ENV_BUILD_ID, ""),
            build_name=env.get(ENV_BUILD_NAME, ""),
            pipeline_name=env.get(ENV_BUILD_PIPELINE_NAME, ""),
            team_name=env.get(ENV_BUILD_TEAM_NAME, ""),
            atc_external_url=env.get(ENV_ATC_EXTERNAL_URL, ""),
        )

    @property
    def status_key(self) -> str:
        return self.job_name

    @property
    def status_name(self) -> str:
        return f"{self.job_name}-{self.build_id}"

    def build_url(self) -> str:
        """Deep link to this build in the Concourse UI."""
        team = self.team_name or DEFAULT_TEAM_NAME
        return (
            f"{self.atc_external_url}/teams/{team}/pipelines/{self.pipeline_name}"
            f"/jobs/{self.job_name}/builds/{self.build_name}"
        )
