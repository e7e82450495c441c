"""Data types shared across the release pipeline."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional

from dateutil import tz
from pydantic import BaseModel, Field, field_validator


VERSION_RE = re.compile(r"\d+\.\d+\.\d+")


class ReleaseType(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class PipelineState(str, Enum):
    IDLE = "idle"
    RESOLVING_TAG = "resolving_tag"
    FETCHING_TASKS = "fetching_tasks"
    BUILDING = "building"
    WRITING_PRIMARY = "writing_primary"
    RENDERING = "rendering"
    WRITING_DERIVED = "writing_derived"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Tag:
    id: str
    name: str


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    project_ids: FrozenSet[str] = frozenset()


def is_valid_version(version: str) -> bool:
    """Check that a version string looks like ``x.y.z``."""
    return bool(VERSION_RE.fullmatch(version or ""))


class ReleaseMetadata(BaseModel):
    """Version, release type and generation time of one release document."""

    version: str
    release_type: Optional[ReleaseType] = None
    generated_at: datetime = Field(default_factory=lambda: datetime.now(tz.tzlocal()))

    @field_validator("version")
    @classmethod
    def check_version(cls, v):
        if not is_valid_version(v):
            raise ValueError("The version must be in the format x.x.x")
        return v

    @property
    def tag_name(self) -> str:
        return f"v{self.version}"


@dataclass
class StageResult:
    """Outcome of one pipeline stage or one output write."""

    stage: str
    ok: bool
    reason: Optional[str] = None
    path: Optional[Path] = None


@dataclass
class PipelineResult:
    state: PipelineState = PipelineState.IDLE
    stages: List[StageResult] = field(default_factory=list)
    document: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE

    def failures(self) -> List[StageResult]:
        return [stage for stage in self.stages if not stage.ok]
