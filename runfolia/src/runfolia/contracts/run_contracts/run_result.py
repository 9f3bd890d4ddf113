from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from runfolia.contracts.artifacts import CachedArtifact, StagedArtifact
from runfolia.contracts.builds import BuildReference
from runfolia.contracts.launch import LaunchPlan
from runfolia.errors import StagingWarning

RunStatus = Literal["launched", "planned"]


@dataclass(frozen=True, slots=True)
class RunResult:
    """
    Outcome of one pipeline run.

    Fatal failures raise instead of producing a result.
    """

    status: RunStatus
    version: str
    build: BuildReference
    server_jar: CachedArtifact
    plan: LaunchPlan

    started_at_utc: str
    ended_at_utc: str
    duration_s: float

    staged: Sequence[StagedArtifact] = field(default_factory=tuple)
    warnings: Sequence[StagingWarning] = field(default_factory=tuple)

    # None when the launch step was skipped
    exit_code: int | None = None
