from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from runfolia.errors import StagingWarning

StageMethod = Literal["hardlink", "symlink", "copy"]
LinkMethod = Literal["hardlink", "symlink"]


@dataclass(frozen=True, slots=True)
class CachedArtifact:
    """On-disk server jar for one version inside the run directory."""

    path: Path
    version: str
    build_number: int | None = None
    # False on a cache hit
    fetched: bool = False


@dataclass(frozen=True, slots=True)
class StagedArtifact:
    source: Path
    destination: Path
    method: StageMethod


@dataclass(frozen=True, slots=True)
class StageReport:
    staged: Sequence[StagedArtifact] = field(default_factory=tuple)
    warnings: Sequence[StagingWarning] = field(default_factory=tuple)
