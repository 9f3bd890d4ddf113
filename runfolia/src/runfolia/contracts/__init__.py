from .artifacts import CachedArtifact, LinkMethod, StagedArtifact, StageMethod, StageReport
from .builds import BuildReference, BuildsResponse
from .events import RunEvents
from .filesystem import LinkCapability
from .index import BuildIndex, DownloadStream
from .launch import LaunchPlan, ProcessLauncher
from .run_contracts import (
    DEFAULT_API_BASE_URL,
    LICENSE_ACCEPT_FLAG,
    RunConfig,
    RunResult,
    RunStatus,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "LICENSE_ACCEPT_FLAG",
    "BuildIndex",
    "BuildReference",
    "BuildsResponse",
    "CachedArtifact",
    "DownloadStream",
    "LaunchPlan",
    "LinkCapability",
    "LinkMethod",
    "ProcessLauncher",
    "RunConfig",
    "RunEvents",
    "RunResult",
    "RunStatus",
    "StageMethod",
    "StageReport",
    "StagedArtifact",
]
