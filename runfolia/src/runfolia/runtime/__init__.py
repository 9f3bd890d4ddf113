"""Filesystem and process side of a run: fetch, stage, launch."""

from runfolia.runtime.fetcher import ArtifactFetcher
from runfolia.runtime.launcher import SubprocessLauncher
from runfolia.runtime.layout import clean_cache, detect_primary_artifact, resolve_primary_artifact
from runfolia.runtime.links import PlatformLinkCapability
from runfolia.runtime.staging import ArtifactStager

__all__ = [
    "ArtifactFetcher",
    "ArtifactStager",
    "PlatformLinkCapability",
    "SubprocessLauncher",
    "clean_cache",
    "detect_primary_artifact",
    "resolve_primary_artifact",
]
