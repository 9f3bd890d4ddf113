"""Fakes for exercising a run without network, links or Java."""

from .fakes import (
    FailingLinkCapability,
    FakeBuildIndex,
    RecordingLauncher,
    SilentLinkCapability,
    build_entry,
)

__all__ = [
    "FailingLinkCapability",
    "FakeBuildIndex",
    "RecordingLauncher",
    "SilentLinkCapability",
    "build_entry",
]
