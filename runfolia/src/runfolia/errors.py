from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class IndexRequestError(RuntimeError):
    """Transport, HTTP status or payload decoding failure talking to the build index."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ResolutionError(RuntimeError):
    def __init__(self, version: str, reason: str) -> None:
        super().__init__(f"Cannot resolve a build for version {version}: {reason}")
        self.version = version
        self.reason = reason


class DownloadError(RuntimeError):
    def __init__(self, url: str, path: Path, reason: str) -> None:
        super().__init__(f"Download of {url} into {path} failed: {reason}")
        self.url = url
        self.path = path
        self.reason = reason


class LaunchError(RuntimeError):
    def __init__(self, command: Sequence[str], working_directory: Path, reason: str) -> None:
        super().__init__(
            f"Cannot start {' '.join(command)} in {working_directory}: {reason}"
        )
        self.command = tuple(command)
        self.working_directory = working_directory
        self.reason = reason


class StagingWarning(UserWarning):
    """
    Non-fatal staging problem.

    Emitted through the run events sink and collected on the run result;
    the pipeline never raises it.
    """

    def __init__(self, source: Path | None, destination: Path | None, reason: str) -> None:
        super().__init__(reason)
        self.source = source
        self.destination = destination
        self.reason = reason

    def __str__(self) -> str:
        if self.source is None:
            return self.reason
        return f"{self.source}: {self.reason}"
