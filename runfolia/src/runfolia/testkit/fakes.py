from __future__ import annotations

import errno
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from runfolia.contracts import BuildReference, DownloadStream, LaunchPlan, LinkMethod
from runfolia.errors import IndexRequestError


def build_entry(build: int, name: str) -> dict[str, Any]:
    """One entry of a builds listing, shaped like the PaperMC API."""
    return {
        "build": build,
        "channel": "default",
        "downloads": {"application": {"name": name, "sha256": "0" * 64}},
    }


class FakeBuildIndex:
    """
    In-memory BuildIndex.

    `payloads` maps a version to the raw builds listing returned for it;
    `downloads` maps a download file name to its bytes. `fail_after_bytes`
    makes every download stream break after that many bytes.
    """

    def __init__(
        self,
        payloads: Mapping[str, Any] | None = None,
        downloads: Mapping[str, bytes] | None = None,
        *,
        unreachable: bool = False,
        fail_after_bytes: int | None = None,
        chunk_size: int = 4,
        announce_length: bool = True,
    ) -> None:
        self.payloads = dict(payloads or {})
        self.downloads = dict(downloads or {})
        self.unreachable = unreachable
        self.fail_after_bytes = fail_after_bytes
        self.chunk_size = chunk_size
        self.announce_length = announce_length
        self.list_calls: list[str] = []
        self.download_calls: list[BuildReference] = []

    @property
    def network_calls(self) -> int:
        return len(self.list_calls) + len(self.download_calls)

    def list_builds(self, version: str) -> Any:
        self.list_calls.append(version)
        url = f"fake://builds/{version}"
        if self.unreachable:
            raise IndexRequestError(url, "connection refused")
        if version not in self.payloads:
            raise IndexRequestError(url, "404 Not Found")
        return self.payloads[version]

    def download_url(self, ref: BuildReference) -> str:
        return f"fake://builds/{ref.version}/{ref.build_number}/downloads/{ref.download_name}"

    @contextmanager
    def open_download(self, ref: BuildReference) -> Iterator[DownloadStream]:
        self.download_calls.append(ref)
        url = self.download_url(ref)
        if self.unreachable:
            raise IndexRequestError(url, "connection refused")
        try:
            data = self.downloads[ref.download_name]
        except KeyError as exc:
            raise IndexRequestError(url, "404 Not Found") from exc
        yield DownloadStream(
            url=url,
            chunks=self._chunks(url, data),
            total_bytes=len(data) if self.announce_length else None,
        )

    def _chunks(self, url: str, data: bytes) -> Iterator[bytes]:
        sent = 0
        for offset in range(0, len(data), self.chunk_size):
            if self.fail_after_bytes is not None and sent >= self.fail_after_bytes:
                raise IndexRequestError(url, "connection reset mid-stream")
            chunk = data[offset : offset + self.chunk_size]
            sent += len(chunk)
            yield chunk


class FailingLinkCapability:
    """Link capability for a filesystem that refuses every link."""

    def __init__(self, method: LinkMethod = "symlink") -> None:
        self.method = method
        self.attempts: list[tuple[Path, Path]] = []

    def link_method(self) -> LinkMethod:
        return self.method

    def create_link(self, method: LinkMethod, source: Path, destination: Path) -> None:
        self.attempts.append((source, destination))
        raise OSError(errno.EPERM, "linking not permitted", str(destination))


class SilentLinkCapability:
    """Link capability whose link calls report success but create nothing."""

    def __init__(self, method: LinkMethod = "hardlink") -> None:
        self.method = method

    def link_method(self) -> LinkMethod:
        return self.method

    def create_link(self, method: LinkMethod, source: Path, destination: Path) -> None:
        return None


class RecordingLauncher:
    """ProcessLauncher that records plans instead of starting processes."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.plans: list[LaunchPlan] = []

    def launch(self, plan: LaunchPlan) -> int:
        self.plans.append(plan)
        return self.exit_code
