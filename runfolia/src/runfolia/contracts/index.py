from __future__ import annotations

from collections.abc import Iterable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from runfolia.contracts.builds import BuildReference


@dataclass(frozen=True, slots=True)
class DownloadStream:
    url: str
    chunks: Iterable[bytes]
    # None when the server sends no Content-Length
    total_bytes: int | None = None


@runtime_checkable
class BuildIndex(Protocol):
    """
    Read-only client for a remote build index.

    Implementations raise IndexRequestError for transport, HTTP status and
    JSON decoding failures. Schema validation is left to the caller.
    """

    def list_builds(self, version: str) -> Any:
        """Return the decoded JSON payload of the builds listing for `version`."""
        ...

    def download_url(self, ref: BuildReference) -> str:
        """Return the URL of the primary download of a build."""
        ...

    def open_download(self, ref: BuildReference) -> AbstractContextManager[DownloadStream]:
        """Open a streaming download; the stream is closed when the context exits."""
        ...
