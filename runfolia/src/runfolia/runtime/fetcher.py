from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from runfolia.contracts import BuildIndex, BuildReference, CachedArtifact, RunEvents
from runfolia.errors import DownloadError, IndexRequestError
from runfolia.runtime.layout import PARTIAL_SUFFIX, scavenge_partial_files

logger = logging.getLogger("runfolia.fetcher")


class ArtifactFetcher:
    """
    Download a server build into its cache location.

    The final path only ever receives a fully written file: bytes go to a
    temporary `.part` sibling which is renamed into place on success.
    """

    def __init__(self, index: BuildIndex, events: RunEvents) -> None:
        self._index = index
        self._events = events

    def fetch(
        self,
        ref: BuildReference,
        destination: Path,
        force_refetch: bool = False,
    ) -> CachedArtifact:
        if destination.is_file() and not force_refetch:
            self._events.lifecycle(f"Using cached {ref.version} server jar: {destination}")
            return CachedArtifact(path=destination, version=ref.version, fetched=False)

        url = self._index.download_url(ref)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DownloadError(url, destination, f"cannot create directory: {exc}") from exc

        for stale in scavenge_partial_files(destination):
            logger.debug("Removed stale partial download %s", stale)

        self._events.lifecycle(
            f"Downloading {ref.version} build {ref.build_number} -> {destination}"
        )
        partial = self._download_to_partial(ref, url, destination)
        try:
            os.replace(partial, destination)
        except OSError as exc:
            _discard(partial)
            raise DownloadError(url, destination, f"cannot move download into place: {exc}") from exc

        return CachedArtifact(
            path=destination,
            version=ref.version,
            build_number=ref.build_number,
            fetched=True,
        )

    def _download_to_partial(self, ref: BuildReference, url: str, destination: Path) -> Path:
        try:
            fd, name = tempfile.mkstemp(
                dir=destination.parent,
                prefix=f".{destination.name}.",
                suffix=PARTIAL_SUFFIX,
            )
        except OSError as exc:
            raise DownloadError(url, destination, f"destination not writable: {exc}") from exc

        partial = Path(name)
        try:
            with os.fdopen(fd, "wb") as handle, self._index.open_download(ref) as stream:
                done = 0
                for chunk in stream.chunks:
                    handle.write(chunk)
                    done += len(chunk)
                    self._events.progress(done, stream.total_bytes)
            if stream.total_bytes is not None and done != stream.total_bytes:
                raise DownloadError(
                    url,
                    destination,
                    f"received {done} of {stream.total_bytes} bytes",
                )
        except DownloadError:
            _discard(partial)
            raise
        except (IndexRequestError, OSError) as exc:
            _discard(partial)
            raise DownloadError(url, destination, str(exc)) from exc
        return partial


def _discard(partial: Path) -> None:
    try:
        partial.unlink(missing_ok=True)
    except OSError:
        logger.warning("Failed to remove partial download %s", partial, exc_info=True)
