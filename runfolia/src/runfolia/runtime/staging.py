from __future__ import annotations

import errno
import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from runfolia.contracts import LinkCapability, RunEvents, StagedArtifact, StageReport
from runfolia.errors import StagingWarning

logger = logging.getLogger("runfolia.staging")


class ArtifactStager:
    """
    Place jars into a staging directory, linking when possible.

    Existing files under the destination name are always replaced. A failed
    link degrades to a copy with a StagingWarning; only a failed copy raises.
    """

    def __init__(self, links: LinkCapability, events: RunEvents) -> None:
        self._links = links
        self._events = events

    def stage(self, source: Path, staging_dir: Path, prefer_link: bool = True) -> StagedArtifact:
        """
        Stage one artifact.

        Raises OSError when the source is missing or the copy fallback fails.
        """
        return self._stage(source, staging_dir, prefer_link, warnings=[])

    def stage_all(
        self,
        sources: Iterable[Path],
        staging_dir: Path,
        prefer_link: bool = True,
    ) -> StageReport:
        """Stage each source independently; a failing item becomes a warning."""
        staged: list[StagedArtifact] = []
        warnings: list[StagingWarning] = []
        for source in sources:
            try:
                staged.append(self._stage(source, staging_dir, prefer_link, warnings=warnings))
            except OSError as exc:
                warnings.append(
                    self._warn(source, staging_dir / source.name, f"not staged: {exc}")
                )
        return StageReport(staged=tuple(staged), warnings=tuple(warnings))

    def _stage(
        self,
        source: Path,
        staging_dir: Path,
        prefer_link: bool,
        *,
        warnings: list[StagingWarning],
    ) -> StagedArtifact:
        if not source.is_file():
            raise FileNotFoundError(errno.ENOENT, "source artifact not found", str(source))

        staging_dir.mkdir(parents=True, exist_ok=True)
        destination = staging_dir / source.name
        if destination.absolute() == source.absolute():
            return StagedArtifact(source=source, destination=destination, method="copy")
        _remove_existing(destination)

        if prefer_link:
            method = self._links.link_method()
            try:
                self._links.create_link(method, source, destination)
            except OSError as exc:
                reason = f"{method} failed ({exc}), copying instead"
            else:
                if destination.exists():
                    logger.debug("Staged %s via %s", destination, method)
                    return StagedArtifact(source=source, destination=destination, method=method)
                reason = f"{method} produced no file, copying instead"
            warnings.append(self._warn(source, destination, reason))

        _remove_existing(destination)
        shutil.copyfile(source, destination)
        logger.debug("Staged %s via copy", destination)
        return StagedArtifact(source=source, destination=destination, method="copy")

    def _warn(self, source: Path, destination: Path, reason: str) -> StagingWarning:
        warning = StagingWarning(source, destination, reason)
        self._events.warning(warning)
        return warning


def _remove_existing(destination: Path) -> None:
    # is_symlink() catches dangling links that exists() reports as missing
    if destination.is_symlink() or destination.is_file():
        destination.unlink()
