from __future__ import annotations

import logging
from pathlib import Path

from runfolia.contracts import RunConfig

PARTIAL_SUFFIX = ".part"
_SKIPPED_CLASSIFIERS = ("-sources", "-javadoc")

logger = logging.getLogger("runfolia.layout")


def partial_files(destination: Path) -> list[Path]:
    """Leftover temporary downloads for `destination` (see ArtifactFetcher)."""
    if not destination.parent.is_dir():
        return []
    return sorted(destination.parent.glob(f".{destination.name}.*{PARTIAL_SUFFIX}"))


def scavenge_partial_files(destination: Path) -> list[Path]:
    removed: list[Path] = []
    for stale in partial_files(destination):
        try:
            stale.unlink()
        except OSError:
            logger.warning("Failed to remove stale partial download %s", stale, exc_info=True)
            continue
        removed.append(stale)
    return removed


def detect_primary_artifact(search_dir: Path) -> Path | None:
    """
    Find the plugin jar produced by the build.

    A shadow jar (`*-all.jar`) wins over plain jars; ties go to the newest file.
    """
    if not search_dir.is_dir():
        return None
    candidates = [
        path
        for path in search_dir.glob("*.jar")
        if path.is_file() and not path.stem.endswith(_SKIPPED_CLASSIFIERS)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda path: (path.stem.endswith("-all"), path.stat().st_mtime))


def resolve_primary_artifact(config: RunConfig) -> Path | None:
    if config.plugin_jar is not None:
        return config.plugin_jar
    return detect_primary_artifact(config.plugin_search_dir)


def clean_cache(config: RunConfig) -> list[Path]:
    """Remove the cached server jar of the configured version and its partial downloads."""
    destination = config.server_jar_path
    removed = scavenge_partial_files(destination)
    if destination.is_file():
        destination.unlink()
        removed.append(destination)
    return removed
