from __future__ import annotations

import logging

from pydantic import ValidationError

from runfolia.contracts import BuildIndex, BuildReference, BuildsResponse
from runfolia.errors import IndexRequestError, ResolutionError

logger = logging.getLogger("runfolia.resolution")


class VersionResolver:
    """Pick the newest build of a release version from a build index."""

    def __init__(self, index: BuildIndex) -> None:
        self._index = index

    def resolve(self, version: str) -> BuildReference:
        try:
            payload = self._index.list_builds(version)
        except IndexRequestError as exc:
            raise ResolutionError(version, f"build index unreachable ({exc})") from exc

        try:
            response = BuildsResponse.model_validate(payload)
        except ValidationError as exc:
            raise ResolutionError(
                version, f"malformed build index response ({exc.error_count()} errors)"
            ) from exc

        if not response.builds:
            raise ResolutionError(version, "the build index lists no builds")

        latest = max(response.builds, key=lambda entry: entry.build)
        logger.debug(
            "Resolved %s to build %s out of %d builds", version, latest.build, len(response.builds)
        )
        return BuildReference(
            version=version,
            build_number=latest.build,
            download_name=latest.downloads.application.name,
        )
