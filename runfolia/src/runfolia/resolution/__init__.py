"""Build index access and version resolution."""

from runfolia.resolution.http_index import PaperBuildIndex
from runfolia.resolution.resolver import VersionResolver

__all__ = ["PaperBuildIndex", "VersionResolver"]
