from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from runfolia.contracts.artifacts import LinkMethod


@runtime_checkable
class LinkCapability(Protocol):
    """
    Filesystem linking as seen by the stager.

    Lets tests swap in a filesystem where linking fails or is unsupported.
    """

    def link_method(self) -> LinkMethod:
        """Return the link kind this platform can create without elevated privileges."""
        ...

    def create_link(self, method: LinkMethod, source: Path, destination: Path) -> None:
        """Create `destination` as a link to `source`; raise OSError on failure."""
        ...
