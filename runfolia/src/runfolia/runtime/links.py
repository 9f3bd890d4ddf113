from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from runfolia.contracts import LinkMethod

logger = logging.getLogger("runfolia.links")


class PlatformLinkCapability:
    """
    Link creation backed by the real filesystem.

    Symlinks are used when the process may create them; otherwise (e.g.
    Windows without Developer Mode) hard links, which need no privilege.
    The choice comes from a one-time probe, not from the OS name.
    """

    def __init__(self, probe_dir: Path | None = None) -> None:
        self._probe_dir = probe_dir
        self._method: LinkMethod | None = None

    def link_method(self) -> LinkMethod:
        if self._method is None:
            self._method = "symlink" if self._can_symlink() else "hardlink"
            logger.debug("Link method selected by probe: %s", self._method)
        return self._method

    def create_link(self, method: LinkMethod, source: Path, destination: Path) -> None:
        target = source.resolve()
        if method == "symlink":
            os.symlink(target, destination)
        else:
            os.link(target, destination)

    def _can_symlink(self) -> bool:
        try:
            with tempfile.TemporaryDirectory(prefix="runfolia-probe-", dir=self._probe_dir) as tmp:
                target = Path(tmp) / "target"
                target.write_bytes(b"")
                link = Path(tmp) / "link"
                os.symlink(target, link)
                return link.is_symlink()
        except (OSError, NotImplementedError):
            return False
