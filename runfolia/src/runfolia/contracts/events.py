from __future__ import annotations

from typing import Protocol, runtime_checkable

from runfolia.errors import StagingWarning


@runtime_checkable
class RunEvents(Protocol):
    """
    Write-only sink for user-facing progress of a run.
    """

    def lifecycle(self, message: str) -> None:
        """Report a pipeline milestone."""
        ...

    def progress(self, done_bytes: int, total_bytes: int | None) -> None:
        """Report download progress."""
        ...

    def warning(self, warning: StagingWarning) -> None:
        """Report a non-fatal staging problem."""
        ...
