from __future__ import annotations

import logging

from runfolia.errors import StagingWarning


class LoggingRunEvents:
    """
    RunEvents sink writing to the `runfolia.events` logger.

    Download progress is logged at every `progress_step_percent` boundary
    (or every `progress_step_bytes` when the size is unknown) at DEBUG.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        progress_step_percent: int = 10,
        progress_step_bytes: int = 8 * 1024 * 1024,
    ) -> None:
        self._logger = logger or logging.getLogger("runfolia.events")
        self._step_percent = progress_step_percent
        self._step_bytes = progress_step_bytes
        self._last_bucket = -1

    def lifecycle(self, message: str) -> None:
        self._logger.info(message)
        self._last_bucket = -1

    def progress(self, done_bytes: int, total_bytes: int | None) -> None:
        if total_bytes:
            bucket = min(100, done_bytes * 100 // total_bytes) // self._step_percent
        else:
            bucket = done_bytes // self._step_bytes
        if bucket == self._last_bucket:
            return
        self._last_bucket = bucket
        if total_bytes:
            self._logger.debug(
                "Downloaded %s / %s (%d%%)",
                human_readable_size(done_bytes),
                human_readable_size(total_bytes),
                done_bytes * 100 // total_bytes,
            )
        else:
            self._logger.debug("Downloaded %s", human_readable_size(done_bytes))

    def warning(self, warning: StagingWarning) -> None:
        self._logger.warning("%s", warning)


def human_readable_size(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    size = n / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"
