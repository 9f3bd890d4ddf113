from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from runfolia.errors import StagingWarning


@dataclass(frozen=True, slots=True)
class EventCall:
    """Record of a RunEvents call for assertions in tests."""

    name: str
    kwargs: dict[str, Any]


class FakeRunEvents:
    """
    In-memory RunEvents for unit tests.
    """

    def __init__(self) -> None:
        self._calls: list[EventCall] = []

    @property
    def calls(self) -> list[EventCall]:
        """Return the recorded calls in order."""
        return list(self._calls)

    @property
    def messages(self) -> list[str]:
        return [call.kwargs["message"] for call in self._calls if call.name == "lifecycle"]

    @property
    def warnings(self) -> list[StagingWarning]:
        return [call.kwargs["warning"] for call in self._calls if call.name == "warning"]

    def lifecycle(self, message: str) -> None:
        self._record("lifecycle", message=message)

    def progress(self, done_bytes: int, total_bytes: int | None) -> None:
        self._record("progress", done_bytes=done_bytes, total_bytes=total_bytes)

    def warning(self, warning: StagingWarning) -> None:
        self._record("warning", warning=warning)

    def _record(self, name: str, **kwargs: Any) -> None:
        self._calls.append(EventCall(name=name, kwargs=kwargs))
