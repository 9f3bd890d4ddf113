from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class LaunchPlan:
    working_directory: Path
    executable: str
    arguments: Sequence[str]

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.arguments]


@runtime_checkable
class ProcessLauncher(Protocol):
    def launch(self, plan: LaunchPlan) -> int:
        """
        Start the planned process, block until it exits and return its exit code.

        Raises LaunchError when the process cannot be started.
        """
        ...
