from __future__ import annotations

import logging
import subprocess

from runfolia.contracts import LaunchPlan
from runfolia.errors import LaunchError

logger = logging.getLogger("runfolia.launcher")


class SubprocessLauncher:
    """Run the server in the foreground, sharing this process's console."""

    def launch(self, plan: LaunchPlan) -> int:
        command = plan.command
        logger.info("Starting %s in %s", " ".join(command), plan.working_directory)
        try:
            completed = subprocess.run(command, cwd=plan.working_directory, check=False)
        except OSError as exc:
            raise LaunchError(command, plan.working_directory, str(exc)) from exc
        logger.info("Server exited with code %s", completed.returncode)
        return completed.returncode
