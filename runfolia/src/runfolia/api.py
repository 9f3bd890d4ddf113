from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from runfolia.configuration import load_run_config
from runfolia.contracts import (
    BuildIndex,
    LinkCapability,
    ProcessLauncher,
    RunConfig,
    RunEvents,
    RunResult,
)
from runfolia.orchestration.orchestrator import Orchestrator
from runfolia.reporting import LoggingRunEvents
from runfolia.resolution.http_index import PaperBuildIndex
from runfolia.runtime.launcher import SubprocessLauncher
from runfolia.runtime.links import PlatformLinkCapability


def run_pipeline(
    config: RunConfig,
    *,
    index: BuildIndex | None = None,
    links: LinkCapability | None = None,
    launcher: ProcessLauncher | None = None,
    events: RunEvents | None = None,
    launch: bool = True,
) -> RunResult:
    """Resolve, fetch, stage and (unless `launch` is False) start the server for `config`."""
    orchestrator = Orchestrator.build(
        index=index or PaperBuildIndex.from_config(config),
        links=links or PlatformLinkCapability(probe_dir=config.run_directory),
        launcher=launcher or SubprocessLauncher(),
        events=events or LoggingRunEvents(),
    )
    logging.getLogger("runfolia.api").debug("Run config: %s", config.model_dump(mode="json"))
    return orchestrator.run(config, launch=launch)


def run_from_yaml(
    config_yaml: str | Path | None,
    *,
    overrides: Mapping[str, Any] | None = None,
    index: BuildIndex | None = None,
    links: LinkCapability | None = None,
    launcher: ProcessLauncher | None = None,
    events: RunEvents | None = None,
    launch: bool = True,
) -> RunResult:
    config = load_run_config(config_yaml, overrides=overrides)
    return run_pipeline(
        config,
        index=index,
        links=links,
        launcher=launcher,
        events=events,
        launch=launch,
    )

