from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from runfolia.contracts import (
    BuildIndex,
    LinkCapability,
    ProcessLauncher,
    RunConfig,
    RunEvents,
    RunResult,
    StagedArtifact,
)
from runfolia.errors import StagingWarning
from runfolia.orchestration.planner import LaunchPlanner
from runfolia.resolution.resolver import VersionResolver
from runfolia.runtime.fetcher import ArtifactFetcher
from runfolia.runtime.layout import resolve_primary_artifact
from runfolia.runtime.staging import ArtifactStager


@dataclass
class Orchestrator:
    """
    Sequence resolve -> fetch -> stage -> plan -> launch for one run.

    ResolutionError, DownloadError and LaunchError propagate unchanged and
    stop the pipeline; staging problems only add warnings.
    """

    resolver: VersionResolver
    fetcher: ArtifactFetcher
    stager: ArtifactStager
    planner: LaunchPlanner
    launcher: ProcessLauncher
    events: RunEvents

    @classmethod
    def build(
        cls,
        *,
        index: BuildIndex,
        links: LinkCapability,
        launcher: ProcessLauncher,
        events: RunEvents,
    ) -> Orchestrator:
        return cls(
            resolver=VersionResolver(index),
            fetcher=ArtifactFetcher(index, events),
            stager=ArtifactStager(links, events),
            planner=LaunchPlanner(),
            launcher=launcher,
            events=events,
        )

    def run(self, config: RunConfig, *, launch: bool = True) -> RunResult:
        start = datetime.now(UTC)

        self.events.lifecycle(f"Resolving {config.project} {config.version}")
        build = self.resolver.resolve(config.version)
        self.events.lifecycle(f"Latest build for {build.version}: {build.build_number}")

        server_jar = self.fetcher.fetch(build, config.server_jar_path, config.force_refetch)

        staged: list[StagedArtifact] = []
        warnings: list[StagingWarning] = []

        primary = resolve_primary_artifact(config)
        if primary is None:
            warning = StagingWarning(
                None,
                None,
                f"no plugin jar configured or found in {config.plugin_search_dir}",
            )
            self.events.warning(warning)
            warnings.append(warning)
        else:
            report = self.stager.stage_all(
                [primary], config.plugins_directory, config.prefer_linking
            )
            staged.extend(report.staged)
            warnings.extend(report.warnings)

        if config.plugins:
            report = self.stager.stage_all(
                config.plugins, config.plugins_directory, config.prefer_linking
            )
            staged.extend(report.staged)
            warnings.extend(report.warnings)

        for item in staged:
            self.events.lifecycle(f"Staged plugin ({item.method}): {item.destination}")

        plan = self.planner.plan(server_jar, config.run_directory, config)

        exit_code: int | None = None
        if launch:
            self.events.lifecycle(f"Launching: {' '.join(plan.command)}")
            exit_code = self.launcher.launch(plan)

        end = datetime.now(UTC)
        return RunResult(
            status="launched" if launch else "planned",
            version=config.version,
            build=build,
            server_jar=server_jar,
            plan=plan,
            started_at_utc=start.isoformat(),
            ended_at_utc=end.isoformat(),
            duration_s=(end - start).total_seconds(),
            staged=tuple(staged),
            warnings=tuple(warnings),
            exit_code=exit_code,
        )
