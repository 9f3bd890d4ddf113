from __future__ import annotations

from pathlib import Path

from runfolia.contracts import LICENSE_ACCEPT_FLAG, CachedArtifact, LaunchPlan, RunConfig

JAR_FLAG = "-jar"


class LaunchPlanner:
    """
    Build the `java [jvm options] -jar <server jar> [server args]` command.

    Pure: no filesystem or process access.
    """

    def plan(
        self,
        cached_artifact: CachedArtifact,
        run_directory: Path,
        config: RunConfig,
    ) -> LaunchPlan:
        process_args: list[str] = []
        if config.auto_accept_license:
            process_args.append(LICENSE_ACCEPT_FLAG)
        process_args.extend(
            arg
            for arg in config.extra_process_args
            if not (config.auto_accept_license and arg == LICENSE_ACCEPT_FLAG)
        )

        # relative to working_directory
        arguments = [
            *process_args,
            JAR_FLAG,
            cached_artifact.path.name,
            *config.extra_server_args,
        ]
        return LaunchPlan(
            working_directory=run_directory,
            executable=config.java_executable,
            arguments=tuple(arguments),
        )
